class PerceptronError(Exception):
    """Base error for perceptron exceptions (model/runtime)."""

    def __init__(self, message: str = "", code: str | None = None, details: dict | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class InvalidArgument(PerceptronError, ValueError):
    """A value was rejected by a model, record, or dataset check."""

    def __init__(self, message: str = "", code: str | None = "invalid_argument", details: dict | None = None) -> None:
        super().__init__(message, code=code, details=details)


class StorageError(PerceptronError):
    """Saved model state could not be read or written."""

    pass
