from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, asdict
from typing import Any, Callable
import os

from .errors import InvalidArgument


@dataclass
class Settings:
    """Training defaults with environment overlay.

    The model constructor keeps its own literal defaults; these values feed the
    training driver and the command line.
    """

    # model construction
    bias: float = 1.0
    learning_rate: float = 0.5
    seed: int | None = None

    # training loop
    epochs: int = 50
    tolerance: float | None = None


_global_settings = Settings()
_stack: list[Settings] = []

_ENV_VARS = {
    "bias": ("PERCEPTRON_BIAS", float),
    "learning_rate": ("PERCEPTRON_LEARNING_RATE", float),
    "seed": ("PERCEPTRON_SEED", int),
    "epochs": ("PERCEPTRON_EPOCHS", int),
}


def _env_value(name: str, cast: Callable[[str], Any], default: Any) -> Any:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise InvalidArgument(
            f"Environment variable {name}={raw!r} is not a valid {cast.__name__}",
            code="invalid_env",
            details={"variable": name},
        ) from exc


def _from_env(s: Settings) -> Settings:
    overlay = {
        field: _env_value(var, cast, getattr(s, field))
        for field, (var, cast) in _ENV_VARS.items()
    }
    return Settings(**{**asdict(s), **overlay})


def configure(**kwargs: Any) -> None:
    """Configure global defaults.

    Example:
        configure(epochs=100, seed=7)
    """
    global _global_settings
    for k, v in kwargs.items():
        if not hasattr(_global_settings, k):
            raise AttributeError(f"Unknown setting: {k}")
        setattr(_global_settings, k, v)


@contextmanager
def config(**kwargs: Any):
    """Temporarily apply settings within a context."""
    global _global_settings
    _stack.append(Settings(**asdict(_global_settings)))
    try:
        configure(**kwargs)
        yield
    finally:
        prev = _stack.pop()
        _global_settings = prev


def settings() -> Settings:
    """Return the effective merged settings (env overlaid on current)."""
    return _from_env(_global_settings)
