"""JSON persistence for model checkpoints."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from .errors import StorageError
from .model import Perceptron, RandomSource
from .state import PerceptronState, validate_state

logger = logging.getLogger(__name__)


def save_model(model: Perceptron | PerceptronState, path: str | Path) -> Path:
    """Write the checkpoint record of ``model`` to ``path`` as JSON."""
    state = model.save_state() if isinstance(model, Perceptron) else model
    output_path = Path(path)
    try:
        payload = json.dumps(state.to_dict(), indent=2, allow_nan=False)
    except ValueError as exc:
        raise StorageError(
            f"Model state has non-finite values and cannot be saved to {output_path}",
            code="malformed_state",
            details={"path": str(output_path)},
        ) from exc
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise StorageError(
            f"Could not write model to {output_path}: {exc.strerror or exc}",
            code="write_failed",
            details={"path": str(output_path)},
        ) from exc
    logger.debug("saved %d-dimensional model to %s", state.dimension, output_path)
    return output_path


def read_state(path: str | Path) -> PerceptronState:
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise StorageError(f"No saved model at {source}", code="not_found", details={"path": str(source)}) from exc
    except OSError as exc:
        raise StorageError(
            f"Could not read model at {source}: {exc.strerror or exc}",
            code="read_failed",
            details={"path": str(source)},
        ) from exc
    except UnicodeDecodeError as exc:
        raise StorageError(
            f"Saved model at {source} is not UTF-8 text",
            code="malformed_state",
            details={"path": str(source)},
        ) from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StorageError(
            f"Saved model at {source} is not valid JSON: {exc.msg}",
            code="malformed_state",
            details={"path": str(source)},
        ) from exc
    if not isinstance(data, dict):
        raise StorageError(
            f"Saved model at {source} must be a JSON object",
            code="malformed_state",
            details={"path": str(source)},
        )
    return validate_state(data)


def load_model(path: str | Path, *, rng: Optional[RandomSource] = None) -> Perceptron:
    """Rebuild a model from a checkpoint file.

    The returned model has fresh training counters.
    """
    state = read_state(path)
    model = Perceptron(state.dimension, bias=state.bias, learning_rate=state.learning_rate, rng=rng)
    model.load_state(state)
    logger.debug("loaded %d-dimensional model from %s", state.dimension, path)
    return model
