"""Model checkpoint record.

The record carries what a trained model needs to predict again, and nothing
about the session that trained it:

    {"bias": float, "learningRate": float, "dimension": int, "weights": [float, ...]}

Iteration and error counters are deliberately absent; a restored model starts
a fresh error history.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from numbers import Integral, Real
from typing import Any, Tuple

from .errors import InvalidArgument

# wire key -> attribute name
_FIELDS = {
    "bias": "bias",
    "learningRate": "learning_rate",
    "dimension": "dimension",
    "weights": "weights",
}


def is_number(value: Any) -> bool:
    # bool is an Integral; True is not a weight
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def is_vector(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes)) and all(is_number(v) for v in value)


@dataclass(frozen=True)
class PerceptronState:
    bias: float
    learning_rate: float
    dimension: int
    weights: Tuple[float, ...]

    def __repr__(self) -> str:  # stable and concise
        coords = ", ".join(f"{w:.4g}" for w in self.weights[:4])
        if len(self.weights) > 4:
            coords += ", …"
        return (
            f"PerceptronState(dimension={self.dimension}, bias={self.bias:.4g}, "
            f"learning_rate={self.learning_rate:.4g}, weights=[{coords}])"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "bias": self.bias,
            "learningRate": self.learning_rate,
            "dimension": self.dimension,
            "weights": list(self.weights),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PerceptronState":
        return validate_state(data)


def _invalid(field: str, message: str) -> InvalidArgument:
    return InvalidArgument(f"Invalid state field {field!r}: {message}", code="invalid_state", details={"field": field})


def _lookup(record: Mapping[str, Any], key: str) -> Any:
    attr = _FIELDS[key]
    if key in record:
        return record[key]
    if attr in record:
        return record[attr]
    raise _invalid(key, "missing")


def validate_state(record: PerceptronState | Mapping[str, Any]) -> PerceptronState:
    """Check a checkpoint record and return it as a :class:`PerceptronState`.

    Accepts a ``PerceptronState`` or a mapping keyed by either the wire names
    (``learningRate``) or the attribute names (``learning_rate``).
    """

    if isinstance(record, PerceptronState):
        record = record.to_dict()
    if not isinstance(record, Mapping):
        raise InvalidArgument(
            f"State record must be a mapping, got {type(record).__name__}", code="invalid_state"
        )

    bias = _lookup(record, "bias")
    if not is_number(bias):
        raise _invalid("bias", "expected a number")

    rate = _lookup(record, "learningRate")
    if not is_number(rate):
        raise _invalid("learningRate", "expected a number")
    if not 0 < rate <= 1:
        raise _invalid("learningRate", f"must be in (0, 1], got {rate}")

    dimension = _lookup(record, "dimension")
    if not isinstance(dimension, Integral) or isinstance(dimension, bool):
        raise _invalid("dimension", "expected an integer")
    if dimension < 1:
        raise _invalid("dimension", f"must be >= 1, got {dimension}")

    weights = _lookup(record, "weights")
    if not is_vector(weights):
        raise _invalid("weights", "expected a sequence of numbers")
    if len(weights) != dimension:
        raise _invalid("weights", f"expected {dimension} values, got {len(weights)}")

    return PerceptronState(
        bias=float(bias),
        learning_rate=float(rate),
        dimension=int(dimension),
        weights=tuple(float(w) for w in weights),
    )
