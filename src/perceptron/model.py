"""Single-neuron binary classifier.

A :class:`Perceptron` predicts ``+1`` or ``-1`` from the sign of
``dot(inputs, weights) + bias`` and learns one labeled example at a time with
the classical perceptron rule.
"""

from __future__ import annotations

import random
from collections.abc import Mapping, Sequence
from numbers import Integral
from typing import Any, List, Optional, Protocol

from .errors import InvalidArgument
from .state import PerceptronState, is_number, is_vector, validate_state

LABELS = (-1, 1)


class RandomSource(Protocol):
    def random(self) -> float: ...


def uniform_weight(rng: Optional[RandomSource] = None) -> float:
    """Return one value drawn uniformly from ``[-1, 1)``."""
    source = rng if rng is not None else random
    return source.random() * 2 - 1


def activation(score: float) -> int:
    """Sign activation; a score of exactly zero maps to the positive class."""
    if score >= 0:
        return 1
    return -1


def dot_product(inputs: Sequence[float], weights: Sequence[float]) -> float:
    return sum(i * w for i, w in zip(inputs, weights))


def _check_learning_rate(rate: Any) -> float:
    if not is_number(rate):
        raise InvalidArgument(f"Learning rate must be a number, got {type(rate).__name__}")
    if not 0 < rate <= 1:
        raise InvalidArgument(f"Learning rate must be in (0, 1], got {rate}")
    return float(rate)


def _check_number(name: str, value: Any) -> float:
    if not is_number(value):
        raise InvalidArgument(f"{name} must be a number, got {type(value).__name__}")
    return float(value)


class Perceptron:
    """Linear binary classifier with a weight vector and bias.

    Args:
        dimension: length of every input vector; fixed for the life of the model.
        bias: initial bias.
        learning_rate: weight step size, in ``(0, 1]``.
        rng: source of uniform ``[0, 1)`` floats used to seed the weights
            (anything with a ``random()`` method, e.g. ``random.Random(7)``).
            Defaults to the process-wide generator.

    Instances are not safe for concurrent mutation; callers sharing one model
    across threads must serialize access themselves.
    """

    def __init__(
        self,
        dimension: int,
        bias: float = 1.0,
        learning_rate: float = 0.5,
        *,
        rng: Optional[RandomSource] = None,
    ) -> None:
        if not isinstance(dimension, Integral) or isinstance(dimension, bool):
            raise InvalidArgument(f"Dimension must be an integer, got {type(dimension).__name__}")
        if dimension < 1:
            raise InvalidArgument(f"Dimension must be >= 1, got {dimension}")
        self._learning_rate = _check_learning_rate(learning_rate)
        self._bias = _check_number("Bias", bias)
        self._dimension = int(dimension)
        self._weights: List[float] = [uniform_weight(rng) for _ in range(self._dimension)]

        self._iterations = 0
        self._error_sum = 0.0
        self._iteration_error = 0.0
        self._output: Optional[int] = None

    def __repr__(self) -> str:
        return (
            f"Perceptron(dimension={self._dimension}, bias={self._bias:.4g}, "
            f"learning_rate={self._learning_rate:.4g}, iterations={self._iterations})"
        )

    # ------------------------------------------------------------------
    # Prediction and training
    # ------------------------------------------------------------------

    def _check_inputs(self, inputs: Any) -> None:
        if not is_vector(inputs):
            raise InvalidArgument("Inputs must be a sequence of numbers")
        if len(inputs) != self._dimension:
            raise InvalidArgument(
                f"Expected {self._dimension} inputs, got {len(inputs)}",
                details={"expected": self._dimension, "actual": len(inputs)},
            )

    def predict(self, inputs: Sequence[float]) -> int:
        """Return ``+1`` or ``-1`` for ``inputs`` and remember it as :attr:`output`."""
        self._check_inputs(inputs)
        score = dot_product(inputs, self._weights) + self._bias
        self._output = activation(score)
        return self._output

    def train(self, inputs: Sequence[float], label: float) -> None:
        """Apply one perceptron update for a labeled example.

        The bias moves by the raw error ``label - output``; only the weights are
        scaled by the learning rate.
        """
        if not is_number(label) or label not in LABELS:
            raise InvalidArgument(f"Label must be -1 or 1, got {label!r}", details={"label": label})
        self._check_inputs(inputs)

        self._iterations += 1
        output = self.predict(inputs)
        error = label - output
        for i in range(self._dimension):
            self._weights[i] += self._learning_rate * error * inputs[i]
        self._bias += error
        self._error_sum += error
        self._iteration_error = self._error_sum / self._iterations

    # ------------------------------------------------------------------
    # Checkpoints
    # ------------------------------------------------------------------

    def save_state(self) -> PerceptronState:
        return PerceptronState(
            bias=self._bias,
            learning_rate=self._learning_rate,
            dimension=self._dimension,
            weights=tuple(self._weights),
        )

    def load_state(self, record: PerceptronState | Mapping[str, Any]) -> None:
        """Replace bias, learning rate, dimension and weights from a checkpoint.

        Training counters are left as they are.
        """
        state = validate_state(record)
        self._bias = state.bias
        self._learning_rate = state.learning_rate
        self._dimension = state.dimension
        self._weights = list(state.weights)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_weights(self) -> List[float]:
        return list(self._weights)

    def set_weights(self, weights: Sequence[float]) -> None:
        if not is_vector(weights):
            raise InvalidArgument("Weights must be a sequence of numbers")
        if len(weights) != self._dimension:
            raise InvalidArgument(f"Expected {self._dimension} weights, got {len(weights)}")
        self._weights = [float(w) for w in weights]

    def get_bias(self) -> float:
        return self._bias

    def set_bias(self, bias: float) -> None:
        self._bias = _check_number("Bias", bias)

    def get_learning_rate(self) -> float:
        return self._learning_rate

    def set_learning_rate(self, rate: float) -> None:
        self._learning_rate = _check_learning_rate(rate)

    weights = property(get_weights, set_weights)
    bias = property(get_bias, set_bias)
    learning_rate = property(get_learning_rate, set_learning_rate)

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def iterations(self) -> int:
        return self._iterations

    @property
    def error_sum(self) -> float:
        return self._error_sum

    @property
    def iteration_error(self) -> float:
        return self._iteration_error

    @property
    def output(self) -> Optional[int]:
        """Most recent prediction, ``None`` until :meth:`predict` or :meth:`train` runs."""
        return self._output
