"""Epoch-based training driver.

The model itself only knows how to learn from one example; :func:`fit` decides
the order of examples and when to stop.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from .config import settings
from .datasets import Example
from .errors import InvalidArgument
from .model import Perceptron

logger = logging.getLogger(__name__)


@dataclass
class TrainingReport:
    epochs: int
    converged: bool
    mistakes: List[int] = field(default_factory=list)
    iterations: int = 0
    iteration_error: float = 0.0


def fit(
    model: Perceptron,
    examples: Sequence[Example],
    *,
    epochs: Optional[int] = None,
    shuffle: bool = False,
    rng: Optional[random.Random] = None,
    tolerance: Optional[float] = None,
    callback: Optional[Callable[[int, int], None]] = None,
) -> TrainingReport:
    """Train ``model`` over ``examples`` for up to ``epochs`` passes.

    Stops after the first pass without a misclassification, or once
    ``abs(model.iteration_error) <= tolerance`` when a tolerance is given.
    Mistakes are counted against the prediction made before each update.
    """
    cfg = settings()
    epochs = cfg.epochs if epochs is None else epochs
    tolerance = cfg.tolerance if tolerance is None else tolerance
    if isinstance(epochs, bool) or not isinstance(epochs, int) or epochs < 1:
        raise InvalidArgument(f"Epochs must be a positive integer, got {epochs!r}")
    if not examples:
        raise InvalidArgument("Cannot train on an empty dataset", code="invalid_dataset")

    order = list(examples)
    shuffler = rng if rng is not None else random
    report = TrainingReport(epochs=0, converged=False)

    for epoch in range(1, epochs + 1):
        if shuffle:
            shuffler.shuffle(order)
        mistakes = 0
        for example in order:
            model.train(example.inputs, example.label)
            if model.output != example.label:
                mistakes += 1
        report.epochs = epoch
        report.mistakes.append(mistakes)
        logger.debug(
            "epoch %d: %d mistake(s), iteration error %.6f", epoch, mistakes, model.iteration_error
        )
        if callback is not None:
            callback(epoch, mistakes)
        if mistakes == 0:
            report.converged = True
            break
        if tolerance is not None and abs(model.iteration_error) <= tolerance:
            break

    report.iterations = model.iterations
    report.iteration_error = model.iteration_error
    logger.info(
        "training stopped after %d epoch(s) (converged=%s, iterations=%d)",
        report.epochs,
        report.converged,
        report.iterations,
    )
    return report


def evaluate(model: Perceptron, examples: Sequence[Example]) -> float:
    """Return the fraction of ``examples`` the model labels correctly."""
    if not examples:
        raise InvalidArgument("Cannot evaluate on an empty dataset", code="invalid_dataset")
    correct = sum(1 for example in examples if model.predict(example.inputs) == example.label)
    return correct / len(examples)
