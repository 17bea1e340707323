"""Labeled examples for training and evaluation.

Text format: one example per line, ``x1,x2,...,xn,label`` with ``label`` in
``{-1, 1}``. Blank lines are skipped and ``#`` starts a comment.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .errors import InvalidArgument


@dataclass(frozen=True)
class Example:
    inputs: Tuple[float, ...]
    label: int


def _parse_line(line: str, lineno: int) -> Example:
    parts = [p.strip() for p in line.split(",")]
    if len(parts) < 2:
        raise InvalidArgument(
            f"Line {lineno}: expected x1,...,xn,label",
            code="invalid_dataset",
            details={"line": lineno},
        )
    try:
        values = [float(p) for p in parts]
    except ValueError as exc:
        raise InvalidArgument(
            f"Line {lineno}: non-numeric value in {line!r}",
            code="invalid_dataset",
            details={"line": lineno},
        ) from exc
    if not all(math.isfinite(v) for v in values):
        raise InvalidArgument(
            f"Line {lineno}: values must be finite numbers",
            code="invalid_dataset",
            details={"line": lineno},
        )
    label = values[-1]
    if label not in (-1.0, 1.0):
        raise InvalidArgument(
            f"Line {lineno}: label must be -1 or 1, got {parts[-1]}",
            code="invalid_dataset",
            details={"line": lineno},
        )
    return Example(inputs=tuple(values[:-1]), label=int(label))


def parse_examples(text: str, *, dimension: Optional[int] = None) -> List[Example]:
    """Parse examples from text, checking that every row has the same width.

    When ``dimension`` is given, rows must have exactly that many inputs.
    """
    examples: List[Example] = []
    width = dimension
    for lineno, raw in enumerate(text.splitlines(), 1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        example = _parse_line(line, lineno)
        if width is None:
            width = len(example.inputs)
        elif len(example.inputs) != width:
            raise InvalidArgument(
                f"Line {lineno}: expected {width} inputs, got {len(example.inputs)}",
                code="invalid_dataset",
                details={"line": lineno},
            )
        examples.append(example)
    return examples


def load_examples(path: str | Path, *, dimension: Optional[int] = None) -> List[Example]:
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidArgument(
            f"Dataset {source} is not UTF-8 text",
            code="invalid_dataset",
            details={"path": str(source)},
        ) from exc
    return parse_examples(text, dimension=dimension)


# Truth tables encoded with -1 for false and +1 for true.
_GATES: Dict[str, Tuple[int, int, int, int]] = {
    "and": (-1, -1, -1, 1),
    "or": (-1, 1, 1, 1),
    "nand": (1, 1, 1, -1),
    "nor": (1, -1, -1, -1),
}

_GATE_INPUTS = ((-1.0, -1.0), (-1.0, 1.0), (1.0, -1.0), (1.0, 1.0))


def gate_names() -> List[str]:
    return sorted(_GATES)


def logic_gate(name: str) -> List[Example]:
    """Return the four examples of a linearly separable two-input gate."""
    key = name.strip().lower()
    if key not in _GATES:
        raise InvalidArgument(
            f"Unknown gate {name!r}; choose from {', '.join(gate_names())}",
            code="invalid_dataset",
            details={"gate": name},
        )
    return [Example(inputs=x, label=y) for x, y in zip(_GATE_INPUTS, _GATES[key])]
