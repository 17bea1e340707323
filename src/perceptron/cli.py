"""Perceptron CLI utilities built with Typer + Rich."""

from __future__ import annotations

import logging
import random
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import settings
from .datasets import Example, gate_names, load_examples, logic_gate
from .errors import PerceptronError
from .model import Perceptron
from .storage import load_model, save_model
from .training import TrainingReport, evaluate as evaluate_model, fit

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(help="Train and run a single-neuron perceptron.")

_GATE_PREFIX = "gate:"


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


def _configure_logging(verbose: bool) -> None:
    package_logger = logging.getLogger("perceptron")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)
    package_logger.addHandler(RichHandler(console=err_console, show_path=False))
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


def _fail(exc: PerceptronError, title: str) -> typer.Exit:
    message = escape(str(exc))
    if exc.code:
        message += f"\n[dim]code: {exc.code}[/dim]"
    console.print(Panel(message, title=title, border_style="red"))
    return typer.Exit(code=1)


def _rng(seed: Optional[int]) -> Optional[random.Random]:
    return random.Random(seed) if seed is not None else None


def _resolve_dataset(data: str, dimension: Optional[int] = None) -> List[Example]:
    if data.lower().startswith(_GATE_PREFIX):
        return logic_gate(data[len(_GATE_PREFIX):])
    path = Path(data)
    if path.is_dir():
        raise typer.BadParameter(f"Expected a dataset file, received directory: {data}")
    if not path.exists():
        raise typer.BadParameter(
            f"No dataset at {data}; pass a file or one of "
            + ", ".join(f"{_GATE_PREFIX}{name}" for name in gate_names())
        )
    return load_examples(path, dimension=dimension)


def _state_payload(model: Perceptron) -> Dict[str, Any]:
    return model.save_state().to_dict()


def _report_payload(report: TrainingReport, *, accuracy: float, saved_to: Path) -> Dict[str, Any]:
    return {
        "epochs": report.epochs,
        "converged": report.converged,
        "mistakes": report.mistakes,
        "iterations": report.iterations,
        "iterationError": report.iteration_error,
        "accuracy": accuracy,
        "model": str(saved_to),
    }


def _weights_table(weights: List[float]) -> Table:
    table = Table(title="Weights", show_header=True, header_style="bold blue")
    table.add_column("index", justify="right")
    table.add_column("weight", justify="right")
    for idx, weight in enumerate(weights):
        table.add_row(str(idx), f"{weight:.6f}")
    return table


def _epochs_table(mistakes: List[int]) -> Table:
    table = Table(title="Epochs", show_header=True, header_style="bold magenta")
    table.add_column("epoch", justify="right")
    table.add_column("mistakes", justify="right")
    for epoch, count in enumerate(mistakes, 1):
        table.add_row(str(epoch), str(count))
    return table


@app.callback()
def main_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log training progress."),
):
    """Train and run a single-neuron perceptron."""

    _configure_logging(verbose)


@app.command()
def config():
    """Show environment variables that set default hyperparameters."""

    try:
        current = settings()
    except PerceptronError as exc:
        raise _fail(exc, "Config") from exc
    exports = [
        f"export PERCEPTRON_BIAS={current.bias}",
        f"export PERCEPTRON_LEARNING_RATE={current.learning_rate}",
        f"export PERCEPTRON_EPOCHS={current.epochs}",
        f"export PERCEPTRON_SEED={current.seed if current.seed is not None else '<optional-seed>'}",
    ]
    console.print(Panel("\n".join(exports), title="Add these to your shell", border_style="cyan"))


@app.command()
def init(
    dimension: int = typer.Argument(..., help="Number of inputs per example."),
    output: Path = typer.Option(..., "--output", "-o", help="Where to write the new model."),
    bias: Optional[float] = typer.Option(None, help="Initial bias."),
    learning_rate: Optional[float] = typer.Option(None, help="Learning rate in (0, 1]."),
    seed: Optional[int] = typer.Option(None, help="Seed for the initial weights."),
    force: bool = typer.Option(False, help="Overwrite an existing model file."),
):
    """Create a randomly initialised model."""

    if output.exists() and not force:
        raise typer.BadParameter(f"{output} already exists; pass --force to overwrite.")
    try:
        cfg = settings()
        model = Perceptron(
            dimension,
            bias=cfg.bias if bias is None else bias,
            learning_rate=cfg.learning_rate if learning_rate is None else learning_rate,
            rng=_rng(cfg.seed if seed is None else seed),
        )
        path = save_model(model, output)
    except PerceptronError as exc:
        raise _fail(exc, "Init") from exc
    console.print(Panel(f"Wrote {dimension}-input model to {path}", title="Init", border_style="green"))


@app.command()
def train(
    model_path: Path = typer.Argument(..., help="Model file created by 'init'."),
    data: str = typer.Argument(..., help="Dataset file (x1,...,xn,label per line) or gate:<name>."),
    epochs: Optional[int] = typer.Option(None, help="Maximum number of passes over the data."),
    shuffle: bool = typer.Option(False, help="Shuffle examples before every epoch."),
    seed: Optional[int] = typer.Option(None, help="Seed for shuffling."),
    tolerance: Optional[float] = typer.Option(None, help="Stop once |iteration error| falls to this value."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the trained model here instead."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format (text or json).",
    ),
):
    """Train a saved model on a labeled dataset and save it back."""

    try:
        cfg = settings()
        model = load_model(model_path)
        examples = _resolve_dataset(data, model.dimension)
        report = fit(
            model,
            examples,
            epochs=epochs,
            shuffle=shuffle,
            rng=_rng(cfg.seed if seed is None else seed),
            tolerance=tolerance,
        )
        accuracy = evaluate_model(model, examples)
        saved_to = save_model(model, output or model_path)
    except PerceptronError as exc:
        raise _fail(exc, "Train") from exc

    if output_format is OutputFormat.JSON:
        console.print_json(data=_report_payload(report, accuracy=accuracy, saved_to=saved_to))
        return

    console.print(_epochs_table(report.mistakes))
    status = "converged" if report.converged else "stopped"
    summary = (
        f"{status} after {report.epochs} epoch(s)\n"
        f"accuracy {accuracy:.2%}\n"
        f"iteration error {report.iteration_error:.6f}\n"
        f"saved to {saved_to}"
    )
    console.print(
        Panel(summary, title="Train", border_style="green" if report.converged else "yellow")
    )


@app.command(context_settings={"ignore_unknown_options": True})
def predict(
    model_path: Path = typer.Argument(..., help="Model file."),
    values: List[float] = typer.Argument(..., help="Input vector, one number per input."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format (text or json).",
    ),
):
    """Predict the label (+1 or -1) of one input vector."""

    try:
        model = load_model(model_path)
        label = model.predict(values)
    except PerceptronError as exc:
        raise _fail(exc, "Predict") from exc

    if output_format is OutputFormat.JSON:
        console.print_json(data={"inputs": values, "label": label})
        return
    console.print(Panel(f"{label:+d}", title="Predict", border_style="green"))


@app.command()
def evaluate(
    model_path: Path = typer.Argument(..., help="Model file."),
    data: str = typer.Argument(..., help="Dataset file or gate:<name>."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format (text or json).",
    ),
):
    """Report the fraction of examples a saved model labels correctly."""

    try:
        model = load_model(model_path)
        examples = _resolve_dataset(data, model.dimension)
        accuracy = evaluate_model(model, examples)
    except PerceptronError as exc:
        raise _fail(exc, "Evaluate") from exc

    if output_format is OutputFormat.JSON:
        console.print_json(data={"examples": len(examples), "accuracy": accuracy})
        return
    console.print(
        Panel(f"{accuracy:.2%} of {len(examples)} example(s)", title="Evaluate", border_style="green")
    )


@app.command()
def show(
    model_path: Path = typer.Argument(..., help="Model file."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format (text or json).",
    ),
):
    """Print the saved model state."""

    try:
        model = load_model(model_path)
    except PerceptronError as exc:
        raise _fail(exc, "Show") from exc

    if output_format is OutputFormat.JSON:
        console.print_json(data=_state_payload(model))
        return
    console.print(
        Panel(
            f"dimension {model.dimension}\nbias {model.bias:.6f}\nlearning rate {model.learning_rate:.6f}",
            title="Model",
            border_style="cyan",
        )
    )
    console.print(_weights_table(model.weights))


def main():  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
