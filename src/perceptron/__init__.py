"""
perceptron – single-neuron binary classifier

Public surface:
- Model: Perceptron, activation, dot_product, uniform_weight
- Checkpoints: PerceptronState, validate_state, save_model, load_model, read_state
- Data: Example, parse_examples, load_examples, logic_gate
- Training: fit, evaluate, TrainingReport
- Config: configure, config (context manager), settings

The model itself performs no I/O; storage and the command line are thin
layers over its checkpoint record.
"""

__version__ = "0.2.0"

from .config import configure, config, settings
from .errors import PerceptronError, InvalidArgument, StorageError
from .model import Perceptron, activation, dot_product, uniform_weight
from .state import PerceptronState, validate_state
from .datasets import Example, parse_examples, load_examples, logic_gate, gate_names
from .training import TrainingReport, fit, evaluate
from .storage import save_model, load_model, read_state

# Lazy-load the CLI so importing the model does not pull in typer/rich.
def __getattr__(name):
    if name == "cli":
        import importlib

        module = importlib.import_module(f"{__name__}.cli")
        globals()[name] = module
        return module
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    # Config
    "configure",
    "config",
    "settings",
    # Errors
    "PerceptronError",
    "InvalidArgument",
    "StorageError",
    # Model
    "Perceptron",
    "activation",
    "dot_product",
    "uniform_weight",
    # Checkpoints
    "PerceptronState",
    "validate_state",
    "save_model",
    "load_model",
    "read_state",
    # Data
    "Example",
    "parse_examples",
    "load_examples",
    "logic_gate",
    "gate_names",
    # Training
    "TrainingReport",
    "fit",
    "evaluate",
    "__version__",
    # Lazily exposed submodules
    "cli",
]
