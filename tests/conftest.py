import logging
import random
import sys
from pathlib import Path

import pytest

# Ensure the src layout is importable as top-level `perceptron`
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_ROOT = PROJECT_ROOT / "src"
if SRC_ROOT.exists() and str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in ("PERCEPTRON_BIAS", "PERCEPTRON_LEARNING_RATE", "PERCEPTRON_EPOCHS", "PERCEPTRON_SEED"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_package_logger():
    package_logger = logging.getLogger("perceptron")
    saved = (list(package_logger.handlers), package_logger.level, package_logger.propagate)
    yield
    package_logger.handlers[:] = saved[0]
    package_logger.setLevel(saved[1])
    package_logger.propagate = saved[2]
