"""
Shared fixtures for the colorquant tests.

Colour fits draw their initial centroids at random, so every RNG the suite
touches is seeded up front and torch runs single-threaded on CPU, which keeps
palettes and label orders repeatable between runs. Plots render to the Agg
backend.
"""

from __future__ import annotations

import os
import random
import sys
from pathlib import Path

import matplotlib
import numpy as np
import pytest
import torch

matplotlib.use("Agg")

# Import the package from src/ without installing it
SRC = Path(__file__).resolve().parents[1] / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))


def _get_seed() -> int:
    """Seed from TEST_RANDOM_SEED, 1337 when unset or not an integer."""
    try:
        return int(os.getenv("TEST_RANDOM_SEED", "1337"))
    except ValueError:
        return 1337


@pytest.fixture(scope="session", autouse=True)
def seed_all() -> None:
    """Seed Python, NumPy and torch once; fits with random_state=None draw from these."""
    seed = _get_seed()
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)


@pytest.fixture(scope="session", autouse=True)
def single_thread() -> None:
    """Single-threaded torch so float64 reductions sum in a fixed order."""
    torch.set_num_threads(1)


@pytest.fixture
def rng(seed_all: None) -> np.random.Generator:
    """Fresh NumPy generator per test for synthetic colours."""
    return np.random.default_rng(_get_seed())


@pytest.fixture(scope="session")
def torch_device() -> torch.device:
    """All fits in the suite run on CPU."""
    return torch.device("cpu")
