"""
Global pytest fixtures for QT-Miner tests.

- Provides deterministic seeding across Python, NumPy, and PyTorch.
- Forces single-threaded torch to stabilize timings and reduce flakiness.
- Standardizes on CPU for all tests.
- Provides small record sets and a temporary SQLite record source.
"""

from __future__ import annotations

import os
import random
import sys
from typing import Generator
from pathlib import Path

import numpy as np
import pytest
import torch

# Add the project's src and tests directories to the Python path
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from data_gen import make_line_records, make_weather_records, write_weather_table  # noqa: E402


def _get_seed() -> int:
    """Resolve the test seed from env or default."""
    env = os.getenv("TEST_RANDOM_SEED", "1337")
    try:
        return int(env)
    except ValueError:
        return 1337


@pytest.fixture(scope="session", autouse=True)
def seed_all() -> int:
    """
    Seed Python, NumPy, and PyTorch RNGs once per session.

    Seed value comes from TEST_RANDOM_SEED (default 1337).
    """
    seed = _get_seed()
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)
    return seed


@pytest.fixture(scope="session", autouse=True)
def set_torch_threads() -> None:
    """
    Reduce PyTorch to a single thread for stability and consistent timing.
    """
    torch.set_num_threads(1)


@pytest.fixture(scope="function")
def rng(seed_all: int) -> Generator[np.random.Generator, None, None]:
    """
    Per-test NumPy Generator seeded from the session seed.
    """
    yield np.random.default_rng(seed_all)


@pytest.fixture(scope="session")
def torch_device() -> torch.device:
    """
    Standard device for tests. We pin to CPU to avoid device drift.
    """
    return torch.device("cpu")


@pytest.fixture
def line_records():
    """Points 0, 1, 2, 10, 11 on a single continuous attribute."""
    return make_line_records([0.0, 1.0, 2.0, 10.0, 11.0])


@pytest.fixture
def weather_records():
    """The 14-record play-tennis table (four categorical, one numeric)."""
    return make_weather_records()


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    """SQLite database holding a 'playtennis' and an 'empty_table' table."""
    url = f"sqlite:///{tmp_path / 'records.db'}"
    write_weather_table(url)
    return url
