"""Shared test fixtures for the nppmodel test suite."""

from __future__ import annotations

from typing import Any

import numpy as np
import pytest

import nppmodel.config as _cfg
from nppmodel.config import Config


@pytest.fixture(autouse=True)
def _isolate_default_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep user config files out of tests that rely on the default config."""
    monkeypatch.setattr(_cfg, "_default_config", Config())


@pytest.fixture
def reference_grids() -> dict[str, Any]:
    """Return 1x1 NDVI, LST, SOL and We grids of the reference case."""
    return {
        "ndvi": np.array([[0.5]]),
        "lst": np.array([[20.0]]),
        "sol": np.array([[20.0]]),
        "we": np.array([[1.0]]),
    }


@pytest.fixture
def random_grids() -> dict[str, Any]:
    """Return 8x6 grids with plausible value ranges."""
    rng = np.random.default_rng(42)
    shape = (8, 6)
    return {
        "ndvi": rng.uniform(0.1, 0.9, shape),
        "lst": rng.uniform(5.0, 40.0, shape),
        "sol": rng.uniform(10.0, 30.0, shape),
        "we": rng.uniform(0.5, 1.0, shape),
    }


@pytest.fixture
def random_sequences() -> dict[str, Any]:
    """Return four index-aligned sequences of three 5x4 grids."""
    rng = np.random.default_rng(7)
    shape = (3, 5, 4)
    return {
        "ndvi": list(rng.uniform(0.1, 0.9, shape)),
        "lst": list(rng.uniform(5.0, 40.0, shape)),
        "sol": list(rng.uniform(10.0, 30.0, shape)),
        "we": list(rng.uniform(0.5, 1.0, shape)),
    }
