from __future__ import annotations

import numpy as np
import pytest

from egm96.core.constants import EGM96_NUM_COLS, EGM96_NUM_ROWS
from egm96.grid import GridStore


def grid_bytes(samples: np.ndarray, byte_order: str = "big") -> bytes:
    dtype = ">i2" if byte_order == "big" else "<i2"
    return np.asarray(samples).astype(dtype).tobytes()


@pytest.fixture
def zero_samples() -> np.ndarray:
    return np.zeros((EGM96_NUM_ROWS, EGM96_NUM_COLS), dtype=np.int16)


@pytest.fixture
def random_samples() -> np.ndarray:
    rng = np.random.default_rng(96)
    return rng.integers(-10_000, 10_000, size=(EGM96_NUM_ROWS, EGM96_NUM_COLS), dtype=np.int16)


@pytest.fixture
def random_store(random_samples) -> GridStore:
    return GridStore.load(grid_bytes(random_samples), source="random")


@pytest.fixture
def to_grid_bytes():
    return grid_bytes
