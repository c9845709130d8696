"""Loading and indexed access for the EGM96 offset grid."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import BinaryIO

import numpy as np

from .core.constants import (
    BYTE_ORDER_DTYPES,
    EGM96_DEFAULT_BYTE_ORDER,
    EGM96_FILE_SIZE_BYTES,
    EGM96_NUM_COLS,
    EGM96_NUM_ROWS,
    EGM96_NUM_SAMPLES,
    EGM96_SAMPLE_BYTES,
)
from .errors import GridSizeError, GridTruncatedError, GridUnreadableError

log = logging.getLogger(__name__)

RESOURCE_PACKAGE = "egm96.data"
RESOURCE_NAME = "EGM96.dat"


def _sample_dtype(byte_order: str) -> str:
    try:
        return BYTE_ORDER_DTYPES[byte_order]
    except KeyError:
        raise ValueError(
            f"Unsupported byte_order: {byte_order!r}. Expected one of {sorted(BYTE_ORDER_DTYPES)}."
        ) from None


@dataclass(frozen=True, slots=True, eq=False)
class GridStore:
    """Read-only 721 x 1440 grid of geoid offsets in centimeters.

    Row 0 is +90 degrees latitude and row 720 is -90; column 0 is the prime
    meridian and column 1439 is 359.75 degrees east. The 360 degree column is
    not stored.

    The sample array is never written after construction, so one store can
    back any number of interpolators across threads.
    """

    samples: np.ndarray
    source: str = "<memory>"

    def __post_init__(self):
        samples = np.asarray(self.samples)
        if samples.ndim == 1 and samples.size == EGM96_NUM_SAMPLES:
            samples = samples.reshape(EGM96_NUM_ROWS, EGM96_NUM_COLS)
        if samples.shape != (EGM96_NUM_ROWS, EGM96_NUM_COLS):
            raise GridSizeError(EGM96_FILE_SIZE_BYTES, int(samples.size) * EGM96_SAMPLE_BYTES)
        if not np.issubdtype(samples.dtype, np.integer):
            raise ValueError(f"Offset grid samples must be integers, got dtype {samples.dtype}")
        info = np.iinfo(np.int16)
        if samples.min() < info.min or samples.max() > info.max:
            raise ValueError("Offset grid samples do not fit in signed 16 bits")
        samples = np.array(samples, dtype=np.int16)
        samples.flags.writeable = False
        object.__setattr__(self, "samples", samples)

    @property
    def rows(self) -> int:
        return int(self.samples.shape[0])

    @property
    def cols(self) -> int:
        return int(self.samples.shape[1])

    @property
    def min_cm(self) -> int:
        return int(self.samples.min())

    @property
    def max_cm(self) -> int:
        return int(self.samples.max())

    def get(self, row: int, col: int) -> int | None:
        """Raw centimeter value at ``(row, col)``, or None outside the grid."""
        if not (0 <= row < EGM96_NUM_ROWS and 0 <= col < EGM96_NUM_COLS):
            return None
        return int(self.samples[row, col])

    @classmethod
    def load(
        cls,
        data,
        *,
        byte_order: str = EGM96_DEFAULT_BYTE_ORDER,
        source: str = "<memory>",
    ) -> "GridStore":
        """Decode the full byte content of an offset grid file."""
        dtype = _sample_dtype(byte_order)
        buf = memoryview(data).cast("B")
        nbytes = buf.nbytes
        if nbytes < EGM96_FILE_SIZE_BYTES:
            raise GridTruncatedError(EGM96_FILE_SIZE_BYTES, nbytes)
        if nbytes > EGM96_FILE_SIZE_BYTES:
            raise GridSizeError(EGM96_FILE_SIZE_BYTES, nbytes)

        raw = np.frombuffer(buf, dtype=dtype, count=EGM96_NUM_SAMPLES)
        store = cls(samples=raw.reshape(EGM96_NUM_ROWS, EGM96_NUM_COLS), source=source)
        log.info(
            "Loaded EGM96 offset grid from %s (min %d cm, max %d cm)",
            source,
            store.min_cm,
            store.max_cm,
        )
        return store

    @classmethod
    def from_stream(
        cls,
        stream: BinaryIO,
        *,
        byte_order: str = EGM96_DEFAULT_BYTE_ORDER,
        source: str | None = None,
    ) -> "GridStore":
        if source is None:
            source = str(getattr(stream, "name", "<stream>"))
        try:
            data = stream.read()
        except (OSError, ValueError) as exc:
            raise GridUnreadableError(f"Failed to read offset grid from {source}: {exc}") from exc
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise GridUnreadableError(
                f"Offset grid stream {source} must yield bytes, got {type(data).__name__}"
            )
        return cls.load(data, byte_order=byte_order, source=source)

    @classmethod
    def from_path(cls, path: str | Path, *, byte_order: str = EGM96_DEFAULT_BYTE_ORDER) -> "GridStore":
        grid_path = Path(path)
        try:
            with grid_path.open("rb") as f:
                return cls.from_stream(f, byte_order=byte_order, source=str(grid_path))
        except OSError as exc:
            raise GridUnreadableError(f"Offset grid file not readable: {grid_path}") from exc

    @classmethod
    def from_resource(
        cls,
        name: str = RESOURCE_NAME,
        *,
        package: str = RESOURCE_PACKAGE,
        byte_order: str = EGM96_DEFAULT_BYTE_ORDER,
    ) -> "GridStore":
        """Load a grid file bundled as package data (``egm96/data/EGM96.dat``)."""
        source = f"{package}/{name}"
        try:
            resource = resources.files(package).joinpath(name)
            with resource.open("rb") as f:
                return cls.from_stream(f, byte_order=byte_order, source=source)
        except (OSError, ModuleNotFoundError) as exc:
            raise GridUnreadableError(f"Didn't find resource {source}") from exc
