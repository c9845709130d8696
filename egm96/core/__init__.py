"""Core grid constants and coordinate utilities."""

from .constants import (
    EGM96_FILE_SIZE_BYTES,
    EGM96_INTERVAL_DEG,
    EGM96_NUM_COLS,
    EGM96_NUM_ROWS,
)
from .geodesy import clamp_lat_deg, wrap_lon_360

__all__ = [
    "EGM96_FILE_SIZE_BYTES",
    "EGM96_INTERVAL_DEG",
    "EGM96_NUM_COLS",
    "EGM96_NUM_ROWS",
    "clamp_lat_deg",
    "wrap_lon_360",
]
