"""EGM96 geoid offsets from the 15 arc-minute NGA grid."""

from .config import GeoidConfig, load_config
from .errors import GridSizeError, GridTruncatedError, GridUnreadableError, LoadError
from .grid import GridStore
from .interpolation import OffsetInterpolator, bilinear_weights

__all__ = [
    "GeoidConfig",
    "load_config",
    "GridSizeError",
    "GridTruncatedError",
    "GridUnreadableError",
    "LoadError",
    "GridStore",
    "OffsetInterpolator",
    "bilinear_weights",
]
