"""Bilinear interpolation of geoid offsets on the EGM96 grid."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import BinaryIO, Callable

import numpy as np

from .config import GeoidConfig, load_config
from .core.constants import (
    CM_PER_M,
    EGM96_DEFAULT_BYTE_ORDER,
    EGM96_INTERVAL_DEG,
    EGM96_NUM_COLS,
    EGM96_NUM_ROWS,
)
from .core.geodesy import clamp_lat_deg, wrap_lon_360
from .errors import LoadError
from .grid import RESOURCE_NAME, GridStore

log = logging.getLogger(__name__)


def bilinear_weights(u, v):
    """Corner weights ``(w_ll, w_lr, w_ur, w_ul)`` for fractional cell position ``(u, v)``.

    ``u`` runs west to east and ``v`` south to north, both in [0, 1].
    """
    w_ll = (1.0 - u) * (1.0 - v)
    w_lr = u * (1.0 - v)
    w_ur = u * v
    w_ul = (1.0 - u) * v
    return w_ll, w_lr, w_ur, w_ul


class OffsetInterpolator:
    """Geoid offsets (meters) interpolated from an EGM96 15' grid.

    An interpolator without a grid is in degraded mode and returns 0.0 for
    every query. Queries never raise: coordinates that cannot be mapped onto
    the grid also yield 0.0.

    Parameters
    ----------
    grid : GridStore or None
        Loaded offset grid. Several interpolators may share one store.
    clamp_latitude : bool
        Clamp latitudes into [-90, 90] before locating the grid cell. When
        False, latitudes beyond the poles fall outside the grid and return 0.0.
    """

    def __init__(self, grid: GridStore | None, *, clamp_latitude: bool = True):
        self.grid = grid
        self.clamp_latitude = clamp_latitude

    @property
    def has_grid(self) -> bool:
        return self.grid is not None

    @classmethod
    def _build(
        cls,
        loader: Callable[[], GridStore],
        *,
        strict: bool,
        clamp_latitude: bool,
    ) -> "OffsetInterpolator":
        try:
            grid = loader()
        except LoadError as exc:
            if strict:
                raise
            log.warning("EGM96 offset grid unavailable, all offsets will be 0.0: %s", exc)
            grid = None
        return cls(grid, clamp_latitude=clamp_latitude)

    @classmethod
    def from_bytes(
        cls,
        data,
        *,
        byte_order: str = EGM96_DEFAULT_BYTE_ORDER,
        strict: bool = True,
        clamp_latitude: bool = True,
    ) -> "OffsetInterpolator":
        return cls._build(
            lambda: GridStore.load(data, byte_order=byte_order),
            strict=strict,
            clamp_latitude=clamp_latitude,
        )

    @classmethod
    def from_stream(
        cls,
        stream: BinaryIO,
        *,
        byte_order: str = EGM96_DEFAULT_BYTE_ORDER,
        strict: bool = True,
        clamp_latitude: bool = True,
    ) -> "OffsetInterpolator":
        return cls._build(
            lambda: GridStore.from_stream(stream, byte_order=byte_order),
            strict=strict,
            clamp_latitude=clamp_latitude,
        )

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        *,
        byte_order: str = EGM96_DEFAULT_BYTE_ORDER,
        strict: bool = True,
        clamp_latitude: bool = True,
    ) -> "OffsetInterpolator":
        return cls._build(
            lambda: GridStore.from_path(path, byte_order=byte_order),
            strict=strict,
            clamp_latitude=clamp_latitude,
        )

    @classmethod
    def from_resource(
        cls,
        name: str = RESOURCE_NAME,
        *,
        byte_order: str = EGM96_DEFAULT_BYTE_ORDER,
        strict: bool = True,
        clamp_latitude: bool = True,
    ) -> "OffsetInterpolator":
        return cls._build(
            lambda: GridStore.from_resource(name, byte_order=byte_order),
            strict=strict,
            clamp_latitude=clamp_latitude,
        )

    @classmethod
    def from_config(cls, config: GeoidConfig | str | Path | None = None) -> "OffsetInterpolator":
        """Build from a :class:`GeoidConfig` or the path of a JSON config file."""
        if not isinstance(config, GeoidConfig):
            config = load_config(config)

        grid_cfg = config.grid
        if grid_cfg.path is not None:
            return cls.from_path(
                grid_cfg.path,
                byte_order=grid_cfg.byte_order,
                strict=config.strict,
                clamp_latitude=config.query.clamp_latitude,
            )
        return cls.from_resource(
            grid_cfg.resource_name,
            byte_order=grid_cfg.byte_order,
            strict=config.strict,
            clamp_latitude=config.query.clamp_latitude,
        )

    def offset_at(self, lat_deg: float, lon_deg: float) -> float:
        """Geoid offset in meters at one geographic coordinate."""
        grid = self.grid
        if grid is None:
            return 0.0

        lat = float(lat_deg)
        lon = float(lon_deg)
        if not (math.isfinite(lat) and math.isfinite(lon)):
            return 0.0
        if self.clamp_latitude:
            lat = min(max(lat, -90.0), 90.0)
        elif not -90.0 <= lat <= 90.0:
            return 0.0

        lon = lon % 360.0
        if lon >= 360.0:
            lon = 0.0

        top_row = math.floor((90.0 - lat) / EGM96_INTERVAL_DEG)
        if lat <= -90.0:
            top_row = EGM96_NUM_ROWS - 2
        bottom_row = top_row + 1

        # Column 0 doubles as the unstored 360 degree column.
        left_col = math.floor(lon / EGM96_INTERVAL_DEG)
        right_col = left_col + 1
        if lon >= 360.0 - EGM96_INTERVAL_DEG:
            left_col = EGM96_NUM_COLS - 1
            right_col = 0

        lat_bottom = 90.0 - bottom_row * EGM96_INTERVAL_DEG
        lon_left = left_col * EGM96_INTERVAL_DEG

        ul = grid.get(top_row, left_col)
        ll = grid.get(bottom_row, left_col)
        lr = grid.get(bottom_row, right_col)
        ur = grid.get(top_row, right_col)
        if ul is None or ll is None or lr is None or ur is None:
            return 0.0

        u = (lon - lon_left) / EGM96_INTERVAL_DEG
        v = (lat - lat_bottom) / EGM96_INTERVAL_DEG
        w_ll, w_lr, w_ur, w_ul = bilinear_weights(u, v)

        offset_cm = w_ll * float(ll) + w_lr * float(lr) + w_ur * float(ur) + w_ul * float(ul)
        return offset_cm / CM_PER_M

    def offsets_at(self, lat_deg, lon_deg) -> np.ndarray:
        """Vectorised :meth:`offset_at` over broadcastable coordinate arrays.

        Returns
        -------
        np.ndarray of float64 with the broadcast shape of the inputs. Elements
        that cannot be mapped onto the grid are 0.0.
        """
        lat, lon = np.broadcast_arrays(
            np.asarray(lat_deg, dtype=float),
            np.asarray(lon_deg, dtype=float),
        )
        grid = self.grid
        if grid is None:
            return np.zeros(lat.shape, dtype=np.float64)

        finite = np.isfinite(lat) & np.isfinite(lon)
        lat = np.where(finite, lat, 0.0)
        lon = np.where(finite, lon, 0.0)
        if self.clamp_latitude:
            lat = clamp_lat_deg(lat)
        else:
            finite &= (lat >= -90.0) & (lat <= 90.0)
            lat = np.where(finite, lat, 0.0)
        lon = wrap_lon_360(lon)

        top = np.floor((90.0 - lat) / EGM96_INTERVAL_DEG)
        top = np.where(lat <= -90.0, EGM96_NUM_ROWS - 2, top)
        bottom = top + 1

        left = np.floor(lon / EGM96_INTERVAL_DEG)
        right = left + 1
        wrap = lon >= 360.0 - EGM96_INTERVAL_DEG
        left = np.where(wrap, EGM96_NUM_COLS - 1, left)
        right = np.where(wrap, 0, right)

        valid = (
            finite
            & (top >= 0)
            & (bottom <= EGM96_NUM_ROWS - 1)
            & (left >= 0)
            & (right <= EGM96_NUM_COLS - 1)
        )
        if not np.all(valid):
            log.debug("%d of %d coordinates fall outside the offset grid", int(np.sum(~valid)), valid.size)

        top_i = np.where(valid, top, 0).astype(np.intp)
        bottom_i = np.where(valid, bottom, 1).astype(np.intp)
        left_i = np.where(valid, left, 0).astype(np.intp)
        right_i = np.where(valid, right, 1).astype(np.intp)

        samples = grid.samples
        ul = samples[top_i, left_i].astype(np.float64)
        ll = samples[bottom_i, left_i].astype(np.float64)
        lr = samples[bottom_i, right_i].astype(np.float64)
        ur = samples[top_i, right_i].astype(np.float64)

        lat_bottom = 90.0 - bottom * EGM96_INTERVAL_DEG
        lon_left = left * EGM96_INTERVAL_DEG
        u = (lon - lon_left) / EGM96_INTERVAL_DEG
        v = (lat - lat_bottom) / EGM96_INTERVAL_DEG
        w_ll, w_lr, w_ur, w_ul = bilinear_weights(u, v)

        offset_cm = w_ll * ll + w_lr * lr + w_ur * ur + w_ul * ul
        return np.where(valid, offset_cm / CM_PER_M, 0.0)

    def orthometric_height(self, h_ellipsoidal_m, lat_deg, lon_deg):
        """Height above mean sea level from height above the WGS84 ellipsoid."""
        if np.ndim(h_ellipsoidal_m) == 0 and np.ndim(lat_deg) == 0 and np.ndim(lon_deg) == 0:
            return float(h_ellipsoidal_m) - self.offset_at(lat_deg, lon_deg)
        return np.asarray(h_ellipsoidal_m, dtype=float) - self.offsets_at(lat_deg, lon_deg)

    def ellipsoidal_height(self, h_orthometric_m, lat_deg, lon_deg):
        """Height above the WGS84 ellipsoid from height above mean sea level."""
        if np.ndim(h_orthometric_m) == 0 and np.ndim(lat_deg) == 0 and np.ndim(lon_deg) == 0:
            return float(h_orthometric_m) + self.offset_at(lat_deg, lon_deg)
        return np.asarray(h_orthometric_m, dtype=float) + self.offsets_at(lat_deg, lon_deg)
