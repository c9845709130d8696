"""Coordinate normalisation used by the offset grid lookup."""

from __future__ import annotations

import numpy as np


def wrap_lon_360(lon_deg):
    """Wrap longitudes into [0, 360).

    Tiny negative inputs can round up to exactly 360.0 under the modulo, so
    those are folded back onto 0.
    """
    lon = np.asarray(lon_deg, dtype=float) % 360.0
    return np.where(lon >= 360.0, 0.0, lon)


def clamp_lat_deg(lat_deg):
    return np.clip(np.asarray(lat_deg, dtype=float), -90.0, 90.0)
