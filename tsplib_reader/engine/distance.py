"""Numba-compiled TSPLIB distance functions.

Each function takes two coordinate sequences (tuples or 1-D arrays) and
returns the integer edge cost defined by the format. ``nint`` is
``int(x + 0.5)``, which rounds halves away from zero for the non-negative
values every function produces.
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit

from ..config.enums import (
    GEO_PI,
    GEO_RADIUS,
    METRIC_ATT,
    METRIC_CEIL_2D,
    METRIC_EUC_2D,
    METRIC_EUC_3D,
    METRIC_GEO,
    METRIC_MAN_2D,
    METRIC_MAN_3D,
    METRIC_MAX_2D,
    METRIC_MAX_3D,
    METRIC_XRAY1,
)


@njit(cache=True)
def nint(x):
    return int(x + 0.5)


@njit(cache=True)
def euc_2d(a, b):
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return nint(math.sqrt(dx * dx + dy * dy))


@njit(cache=True)
def euc_3d(a, b):
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    dz = a[2] - b[2]
    return nint(math.sqrt(dx * dx + dy * dy + dz * dz))


@njit(cache=True)
def max_2d(a, b):
    return max(nint(abs(a[0] - b[0])), nint(abs(a[1] - b[1])))


@njit(cache=True)
def max_3d(a, b):
    dx = nint(abs(a[0] - b[0]))
    dy = nint(abs(a[1] - b[1]))
    dz = nint(abs(a[2] - b[2]))
    return max(dx, max(dy, dz))


@njit(cache=True)
def man_2d(a, b):
    return nint(abs(a[0] - b[0]) + abs(a[1] - b[1]))


@njit(cache=True)
def man_3d(a, b):
    return nint(abs(a[0] - b[0]) + abs(a[1] - b[1]) + abs(a[2] - b[2]))


@njit(cache=True)
def ceil_2d(a, b):
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return int(math.ceil(math.sqrt(dx * dx + dy * dy)))


@njit(cache=True)
def geo_radians(x):
    """Convert a ``DDD.MM`` value to radians (integer part is degrees)."""
    deg = float(int(x))
    minutes = x - deg
    return GEO_PI * (deg + 5.0 * minutes / 3.0) / 180.0


@njit(cache=True)
def geo(a, b):
    lat_a = geo_radians(a[0])
    lon_a = geo_radians(a[1])
    lat_b = geo_radians(b[0])
    lon_b = geo_radians(b[1])
    q1 = math.cos(lon_a - lon_b)
    q2 = math.cos(lat_a - lat_b)
    q3 = math.cos(lat_a + lat_b)
    q = 0.5 * ((1.0 + q1) * q2 - (1.0 - q1) * q3)
    # clamp rounding noise so acos stays defined
    if q > 1.0:
        q = 1.0
    elif q < -1.0:
        q = -1.0
    return int(GEO_RADIUS * math.acos(q) + 1.0)


@njit(cache=True)
def att(a, b):
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    r = math.sqrt((dx * dx + dy * dy) / 10.0)
    t = nint(r)
    if t < r:
        return t + 1
    return t


@njit(cache=True)
def _xray_components(a, b):
    dp = abs(a[0] - b[0])
    # first coordinate is an angle in degrees
    wrapped = abs(dp - 360.0)
    if wrapped < dp:
        dp = wrapped
    return dp, abs(a[1] - b[1]), abs(a[2] - b[2])


@njit(cache=True)
def xray1(a, b):
    dp, dc, dt = _xray_components(a, b)
    return nint(100.0 * max(dp, max(dc, dt)))


@njit(cache=True)
def xray2(a, b):
    dp, dc, dt = _xray_components(a, b)
    return nint(100.0 * max(dp / 1.25, max(dc / 1.5, dt / 1.15)))


@njit(cache=True)
def cost_by_code(code, a, b):
    if code == METRIC_EUC_2D:
        return euc_2d(a, b)
    if code == METRIC_EUC_3D:
        return euc_3d(a, b)
    if code == METRIC_MAX_2D:
        return max_2d(a, b)
    if code == METRIC_MAX_3D:
        return max_3d(a, b)
    if code == METRIC_MAN_2D:
        return man_2d(a, b)
    if code == METRIC_MAN_3D:
        return man_3d(a, b)
    if code == METRIC_CEIL_2D:
        return ceil_2d(a, b)
    if code == METRIC_GEO:
        return geo(a, b)
    if code == METRIC_ATT:
        return att(a, b)
    if code == METRIC_XRAY1:
        return xray1(a, b)
    return xray2(a, b)


@njit(cache=True)
def distance_matrix(coords, code):
    """Dense ``(n, n)`` cost matrix for ``coords`` with a zero diagonal."""

    n = coords.shape[0]
    out = np.zeros((n, n), dtype=np.int64)
    for i in range(n):
        for j in range(i + 1, n):
            d = cost_by_code(code, coords[i], coords[j])
            out[i, j] = d
            out[j, i] = d
    return out


__all__ = [
    "att",
    "ceil_2d",
    "cost_by_code",
    "distance_matrix",
    "euc_2d",
    "euc_3d",
    "geo",
    "geo_radians",
    "man_2d",
    "man_3d",
    "max_2d",
    "max_3d",
    "nint",
    "xray1",
    "xray2",
]
