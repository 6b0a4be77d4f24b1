"""Largest-Triangle-Three-Buckets (LTTB) downsampling.

Reduces an (x, y) series of length n to m points while keeping its visual
shape. The first and last points are always kept; the n-2 interior points
are split by index into m-2 buckets and each bucket contributes the point
forming the largest triangle with the previously kept point and the mean of
the next bucket.

Ties in triangle area resolve to the first point of the bucket: selection
uses ``numpy.argmax``, which returns the first maximal index.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from scatters.series_prep.column_types import AxisType
from scatters.series_prep.errors import InvalidBucketCount
from scatters.series_prep.models import TypedSeries
from scatters.utils.logging import get_logger

logger = get_logger(__name__)


def validate_bucket_count(m) -> int:
    """Return ``m`` if it is a usable bucket count, else raise InvalidBucketCount."""
    if isinstance(m, bool) or not isinstance(m, (int, np.integer)) or m < 2:
        raise InvalidBucketCount(m)
    return int(m)


def lttb_indices(x, y, m: int) -> np.ndarray:
    """Indices of the points LTTB keeps.

    Args:
        x: Numeric x coordinates (array-like, length n).
        y: Numeric y coordinates (array-like, length n).
        m: Target number of points (>= 2).

    Returns:
        Sorted int64 index array of length ``min(m, n)``.

    Raises:
        InvalidBucketCount: If m < 2.
        ValueError: If x and y lengths differ.
    """
    m = validate_bucket_count(m)
    xs = np.asarray(x, dtype=float)
    ys = np.asarray(y, dtype=float)
    n = xs.size
    if ys.size != n:
        raise ValueError("x and y must have the same length")
    if m >= n:
        return np.arange(n, dtype=np.int64)

    selected = np.empty(m, dtype=np.int64)
    selected[0] = 0
    selected[-1] = n - 1
    if m == 2:
        return selected

    # bucket i spans [floor(i * (n-2) / (m-2)) + 1, floor((i+1) * (n-2) / (m-2)) + 1)
    interior = n - 2
    buckets = m - 2
    a = 0
    for i in range(buckets):
        start = (i * interior) // buckets + 1
        end = ((i + 1) * interior) // buckets + 1

        if i == buckets - 1:
            # last bucket looks ahead at the final anchor
            avg_x = xs[n - 1]
            avg_y = ys[n - 1]
        else:
            next_end = ((i + 2) * interior) // buckets + 1
            avg_x = xs[end:next_end].mean()
            avg_y = ys[end:next_end].mean()

        ax = xs[a]
        ay = ys[a]
        bx = xs[start:end]
        by = ys[start:end]
        areas = np.abs((ax - avg_x) * (by - ay) - (ax - bx) * (avg_y - ay)) * 0.5
        pick = start + int(np.argmax(areas))
        selected[i + 1] = pick
        a = pick
    return selected


def lttb(x, y, m: int) -> tuple[np.ndarray, np.ndarray]:
    """Downsample (x, y) to ``m`` points; returns the kept x and y arrays."""
    idx = lttb_indices(x, y, m)
    return np.asarray(x)[idx], np.asarray(y)[idx]


def axis_coordinates(series: TypedSeries) -> np.ndarray:
    """Float coordinates of a series for triangle-area computation.

    Numeric values are used as-is, temporal values as epoch milliseconds,
    categorical values by their row position.
    """
    if series.axis_type is AxisType.NUMERIC:
        return pd.to_numeric(series.values, errors="coerce").to_numpy(dtype=float)
    if series.axis_type is AxisType.TEMPORAL:
        ts = pd.to_datetime(series.values)
        if ts.dt.tz is not None:
            ts = ts.dt.tz_convert(None)
        return (ts - pd.Timestamp(0)).dt.total_seconds().to_numpy(dtype=float) * 1000.0
    if series.axis_type is AxisType.CATEGORICAL:
        return np.asarray(series.positions, dtype=float)
    raise ValueError(f"Unknown axis type: {series.axis_type!r}")


def downsample(x: TypedSeries, y: TypedSeries, threshold: int) -> tuple[TypedSeries, TypedSeries]:
    """Reduce a paired X/Y series to ``threshold`` points when it is longer.

    ``x`` and ``y`` must hold the same row positions. Series at or below the
    threshold are returned unchanged. The returned series keep their original
    values and types; only rows are dropped, as X/Y pairs.
    """
    threshold = validate_bucket_count(threshold)
    if len(y) <= threshold:
        return x, y
    if not x.positions.equals(y.positions):
        raise ValueError("x and y must share the same row positions")

    idx = lttb_indices(axis_coordinates(x), axis_coordinates(y), threshold)
    keep = y.positions[idx]
    logger.info(f"Downsampling '{y.name}' from {len(y)} to {len(keep)} points")
    return x.take(keep), y.take(keep)
