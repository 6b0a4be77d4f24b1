"""Marker extraction from annotation columns.

An annotation column is a mostly-empty string column where some rows hold a
single marker string (``|`` by default). Each marker row becomes a MarkerEvent
at the X value of that row; the renderer draws those as vertical lines.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from scatters.series_prep.column_types import ColumnType, column_type_of
from scatters.series_prep.models import MarkerEvent, TypedSeries
from scatters.series_prep.options import DEFAULT_MARKER
from scatters.utils.logging import get_logger

logger = get_logger(__name__)


def _stripped(series: pd.Series) -> pd.Series:
    """Stripped text per row; missing cells become ''."""
    return series.astype(object).where(series.notna(), "").astype(str).str.strip()


def marker_mask(series: pd.Series, marker: str = DEFAULT_MARKER) -> pd.Series:
    """Boolean mask of rows whose stripped value equals ``marker``."""
    return _stripped(series) == marker.strip()


def is_marker_column(series: pd.Series, marker: str = DEFAULT_MARKER) -> bool:
    """True if ``series`` is a string column used for marker annotations.

    The column must hold at least one marker, and blank/missing cells must be
    at least as many as non-blank ones. Other non-blank strings are allowed.
    """
    if column_type_of(series) is not ColumnType.STRING:
        return False
    text = _stripped(series)
    n_markers = int((text == marker.strip()).sum())
    if n_markers == 0:
        return False
    n_blank = int((text == "").sum())
    return n_blank >= len(text) - n_blank


def extract_column_markers(
    series: pd.Series,
    x: TypedSeries,
    marker: str = DEFAULT_MARKER,
) -> list[MarkerEvent]:
    """MarkerEvents for one column, in row order.

    Rows where X has no value produce no event.
    """
    mask = marker_mask(series, marker)
    events: list[MarkerEvent] = []
    x_values = x.values
    for row in series.index[mask.to_numpy()]:
        if row not in x_values.index:
            continue
        value = x_values.loc[row]
        events.append(MarkerEvent(x=_as_scalar(value), row=int(row), column=str(series.name)))
    return events


def extract_markers(
    df: pd.DataFrame,
    x: TypedSeries,
    *,
    marker: str = DEFAULT_MARKER,
    exclude: Iterable[str] = (),
) -> list[MarkerEvent]:
    """Scan every marker column of ``df`` and collect events.

    Args:
        df: Typed table.
        x: Selected X series.
        marker: Marker string.
        exclude: Column names never scanned (X and explicit Y columns).

    Returns:
        Events grouped by column (table order), each group in row order.
        Events from different columns are not merged or deduplicated.
    """
    skip = set(exclude)
    if not x.synthetic:
        skip.add(x.name)

    events: list[MarkerEvent] = []
    for c in df.columns:
        if c in skip:
            continue
        col = df[c]
        if not is_marker_column(col, marker):
            continue
        found = extract_column_markers(col, x, marker)
        logger.debug(f"Column {c!r}: {len(found)} marker(s)")
        events.extend(found)
    return events


def _as_scalar(value):
    """Unwrap numpy scalars to plain Python values (Timestamps are kept)."""
    if hasattr(value, "item") and not isinstance(value, pd.Timestamp):
        return value.item()
    return value
