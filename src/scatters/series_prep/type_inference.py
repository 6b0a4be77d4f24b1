"""Type inference for ambiguous string columns.

Loaders hand over text-heavy tables (CSV and Excel cells arrive as strings).
This module decides, per string column, whether the column is really numeric
or temporal:

1. Numeric promotion: every non-blank value must parse as a float. A single
   unparsable value keeps the column as a string column.
2. Temporal promotion (only if numeric promotion failed): the ISO 8601
   parser, then the patterns from DATETIME_PATTERNS, are tried in order; the
   first one that parses at least 90% of the non-blank values wins. Values
   that don't match it become NaT.

Blank strings count as missing. Columns that are not string-typed are
returned untouched, so inference is idempotent.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd

from scatters.utils.logging import get_logger

logger = get_logger(__name__)

# matched * TEMPORAL_MATCH_DEN >= total * TEMPORAL_MATCH_NUM  (i.e. >= 90%)
TEMPORAL_MATCH_NUM = 9
TEMPORAL_MATCH_DEN = 10


def _build_datetime_patterns() -> tuple[str, ...]:
    """Ordered strptime patterns: ISO (year first) before day first."""
    date_formats: list[str] = []
    for sep in ("-", "/", ".", " "):
        date_formats.append(f"%Y{sep}%m{sep}%d")
    for sep in ("/", "-", ".", " "):
        date_formats.append(f"%d{sep}%m{sep}%Y")

    patterns: list[str] = []
    for date_fmt in date_formats:
        patterns.append(date_fmt)
        for dt_sep in ("T", " "):
            for time_fmt in ("%H:%M:%S.%f", "%H:%M:%S", "%H:%M", "%H"):
                patterns.append(f"{date_fmt}{dt_sep}{time_fmt}")
    return tuple(patterns)


DATETIME_PATTERNS: tuple[str, ...] = _build_datetime_patterns()

# pandas ISO 8601 / RFC 3339 parser (fractional seconds, T or space, offsets)
ISO8601_FORMAT = "ISO8601"


def is_string_column(series: pd.Series) -> bool:
    """True for object or pandas string dtype columns."""
    return series.dtype == object or isinstance(series.dtype, pd.StringDtype)


def _present_text(series: pd.Series) -> pd.Series:
    """Stripped text of the non-blank cells, indexed like ``series``."""
    present = series[series.notna()]
    text = present.astype(str).str.strip()
    text = text[text != ""]
    # collapse internal whitespace runs ("2024-01-01   10:00")
    return text.str.split().str.join(" ")


def try_numeric(series: pd.Series) -> Optional[pd.Series]:
    """Promote a string column to float64 if every non-blank value parses.

    Returns:
        The promoted float Series (NaN where blank), or None if the column has
        no values or any value fails to parse.
    """
    text = _present_text(series)
    if text.empty:
        return None
    parsed = pd.to_numeric(text, errors="coerce")
    if parsed.isna().any():
        return None
    out = pd.Series(float("nan"), index=series.index, dtype="float64", name=series.name)
    out.loc[parsed.index] = parsed.astype("float64")
    return out


def _parse_iso8601(text: pd.Series) -> pd.Series:
    """ISO 8601 parse; values with an offset are converted to naive UTC."""
    parsed = pd.to_datetime(text, format=ISO8601_FORMAT, errors="coerce", utc=True)
    return parsed.dt.tz_convert(None)


def _enough_matches(parsed: pd.Series, total: int) -> bool:
    matched = int(parsed.notna().sum())
    return matched * TEMPORAL_MATCH_DEN >= total * TEMPORAL_MATCH_NUM


def match_datetime_pattern(series: pd.Series) -> Optional[tuple[str, pd.Series]]:
    """Find the first format matching at least 90% of the non-blank values.

    The ISO 8601 parser is tried first, then DATETIME_PATTERNS in order.

    Returns:
        (format, parsed) where parsed is the datetime Series over the
        non-blank cells (NaT where the value didn't match), or None.
    """
    text = _present_text(series)
    total = len(text)
    if total == 0:
        return None
    parsed = _parse_iso8601(text)
    if _enough_matches(parsed, total):
        return ISO8601_FORMAT, parsed
    for pattern in DATETIME_PATTERNS:
        parsed = pd.to_datetime(text, format=pattern, errors="coerce")
        if _enough_matches(parsed, total):
            return pattern, parsed
    return None


def try_temporal(series: pd.Series) -> Optional[pd.Series]:
    """Promote a string column to datetime64 if a single pattern matches >= 90%."""
    found = match_datetime_pattern(series)
    if found is None:
        return None
    _pattern, parsed = found
    out = pd.Series(pd.NaT, index=series.index, dtype="datetime64[ns]", name=series.name)
    out.loc[parsed.index] = parsed
    return out


def infer_column(series: pd.Series) -> pd.Series:
    """Return ``series`` promoted to float or datetime when the evidence allows.

    Non-string columns and columns that fail both promotions are returned
    as-is. The input Series is never modified.
    """
    if not is_string_column(series):
        return series

    numeric = try_numeric(series)
    if numeric is not None:
        logger.debug(f"Column {series.name!r}: promoted to float")
        return numeric

    temporal = try_temporal(series)
    if temporal is not None:
        logger.debug(f"Column {series.name!r}: promoted to datetime")
        return temporal

    return series


def infer_table(df: pd.DataFrame) -> pd.DataFrame:
    """Apply infer_column to every column; returns a new DataFrame.

    Args:
        df: Loaded table. Not modified.

    Returns:
        New DataFrame with the same columns in the same order.
    """
    columns = {c: infer_column(df[c]) for c in df.columns}
    out = pd.DataFrame(columns, index=df.index)
    return out[list(df.columns)]
