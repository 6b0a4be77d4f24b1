"""X and Y axis selection.

X selection is an ordered list of guarded checks; the first that applies wins:

1. explicit column name (``x_column``)
2. first column (``use_first_column``)
3. a column named ``sample_index`` (audio loaders produce it)
4. first temporal column with at least one value
5. synthesized ``row_index`` (0..n-1)

Y selection uses the explicit list verbatim, or every numeric column except X.
"""

from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd

from scatters.series_prep.column_types import AxisType, ColumnType, column_type_of
from scatters.series_prep.errors import ColumnNotFound, EmptyTable, NoPlottableColumns
from scatters.series_prep.models import TypedSeries
from scatters.utils.logging import get_logger

logger = get_logger(__name__)

SAMPLE_INDEX_COLUMN = "sample_index"
ROW_INDEX_NAME = "row_index"


def typed_series(df: pd.DataFrame, name: str) -> TypedSeries:
    """Build a TypedSeries from a column, dropping absent values.

    Raises:
        ColumnNotFound: If ``name`` is not a column of ``df``.
    """
    if name not in df.columns:
        raise ColumnNotFound(name)
    col = df[name]
    axis_type = AxisType.from_column_type(column_type_of(col))
    return TypedSeries(name=str(name), axis_type=axis_type, values=col.dropna())


def row_index_series(row_count: int) -> TypedSeries:
    """Synthesized X series of consecutive row numbers."""
    values = pd.Series(range(row_count), index=pd.RangeIndex(row_count), dtype="int64", name=ROW_INDEX_NAME)
    return TypedSeries(name=ROW_INDEX_NAME, axis_type=AxisType.NUMERIC, values=values, synthetic=True)


def select_x(
    df: pd.DataFrame,
    *,
    x_column: Optional[str] = None,
    use_first_column: bool = False,
) -> TypedSeries:
    """Select the X series by priority.

    Args:
        df: Typed table (after type inference).
        x_column: Explicit column name.
        use_first_column: Use the first column regardless of type.

    Returns:
        The selected X TypedSeries.

    Raises:
        ColumnNotFound: If ``x_column`` is given but absent.
        EmptyTable: If ``use_first_column`` is set and the table has no columns.
    """
    if x_column is not None:
        logger.debug(f"X axis: explicit column {x_column!r}")
        return typed_series(df, x_column)

    if use_first_column:
        if len(df.columns) == 0:
            raise EmptyTable("Table has no columns")
        first = df.columns[0]
        logger.debug(f"X axis: first column {first!r}")
        return typed_series(df, first)

    if SAMPLE_INDEX_COLUMN in df.columns:
        logger.debug(f"X axis: {SAMPLE_INDEX_COLUMN!r}")
        return typed_series(df, SAMPLE_INDEX_COLUMN)

    for c in df.columns:
        col = df[c]
        if column_type_of(col) is ColumnType.TEMPORAL and col.notna().any():
            logger.debug(f"X axis: first temporal column {c!r}")
            return typed_series(df, c)

    logger.warning("No index specified and no datetime column found. Using row numbers as index.")
    return row_index_series(len(df))


def select_y(
    df: pd.DataFrame,
    x: TypedSeries,
    y_columns: Optional[Sequence[str]] = None,
) -> list[str]:
    """Select the Y column names.

    Args:
        df: Typed table.
        x: The selected X series (excluded from default selection).
        y_columns: Explicit ordered column names, used verbatim.

    Returns:
        Ordered list of Y column names.

    Raises:
        ColumnNotFound: If an explicit name is absent.
        NoPlottableColumns: If no explicit list is given and no numeric column remains.
    """
    if y_columns is not None:
        for name in y_columns:
            if name not in df.columns:
                raise ColumnNotFound(name)
        return [str(name) for name in y_columns]

    x_name = None if x.synthetic else x.name
    out: list[str] = []
    for c in df.columns:
        if c == x_name:
            continue
        if column_type_of(df[c]).is_numeric:
            out.append(str(c))
        else:
            logger.debug(f"Skipping non-numeric column {c!r}")

    if not out:
        raise NoPlottableColumns()
    return out
