"""Column and axis type tags.

ColumnType is the storage-level tag of a table column, derived from its pandas
dtype. AxisType is the rendering category of a selected series. Both are plain
enums; downstream code branches on their members explicitly.
"""

from __future__ import annotations

from enum import Enum

import pandas as pd


class ColumnType(Enum):
    """Type tag of a table column."""
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    TEMPORAL = "temporal"
    BOOLEAN = "boolean"

    @property
    def is_numeric(self) -> bool:
        return self in (ColumnType.INTEGER, ColumnType.FLOAT)


class AxisType(Enum):
    """Axis type category of a series; drives the axis rendering mode."""
    TEMPORAL = "temporal"
    CATEGORICAL = "categorical"
    NUMERIC = "numeric"

    @classmethod
    def from_column_type(cls, column_type: ColumnType) -> "AxisType":
        if column_type is ColumnType.TEMPORAL:
            return cls.TEMPORAL
        if column_type in (ColumnType.INTEGER, ColumnType.FLOAT):
            return cls.NUMERIC
        if column_type in (ColumnType.STRING, ColumnType.BOOLEAN):
            return cls.CATEGORICAL
        raise ValueError(f"Unknown column type: {column_type!r}")

    @property
    def plotly_axis_type(self) -> str:
        """Plotly layout ``xaxis.type`` for this category."""
        if self is AxisType.TEMPORAL:
            return "date"
        if self is AxisType.CATEGORICAL:
            return "category"
        return "linear"


def column_type_of(series: pd.Series) -> ColumnType:
    """Classify a pandas Series by its dtype.

    Args:
        series: Column to classify.

    Returns:
        ColumnType for the dtype kind (int/unsigned -> INTEGER, float -> FLOAT,
        bool -> BOOLEAN, datetime -> TEMPORAL, anything else -> STRING).
    """
    kind = getattr(series.dtype, "kind", None)
    if kind in ("i", "u"):
        return ColumnType.INTEGER
    if kind == "f":
        return ColumnType.FLOAT
    if kind == "b":
        return ColumnType.BOOLEAN
    if kind == "M":
        return ColumnType.TEMPORAL
    return ColumnType.STRING
