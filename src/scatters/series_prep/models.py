"""Data model for prepared plot series.

TypedSeries, MarkerEvent, PlotSeries and PlotSeriesSet are frozen dataclasses
built once per input table and handed to the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from scatters.series_prep.column_types import AxisType


@dataclass(frozen=True)
class TypedSeries:
    """A named series of present values keyed by original row position.

    Attributes:
        name: Column name (``row_index`` for the synthesized fallback X).
        axis_type: Rendering category of the series.
        values: Present values; the index holds the original row positions.
        synthetic: True when the series is not backed by a real column.
    """
    name: str
    axis_type: AxisType
    values: pd.Series
    synthetic: bool = False

    @property
    def positions(self) -> pd.Index:
        """Original row positions of the values."""
        return self.values.index

    def __len__(self) -> int:
        return len(self.values)

    def take(self, positions) -> "TypedSeries":
        """Return a new TypedSeries restricted to ``positions`` (row labels)."""
        return TypedSeries(
            name=self.name,
            axis_type=self.axis_type,
            values=self.values.loc[positions],
            synthetic=self.synthetic,
        )

    def to_list(self) -> list[Any]:
        return self.values.tolist()


@dataclass(frozen=True)
class MarkerEvent:
    """A marker found in an annotation column.

    Attributes:
        x: X-series value at the marker row.
        row: Row position of the marker.
        column: Name of the column the marker was found in.
    """
    x: Any
    row: int
    column: str


@dataclass(frozen=True)
class PlotSeries:
    """One Y series paired with its own X subsequence.

    Attributes:
        name: Y column name.
        x: X values at the rows kept for this series.
        y: Y values (same positions as ``x``).
        downsampled: True if LTTB reduced this series.
        original_length: Number of paired points before downsampling.
    """
    name: str
    x: TypedSeries
    y: TypedSeries
    downsampled: bool = False
    original_length: int = 0

    def __len__(self) -> int:
        return len(self.y)


@dataclass(frozen=True)
class PlotSeriesSet:
    """Final artifact handed to the renderer.

    Attributes:
        title: Plot title.
        x: The selected X series (full length, before any downsampling).
        series: Y series in selection order, each with its own X subsequence.
        markers: Marker events from all marker columns, column by column.
    """
    title: str
    x: TypedSeries
    series: tuple[PlotSeries, ...] = field(default_factory=tuple)
    markers: tuple[MarkerEvent, ...] = field(default_factory=tuple)

    @property
    def y_names(self) -> list[str]:
        return [s.name for s in self.series]

    @property
    def downsampled(self) -> bool:
        """True if any series was downsampled."""
        return any(s.downsampled for s in self.series)

    def markers_by_column(self) -> dict[str, list[MarkerEvent]]:
        """Group marker events by source column, preserving order."""
        out: dict[str, list[MarkerEvent]] = {}
        for m in self.markers:
            out.setdefault(m.column, []).append(m)
        return out
