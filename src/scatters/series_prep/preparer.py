"""Series preparation: loaded table in, PlotSeriesSet out.

SeriesPreparer sequences type inference, axis selection, marker extraction
and per-series LTTB downsampling. It keeps no state between calls, so one
instance can serve many tables (and many threads).
"""

from __future__ import annotations

from typing import Optional

import pandas as pd

from scatters.series_prep.axis_selection import select_x, select_y, typed_series
from scatters.series_prep.column_types import AxisType
from scatters.series_prep.errors import EmptyTable
from scatters.series_prep.lttb import downsample
from scatters.series_prep.markers import extract_markers
from scatters.series_prep.models import PlotSeries, PlotSeriesSet, TypedSeries
from scatters.series_prep.options import PrepareOptions
from scatters.series_prep.type_inference import infer_table
from scatters.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TITLE = "scatters"


class SeriesPreparer:
    """Builds a PlotSeriesSet from a loaded table.

    Attributes:
        options: Validated PrepareOptions.
    """

    def __init__(self, options: Optional[PrepareOptions] = None) -> None:
        """Initialize with options; validates them immediately.

        Raises:
            InvalidBucketCount: If the downsample threshold is invalid.
        """
        self.options = (options or PrepareOptions()).validate()

    def prepare(self, df: pd.DataFrame, *, source_name: Optional[str] = None) -> PlotSeriesSet:
        """Run the full pipeline on one table.

        Args:
            df: Loaded table. Not modified.
            source_name: Name of the input (e.g. file name), used as default title.

        Returns:
            PlotSeriesSet ready for rendering.

        Raises:
            EmptyTable: If the table has no rows or no columns.
            ColumnNotFound: If an explicit X or Y column is missing.
            NoPlottableColumns: If no Y column can be selected.
        """
        opts = self.options
        if len(df.columns) == 0:
            raise EmptyTable("Table has no columns")
        if len(df) == 0:
            raise EmptyTable()

        frame = df.reset_index(drop=True)
        # column hints are strings; read_json and friends may produce int labels
        frame.columns = [str(c) for c in frame.columns]
        typed = infer_table(frame)
        logger.debug(f"Shape: {typed.shape[0]} rows x {typed.shape[1]} cols")

        x = select_x(typed, x_column=opts.x_column, use_first_column=opts.use_first_column)
        y_names = select_y(typed, x, opts.y_columns)
        logger.debug(f"Selected X axis {x.name!r} ({x.axis_type.value}), Y columns {y_names}")

        markers = extract_markers(
            typed,
            x,
            marker=opts.marker,
            exclude=opts.y_columns or (),
        )

        series = tuple(self._build_series(typed, x, name) for name in y_names)

        return PlotSeriesSet(
            title=self._resolve_title(source_name),
            x=x,
            series=series,
            markers=tuple(markers),
        )

    def _build_series(self, typed: pd.DataFrame, x: TypedSeries, name: str) -> PlotSeries:
        """Pair one Y column with X and downsample it if it is too long."""
        y = typed_series(typed, name)
        common = y.positions[y.positions.isin(x.positions)]
        x_sub = x.take(common)
        y_sub = y.take(common)
        n = len(y_sub)

        threshold = self.options.downsample_threshold
        if threshold is None or n <= threshold:
            return PlotSeries(name=name, x=x_sub, y=y_sub, original_length=n)

        if y_sub.axis_type is not AxisType.NUMERIC:
            logger.warning(f"Column {name!r} is not numeric; plotting all {n} points without downsampling")
            return PlotSeries(name=name, x=x_sub, y=y_sub, original_length=n)

        x_ds, y_ds = downsample(x_sub, y_sub, threshold)
        return PlotSeries(name=name, x=x_ds, y=y_ds, downsampled=True, original_length=n)

    def _resolve_title(self, source_name: Optional[str]) -> str:
        if self.options.title:
            return self.options.title
        if source_name:
            return source_name
        return DEFAULT_TITLE


def prepare_plot_data(
    df: pd.DataFrame,
    options: Optional[PrepareOptions] = None,
    *,
    source_name: Optional[str] = None,
) -> PlotSeriesSet:
    """Convenience wrapper: ``SeriesPreparer(options).prepare(df, source_name=...)``."""
    return SeriesPreparer(options).prepare(df, source_name=source_name)
