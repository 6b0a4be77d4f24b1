"""Series preparation engine: type inference, axis selection, markers, LTTB."""

from scatters.series_prep.column_types import AxisType, ColumnType
from scatters.series_prep.errors import (
    ColumnNotFound,
    EmptyTable,
    InvalidBucketCount,
    NoPlottableColumns,
    ScattersError,
    UnsupportedFormat,
)
from scatters.series_prep.models import MarkerEvent, PlotSeries, PlotSeriesSet, TypedSeries
from scatters.series_prep.options import PrepareOptions
from scatters.series_prep.preparer import SeriesPreparer, prepare_plot_data

__all__ = [
    "AxisType",
    "ColumnNotFound",
    "ColumnType",
    "EmptyTable",
    "InvalidBucketCount",
    "MarkerEvent",
    "NoPlottableColumns",
    "PlotSeries",
    "PlotSeriesSet",
    "PrepareOptions",
    "ScattersError",
    "SeriesPreparer",
    "TypedSeries",
    "UnsupportedFormat",
    "prepare_plot_data",
]
