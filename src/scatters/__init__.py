"""
scatters: interactive scatter plots from tabular and audio data files.

This package provides:
- series_prep: the series preparation engine (type inference, axis selection,
  marker extraction, LTTB downsampling) producing a PlotSeriesSet
- io: loaders for CSV, Parquet, JSON, Excel and audio files
- render: Plotly figure generation and HTML output
- batch / cli: file and directory processing from the command line

For logging configuration in scripts:
    ```python
    from scatters.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```

When used as a library, logging is handled by the parent application's
configuration.
"""

import logging

__version__ = "0.1.0"

from scatters.utils.logging import configure_logging, get_logger

from scatters.series_prep import (
    AxisType,
    ColumnNotFound,
    ColumnType,
    EmptyTable,
    InvalidBucketCount,
    MarkerEvent,
    NoPlottableColumns,
    PlotSeries,
    PlotSeriesSet,
    PrepareOptions,
    ScattersError,
    SeriesPreparer,
    TypedSeries,
    UnsupportedFormat,
    prepare_plot_data,
)

# Ensure scatters logger has NullHandler so logs don't propagate to root
# when no application has configured logging. The CLI calls
# configure_logging() to replace this with a real handler.
_logger = logging.getLogger("scatters")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

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
    "configure_logging",
    "get_logger",
    "prepare_plot_data",
]
