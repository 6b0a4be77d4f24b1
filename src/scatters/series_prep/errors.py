"""Exceptions raised while preparing plot series.

Everything derives from ScattersError so batch callers can isolate a single
file's failure with one except clause. Each kind also subclasses the builtin
it most resembles (KeyError/ValueError) for callers that catch those.
"""

from __future__ import annotations

from typing import Any


class ScattersError(Exception):
    """Base class for all scatters errors."""


class ColumnNotFound(ScattersError, KeyError):
    """An explicit X or Y column name is not present in the table."""

    def __init__(self, column: str) -> None:
        self.column = column
        super().__init__(column)

    def __str__(self) -> str:
        return f"Column {self.column!r} not found in the data"


class NoPlottableColumns(ScattersError, ValueError):
    """No numeric Y columns remain after the X column is excluded."""

    def __init__(self, message: str = "No numeric columns found to plot") -> None:
        super().__init__(message)


class InvalidBucketCount(ScattersError, ValueError):
    """Downsampling target size is out of range (must be an int >= 2)."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Invalid downsample bucket count {value!r}: must be an integer >= 2")


class EmptyTable(ScattersError, ValueError):
    """The loaded table has no rows (or no columns)."""

    def __init__(self, message: str = "Table has no rows") -> None:
        super().__init__(message)


class UnsupportedFormat(ScattersError, ValueError):
    """A file extension has no matching loader."""

    def __init__(self, path: Any) -> None:
        self.path = path
        super().__init__(f"Unsupported file format for: {path}")
