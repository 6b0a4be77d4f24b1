"""Preparation options (axis hints, title, downsampling, marker).

PrepareOptions is validated once, before any file is processed, so an invalid
bucket count fails fast instead of once per file.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from scatters.series_prep.errors import InvalidBucketCount
from scatters.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_DOWNSAMPLE_THRESHOLD = 10000
DEFAULT_MARKER = "|"


@dataclass
class PrepareOptions:
    """Hints and settings for SeriesPreparer.

    Attributes:
        x_column: Explicit X column name (highest priority).
        use_first_column: Use the first column as X when no explicit name is given.
        y_columns: Explicit ordered Y column names; None selects all numeric columns.
        title: Plot title override.
        downsample_threshold: Series longer than this are reduced to this many
            points with LTTB. None disables downsampling.
        marker: Marker string recognized in annotation columns.
    """
    x_column: Optional[str] = None
    use_first_column: bool = False
    y_columns: Optional[list[str]] = None
    title: Optional[str] = None
    downsample_threshold: Optional[int] = DEFAULT_DOWNSAMPLE_THRESHOLD
    marker: str = DEFAULT_MARKER

    def validate(self) -> "PrepareOptions":
        """Check global settings; returns self.

        Raises:
            InvalidBucketCount: If downsample_threshold is set and is not an int >= 2.
            ValueError: If marker is empty.
        """
        t = self.downsample_threshold
        if t is not None and (isinstance(t, bool) or not isinstance(t, int) or t < 2):
            raise InvalidBucketCount(t)
        if not self.marker or not self.marker.strip():
            raise ValueError("marker must be a non-blank string")
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "x_column": self.x_column,
            "use_first_column": self.use_first_column,
            "y_columns": list(self.y_columns) if self.y_columns is not None else None,
            "title": self.title,
            "downsample_threshold": self.downsample_threshold,
            "marker": self.marker,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PrepareOptions":
        """Tolerant loader: unknown keys are ignored with a warning."""
        known = {"x_column", "use_first_column", "y_columns", "title", "downsample_threshold", "marker"}
        for key in data:
            if key not in known:
                logger.warning(f"Unknown key '{key}' in prepare options, ignoring")
        y_columns = data.get("y_columns")
        threshold = data.get("downsample_threshold", DEFAULT_DOWNSAMPLE_THRESHOLD)
        return cls(
            x_column=data.get("x_column"),
            use_first_column=bool(data.get("use_first_column", False)),
            y_columns=[str(c) for c in y_columns] if y_columns is not None else None,
            title=data.get("title"),
            downsample_threshold=int(threshold) if threshold is not None else None,
            marker=str(data.get("marker", DEFAULT_MARKER)),
        )
