"""File loading for scatters."""

from scatters.io.loader import SUPPORTED_EXTENSIONS, find_supported_files, load_table

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "find_supported_files",
    "load_table",
]
