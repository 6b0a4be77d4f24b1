"""Loading data files into pandas DataFrames.

Supported inputs: CSV, Parquet, JSON / JSON Lines, Excel (first sheet) and
audio (WAV/FLAC/OGG via soundfile). Text formats are read as strings so that
type decisions are made by scatters.series_prep.type_inference, the same way
for every format.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
import pandas as pd

from scatters.series_prep.errors import EmptyTable, UnsupportedFormat
from scatters.utils.logging import get_logger

logger = get_logger(__name__)

CSV_EXTENSIONS = {".csv"}
PARQUET_EXTENSIONS = {".parquet"}
JSON_EXTENSIONS = {".json"}
JSON_LINES_EXTENSIONS = {".jsonl", ".ndjson"}
EXCEL_EXTENSIONS = {".xlsx", ".xls"}
AUDIO_EXTENSIONS = {".wav", ".flac", ".ogg"}

SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
    CSV_EXTENSIONS
    | PARQUET_EXTENSIONS
    | JSON_EXTENSIONS
    | JSON_LINES_EXTENSIONS
    | EXCEL_EXTENSIONS
    | AUDIO_EXTENSIONS
)


def is_supported(path: Union[str, Path]) -> bool:
    return Path(path).suffix.lower() in SUPPORTED_EXTENSIONS


def find_supported_files(path: Union[str, Path]) -> list[Path]:
    """List supported files for a file or directory input.

    A file is returned if its extension is supported. A directory is walked
    recursively; results are sorted.

    Raises:
        FileNotFoundError: If ``path`` is neither a file nor a directory.
    """
    p = Path(path)
    if p.is_file():
        return [p] if is_supported(p) else []
    if p.is_dir():
        return sorted(f for f in p.rglob("*") if f.is_file() and is_supported(f))
    raise FileNotFoundError(f"Invalid input path: {p} does not exist or is not a file/directory")


def load_table(path: Union[str, Path]) -> pd.DataFrame:
    """Load a supported file into a DataFrame.

    Raises:
        UnsupportedFormat: If the extension has no loader.
        EmptyTable: If a CSV file is completely empty.
    """
    p = Path(path)
    ext = p.suffix.lower()
    logger.debug(f"Loading {p} ({ext})")
    if ext in CSV_EXTENSIONS:
        return load_csv(p)
    if ext in PARQUET_EXTENSIONS:
        return pd.read_parquet(p)
    if ext in JSON_LINES_EXTENSIONS:
        return pd.read_json(p, lines=True)
    if ext in JSON_EXTENSIONS:
        return load_json(p)
    if ext in EXCEL_EXTENSIONS:
        return load_excel(p)
    if ext in AUDIO_EXTENSIONS:
        return load_audio(p)
    raise UnsupportedFormat(p)


def _blank_to_none(df: pd.DataFrame) -> pd.DataFrame:
    """Strip string cells and turn empty ones into None."""
    out = df.copy()
    for c in out.columns:
        col = out[c]
        if col.dtype.kind != "O":
            continue
        stripped = col.map(lambda v: v.strip() if isinstance(v, str) else v)
        out[c] = stripped.where(stripped != "", None)
    return out


def load_csv(path: Path) -> pd.DataFrame:
    """Read a CSV file with every cell as a string (blank cells -> None)."""
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError as e:
        raise EmptyTable(f"CSV file is empty: {path}") from e
    df.columns = [str(c).strip() for c in df.columns]
    return _blank_to_none(df)


def load_json(path: Path) -> pd.DataFrame:
    """Read ``.json`` as a JSON document, or as JSON Lines if that fails."""
    try:
        return pd.read_json(path)
    except ValueError:
        logger.debug(f"{path.name}: not a JSON document, reading as JSON Lines")
        return pd.read_json(path, lines=True)


def load_excel(path: Path) -> pd.DataFrame:
    """Read the first worksheet; the first non-empty row is the header."""
    raw = pd.read_excel(path, sheet_name=0, header=None, dtype=str)
    non_empty = raw.notna().any(axis=1)
    if not non_empty.any():
        raise EmptyTable(f"Worksheet is empty: {path}")
    header_pos = int(np.argmax(non_empty.to_numpy()))

    headers: list[str] = []
    for i, value in enumerate(raw.iloc[header_pos].tolist()):
        name = "" if pd.isna(value) else str(value).strip()
        headers.append(name if name else f"col_{i + 1}")

    body = raw.iloc[header_pos + 1:].reset_index(drop=True)
    body.columns = headers
    return _blank_to_none(body.astype(object).where(body.notna(), None))


def load_audio(path: Path) -> pd.DataFrame:
    """Decode an audio file into ``sample_index`` and ``channel_<i>`` columns.

    Requires the optional ``soundfile`` dependency (``pip install scatters[audio]``).
    """
    import soundfile as sf

    data, _samplerate = sf.read(str(path), dtype="float32", always_2d=True)
    n_samples, n_channels = data.shape
    if n_samples == 0:
        return pd.DataFrame()
    columns: dict[str, np.ndarray] = {"sample_index": np.arange(n_samples, dtype=np.uint32)}
    for i in range(n_channels):
        columns[f"channel_{i}"] = data[:, i]
    return pd.DataFrame(columns)
