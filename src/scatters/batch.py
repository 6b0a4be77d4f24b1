"""Batch processing: file or directory in, one HTML plot per input file.

Each file is loaded, prepared, rendered and written independently; files run
concurrently on a thread pool. A failing file is reported and skipped, and no
output is written for it. Invalid global options fail before any file is read.
"""

from __future__ import annotations

from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from scatters.io.loader import find_supported_files, load_table
from scatters.render.figure import RenderOptions, make_figure, write_html
from scatters.series_prep.errors import ScattersError
from scatters.series_prep.options import PrepareOptions
from scatters.series_prep.preparer import SeriesPreparer
from scatters.utils.logging import get_logger

logger = get_logger(__name__)

# Errors that fail a single file without stopping the batch.
FILE_ERRORS = (ScattersError, OSError, ValueError, ImportError)


@dataclass
class FileResult:
    """Outcome for one input file."""
    path: Path
    output: Optional[Path] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchReport:
    """Outcome of a batch run, results sorted by input path."""
    results: list[FileResult] = field(default_factory=list)

    @property
    def succeeded(self) -> list[FileResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> list[FileResult]:
        return [r for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failed


def output_path_for(
    input_path: Union[str, Path],
    output_dir: Optional[Union[str, Path]] = None,
    *,
    root: Optional[Union[str, Path]] = None,
    keep_suffix: bool = False,
) -> Path:
    """HTML path for one input file.

    ``<stem>.html`` next to the input, or inside ``output_dir``. With ``root``,
    the input's subdirectory relative to ``root`` is kept under ``output_dir``.
    ``keep_suffix`` names the file ``<name>.html`` (``a.csv.html``).
    """
    p = Path(input_path)
    name = f"{p.name}.html" if keep_suffix else f"{p.stem}.html"
    if output_dir is None:
        return p.with_name(name)
    out_dir = Path(output_dir)
    if root is not None:
        out_dir = out_dir / p.parent.relative_to(root)
    return out_dir / name


def plan_output_paths(
    files: Iterable[Path],
    output_dir: Optional[Union[str, Path]] = None,
    *,
    root: Optional[Union[str, Path]] = None,
) -> dict[Path, Path]:
    """Map each input to a distinct HTML path.

    Inputs sharing a stem in the same directory (``a.csv``, ``a.json``) keep
    their extension in the output name.
    """
    files = list(files)
    stems = Counter((f.parent, f.stem) for f in files)
    return {
        f: output_path_for(f, output_dir, root=root, keep_suffix=stems[(f.parent, f.stem)] > 1)
        for f in files
    }


def process_file(
    path: Union[str, Path],
    preparer: SeriesPreparer,
    render_options: Optional[RenderOptions] = None,
    output_dir: Optional[Union[str, Path]] = None,
    *,
    output_path: Optional[Union[str, Path]] = None,
) -> FileResult:
    """Load, prepare, render and write one file.

    Per-file errors are captured in the returned FileResult rather than raised.
    ``output_path`` overrides the name derived from ``output_dir``.
    """
    p = Path(path)
    logger.info(f"Processing '{p}'...")
    try:
        df = load_table(p)
    except Exception as e:
        # decoders (soundfile, openpyxl, pyarrow) raise their own exception types
        logger.exception(f"Failed to load file {p}: {e}")
        return FileResult(path=p, error=f"{type(e).__name__}: {e}")

    out_path = Path(output_path) if output_path is not None else output_path_for(p, output_dir)
    try:
        logger.debug(f"Detected columns: {[f'{c}: {df[c].dtype}' for c in df.columns]}")
        plot_set = preparer.prepare(df, source_name=p.name)
        figure = make_figure(plot_set, render_options)
        out = write_html(figure, out_path, render_options)
    except FILE_ERRORS as e:
        logger.error(f"Failed to process file {p}: {e}")
        return FileResult(path=p, error=f"{type(e).__name__}: {e}")
    logger.info(f"Plot saved to '{out}'")
    return FileResult(path=p, output=out)


def run_batch(
    input_path: Union[str, Path],
    prepare_options: Optional[PrepareOptions] = None,
    render_options: Optional[RenderOptions] = None,
    *,
    output_dir: Optional[Union[str, Path]] = None,
    max_workers: Optional[int] = None,
) -> BatchReport:
    """Process every supported file under ``input_path``.

    Args:
        input_path: A data file or a directory (walked recursively).
        prepare_options: Axis hints, title, downsampling; validated up front.
        render_options: Plot rendering settings.
        output_dir: Where to write HTML files; defaults to next to each input.
            Subdirectories of a directory input are mirrored under it.
        max_workers: Thread pool size; 1 processes files sequentially.

    Returns:
        BatchReport with one FileResult per discovered file.

    Raises:
        InvalidBucketCount: If the downsample threshold is invalid.
        FileNotFoundError: If ``input_path`` does not exist.
    """
    preparer = SeriesPreparer(prepare_options)
    files = find_supported_files(input_path)
    if not files:
        logger.warning("No supported files found in the specified path.")
        return BatchReport()

    root = Path(input_path) if Path(input_path).is_dir() else None
    outputs = plan_output_paths(files, output_dir, root=root)

    logger.info(f"Found {len(files)} files to process...")
    results: list[FileResult] = []
    if max_workers == 1 or len(files) == 1:
        for f in files:
            results.append(process_file(f, preparer, render_options, output_path=outputs[f]))
    else:
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="scatters") as executor:
            futures = [
                executor.submit(process_file, f, preparer, render_options, output_path=outputs[f])
                for f in files
            ]
            for future in as_completed(futures):
                results.append(future.result())

    results.sort(key=lambda r: str(r.path))
    report = BatchReport(results=results)
    logger.info(f"Done. {len(report.succeeded)} succeeded, {len(report.failed)} failed.")
    return report
