"""CLI entrypoint for scatters.

Run:
    scatters data.csv
    scatters data_dir/ -o plots/ -c temp,humidity -d 5000
    python -m scatters recording.wav --white-theme
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from scatters import __version__
from scatters.batch import run_batch
from scatters.render.figure import RenderOptions
from scatters.render.theme import ThemeMode
from scatters.series_prep.errors import ScattersError
from scatters.series_prep.options import DEFAULT_DOWNSAMPLE_THRESHOLD, DEFAULT_MARKER, PrepareOptions
from scatters.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _split_columns(raw: Optional[list[str]]) -> Optional[list[str]]:
    """Flatten repeated/comma-separated --columns values; None if nothing given."""
    if not raw:
        return None
    out: list[str] = []
    for item in raw:
        out.extend(part.strip() for part in item.split(",") if part.strip())
    return out or None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scatters",
        description="Generate interactive scatter plots from CSV, Parquet, JSON, Excel and audio files.",
    )
    parser.add_argument("input_path", type=Path, help="Input file or folder to scan for data.")
    parser.add_argument(
        "-o", "--output-dir", type=Path, default=None,
        help="Directory for the generated HTML plots (default: next to each input file).",
    )
    parser.add_argument(
        "-i", "--index", default=None,
        help="Column to use as the X axis. Highest priority for index selection.",
    )
    parser.add_argument(
        "-f", "--use-first-column", action="store_true",
        help="Use the first column as the X axis (overridden by --index).",
    )
    parser.add_argument(
        "-c", "--columns", action="append", default=None,
        help="Comma-separated columns to plot on the Y axis (default: all numeric columns).",
    )
    parser.add_argument("-t", "--title", default=None, help="Plot title (default: input file name).")
    parser.add_argument(
        "-d", "--downsample-threshold", type=int, default=DEFAULT_DOWNSAMPLE_THRESHOLD,
        help="Downsample series with more than N points using LTTB; 0 disables (default: %(default)s).",
    )
    parser.add_argument(
        "-n", "--no-autoscale-y", action="store_true",
        help="Keep the initial Y range when zooming.",
    )
    parser.add_argument(
        "-m", "--max-decimals", type=int, default=2,
        help="Decimal places in hover labels; -1 for unlimited (default: %(default)s).",
    )
    parser.add_argument(
        "-M", "--special-marker", default=DEFAULT_MARKER,
        help="String recognized as a vertical marker in string columns (default: %(default)r).",
    )
    parser.add_argument(
        "-l", "--large-mode-threshold", type=int, default=2000,
        help="Series with more points are drawn with WebGL (default: %(default)s).",
    )
    parser.add_argument("-w", "--white-theme", action="store_true", help="Use the white (light) theme.")
    parser.add_argument(
        "-j", "--jobs", type=int, default=None,
        help="Number of files processed in parallel (default: thread pool default).",
    )
    parser.add_argument("-D", "--debug", action="store_true", help="Print debug information while processing.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def options_from_args(args: argparse.Namespace) -> tuple[PrepareOptions, RenderOptions]:
    """Translate parsed arguments into PrepareOptions and RenderOptions."""
    threshold = args.downsample_threshold if args.downsample_threshold != 0 else None
    prepare = PrepareOptions(
        x_column=args.index,
        use_first_column=args.use_first_column,
        y_columns=_split_columns(args.columns),
        title=args.title,
        downsample_threshold=threshold,
        marker=args.special_marker,
    )
    render = RenderOptions(
        theme=ThemeMode.LIGHT if args.white_theme else ThemeMode.DARK,
        autoscale_y=not args.no_autoscale_y,
        max_decimals=args.max_decimals,
        large_mode_threshold=args.large_mode_threshold,
    )
    return prepare, render


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI; returns the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(level="DEBUG" if args.debug else None)

    prepare, render = options_from_args(args)
    try:
        report = run_batch(
            args.input_path,
            prepare,
            render,
            output_dir=args.output_dir,
            max_workers=args.jobs,
        )
    except (ScattersError, ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for r in report.failed:
        print(f"Error: {r.path}: {r.error}", file=sys.stderr)
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
