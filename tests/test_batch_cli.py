"""Tests for batch processing and the command-line entrypoint."""

import logging
from pathlib import Path

import pytest

from scatters.batch import output_path_for, plan_output_paths, process_file, run_batch
from scatters.cli import _split_columns, build_parser, main, options_from_args
from scatters.render.theme import ThemeMode
from scatters.series_prep import InvalidBucketCount, PrepareOptions, SeriesPreparer

GOOD_CSV = "time,value,events\n2024-01-01,1.5,\n2024-01-02,2.5,|\n2024-01-03,3.5,\n"
TEXT_ONLY_CSV = "name,comment\nalpha,hello\nbeta,world\n"


@pytest.fixture(autouse=True)
def restore_logging():
    """main() attaches a stderr handler; drop it so capsys streams are not reused."""
    logger = logging.getLogger("scatters")
    saved_handlers = logger.handlers[:]
    saved_level = logger.level
    yield
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


@pytest.fixture
def data_dir(tmp_path):
    d = tmp_path / "data"
    d.mkdir()
    (d / "good.csv").write_text(GOOD_CSV)
    (d / "bad.csv").write_text(TEXT_ONLY_CSV)
    (d / "readme.txt").write_text("not data")
    return d


def test_output_path_for():
    assert output_path_for("/a/b/data.csv") == Path("/a/b/data.html")
    assert output_path_for("/a/b/data.csv", "/out") == Path("/out/data.html")


def test_process_file_writes_html(tmp_path):
    p = tmp_path / "good.csv"
    p.write_text(GOOD_CSV)
    result = process_file(p, SeriesPreparer())
    assert result.ok
    assert result.output == tmp_path / "good.html"
    assert result.output.exists()


def test_process_file_captures_errors(tmp_path):
    p = tmp_path / "bad.csv"
    p.write_text(TEXT_ONLY_CSV)
    result = process_file(p, SeriesPreparer())
    assert not result.ok
    assert "NoPlottableColumns" in result.error
    assert not (tmp_path / "bad.html").exists()


@pytest.mark.parametrize("max_workers", [1, 4])
def test_one_bad_file_does_not_stop_the_batch(tmp_path, data_dir, max_workers):
    out_dir = tmp_path / "plots"
    report = run_batch(data_dir, output_dir=out_dir, max_workers=max_workers)

    assert [r.path.name for r in report.results] == ["bad.csv", "good.csv"]
    assert [r.path.name for r in report.succeeded] == ["good.csv"]
    assert [r.path.name for r in report.failed] == ["bad.csv"]
    assert not report.ok
    assert (out_dir / "good.html").exists()
    assert not (out_dir / "bad.html").exists()


def test_empty_directory(tmp_path):
    report = run_batch(tmp_path)
    assert report.results == []
    assert report.ok


def test_invalid_threshold_fails_before_any_file(tmp_path, data_dir):
    out_dir = tmp_path / "plots"
    with pytest.raises(InvalidBucketCount):
        run_batch(data_dir, PrepareOptions(downsample_threshold=1), output_dir=out_dir)
    assert not out_dir.exists()


def test_missing_input_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        run_batch(tmp_path / "nope")


def test_split_columns():
    assert _split_columns(None) is None
    assert _split_columns(["a, b", "c"]) == ["a", "b", "c"]
    assert _split_columns([" , "]) is None


def test_options_from_args():
    args = build_parser().parse_args([
        "data.csv", "-i", "time", "-c", "a,b", "-d", "0", "-n", "-m", "3", "-M", "#", "-w",
    ])
    prepare, render = options_from_args(args)
    assert prepare.x_column == "time"
    assert prepare.y_columns == ["a", "b"]
    assert prepare.downsample_threshold is None
    assert prepare.marker == "#"
    assert render.autoscale_y is False
    assert render.max_decimals == 3
    assert render.theme is ThemeMode.LIGHT


def test_parser_defaults():
    args = build_parser().parse_args(["data.csv"])
    prepare, render = options_from_args(args)
    assert prepare.downsample_threshold == 10000
    assert prepare.y_columns is None
    assert not prepare.use_first_column
    assert render.theme is ThemeMode.DARK
    assert render.large_mode_threshold == 2000


def test_main_success(tmp_path):
    p = tmp_path / "good.csv"
    p.write_text(GOOD_CSV)
    out_dir = tmp_path / "out"
    assert main([str(p), "-o", str(out_dir), "-t", "My plot"]) == 0
    html = (out_dir / "good.html").read_text(encoding="utf-8")
    assert "My plot" in html


def test_main_reports_failed_files(data_dir, capsys):
    assert main([str(data_dir), "-j", "1"]) == 1
    assert "bad.csv" in capsys.readouterr().err


def test_main_invalid_threshold(data_dir, capsys):
    assert main([str(data_dir), "-d", "1"]) == 1
    assert "Invalid downsample bucket count" in capsys.readouterr().err
    assert not (data_dir / "good.html").exists()


def test_main_missing_input(tmp_path, capsys):
    assert main([str(tmp_path / "missing")]) == 1
    assert "Error" in capsys.readouterr().err


@pytest.mark.parametrize("name", ["broken.wav", "broken.xlsx", "broken.parquet"])
def test_undecodable_file_is_reported_not_raised(tmp_path, name):
    d = tmp_path / "mixed"
    d.mkdir()
    (d / "good.csv").write_text(GOOD_CSV)
    (d / name).write_bytes(b"\x00\x01garbage bytes, not a real file\xff" * 8)

    report = run_batch(d, max_workers=1)

    assert [r.path.name for r in report.succeeded] == ["good.csv"]
    assert [r.path.name for r in report.failed] == [name]
    assert report.failed[0].error
    assert (d / "good.html").exists()
    assert not (d / "broken.html").exists()


def test_output_path_keeps_subdirectory_and_suffix():
    assert output_path_for("/in/x/a.csv", "/out", root="/in") == Path("/out/x/a.html")
    assert output_path_for("/in/a.csv", "/out", keep_suffix=True) == Path("/out/a.csv.html")
    assert output_path_for("/in/a.csv", keep_suffix=True) == Path("/in/a.csv.html")


def test_plan_output_paths_disambiguates_shared_stems():
    files = [Path("/in/a.csv"), Path("/in/a.json"), Path("/in/b.csv")]
    planned = plan_output_paths(files, "/out", root="/in")
    assert planned == {
        Path("/in/a.csv"): Path("/out/a.csv.html"),
        Path("/in/a.json"): Path("/out/a.json.html"),
        Path("/in/b.csv"): Path("/out/b.html"),
    }


def test_same_stem_inputs_write_distinct_outputs(tmp_path):
    d = tmp_path / "data"
    (d / "x").mkdir(parents=True)
    (d / "y").mkdir()
    (d / "x" / "a.csv").write_text(GOOD_CSV)
    (d / "y" / "a.csv").write_text(GOOD_CSV)
    (d / "a.csv").write_text(GOOD_CSV)
    (d / "a.json").write_text('[{"v": 1.0}, {"v": 2.0}]')
    out_dir = tmp_path / "plots"

    report = run_batch(d, output_dir=out_dir, max_workers=4)

    assert report.ok
    outputs = sorted(r.output.relative_to(out_dir).as_posix() for r in report.results)
    assert outputs == ["a.csv.html", "a.json.html", "x/a.html", "y/a.html"]
    assert all((out_dir / o).exists() for o in outputs)
