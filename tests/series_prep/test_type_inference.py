"""Unit tests for string column type inference."""

import numpy as np
import pandas as pd
import pytest

from scatters.series_prep.column_types import ColumnType, column_type_of
from scatters.series_prep.type_inference import (
    DATETIME_PATTERNS,
    ISO8601_FORMAT,
    infer_column,
    infer_table,
    match_datetime_pattern,
)


def test_all_numeric_strings_promote_to_float():
    """["1", "2", "3"] becomes float [1.0, 2.0, 3.0]."""
    out = infer_column(pd.Series(["1", "2", "3"], name="a"))
    assert column_type_of(out) is ColumnType.FLOAT
    assert out.tolist() == [1.0, 2.0, 3.0]


def test_one_unparsable_value_blocks_numeric_promotion():
    """["1", "2", "x"] stays a string column."""
    s = pd.Series(["1", "2", "x"], name="a")
    out = infer_column(s)
    assert column_type_of(out) is ColumnType.STRING
    assert out.tolist() == ["1", "2", "x"]


def test_numeric_promotion_keeps_nulls_as_nan():
    out = infer_column(pd.Series([" 1.5", None, "-2e3", ""], name="a"))
    assert column_type_of(out) is ColumnType.FLOAT
    assert out.iloc[0] == 1.5
    assert np.isnan(out.iloc[1])
    assert out.iloc[2] == -2000.0
    assert np.isnan(out.iloc[3])


def test_integer_like_strings_become_float_not_int():
    out = infer_column(pd.Series(["10", "20"], name="a"))
    assert out.dtype == np.float64


def test_temporal_promotion_at_exactly_90_percent():
    """9 of 10 values match YYYY-MM-DD -> promoted; the odd one becomes NaT."""
    values = [f"2024-01-0{i}" for i in range(1, 10)] + ["n/a"]
    out = infer_column(pd.Series(values, name="when"))
    assert column_type_of(out) is ColumnType.TEMPORAL
    assert out.iloc[0] == pd.Timestamp("2024-01-01")
    assert pd.isna(out.iloc[9])


def test_temporal_promotion_below_threshold_stays_string():
    """8 of 10 values match -> stays string."""
    values = [f"2024-01-0{i}" for i in range(1, 9)] + ["n/a", "unknown"]
    out = infer_column(pd.Series(values, name="when"))
    assert column_type_of(out) is ColumnType.STRING


def test_day_first_dates_are_recognized():
    out = infer_column(pd.Series(["31/01/2024", "01/02/2024", "15/03/2024"], name="d"))
    assert column_type_of(out) is ColumnType.TEMPORAL
    assert out.iloc[0] == pd.Timestamp("2024-01-31")
    assert out.iloc[1] == pd.Timestamp("2024-02-01")


def test_datetime_with_time_is_recognized():
    out = infer_column(pd.Series(["2024-01-01 10:00:00", "2024-01-01 10:00:05"], name="t"))
    assert column_type_of(out) is ColumnType.TEMPORAL
    assert out.iloc[1] - out.iloc[0] == pd.Timedelta(seconds=5)


def test_mixed_patterns_must_agree_on_one_pattern():
    """Values split between two patterns do not reach 90% on either."""
    values = ["2024-01-01"] * 5 + ["01/02/2024"] * 5
    out = infer_column(pd.Series(values, name="d"))
    assert column_type_of(out) is ColumnType.STRING


def test_iso_parser_has_priority():
    assert DATETIME_PATTERNS[0] == "%Y-%m-%d"
    found = match_datetime_pattern(pd.Series(["2024-01-02", "2024-03-04"]))
    assert found is not None
    assert found[0] == ISO8601_FORMAT


def test_day_first_falls_through_to_patterns():
    found = match_datetime_pattern(pd.Series(["31/01/2024", "01/02/2024"]))
    assert found is not None
    assert found[0] == "%d/%m/%Y"
    assert found[1].tolist() == [pd.Timestamp("2024-01-31"), pd.Timestamp("2024-02-01")]


def test_numeric_wins_over_temporal():
    """Digit-only strings are numbers, not compact dates."""
    out = infer_column(pd.Series(["20240101", "20240102"], name="id"))
    assert column_type_of(out) is ColumnType.FLOAT


def test_all_null_column_left_as_string():
    s = pd.Series([None, None, None], dtype=object, name="empty")
    out = infer_column(s)
    assert column_type_of(out) is ColumnType.STRING
    assert out is s


def test_blank_strings_are_no_evidence():
    s = pd.Series(["", "  ", None], dtype=object, name="blank")
    assert column_type_of(infer_column(s)) is ColumnType.STRING


def test_marker_column_is_not_promoted():
    s = pd.Series(["", "|", "", "|"], name="events")
    assert column_type_of(infer_column(s)) is ColumnType.STRING


@pytest.mark.parametrize(
    "series",
    [
        pd.Series([1, 2, 3]),
        pd.Series([1.5, np.nan]),
        pd.Series([True, False]),
        pd.to_datetime(pd.Series(["2024-01-01", "2024-01-02"])),
    ],
)
def test_non_string_columns_are_untouched(series):
    """Inference on already-typed columns is a no-op."""
    assert infer_column(series) is series


def test_infer_table_is_idempotent_and_does_not_mutate():
    df = pd.DataFrame({
        "time": ["2024-01-01", "2024-01-02", "2024-01-03"],
        "a": ["1", "2", "3"],
        "note": ["x", "y", "z"],
    })
    original = df.copy()
    once = infer_table(df)
    twice = infer_table(once)

    pd.testing.assert_frame_equal(df, original)
    assert list(once.columns) == ["time", "a", "note"]
    assert column_type_of(once["time"]) is ColumnType.TEMPORAL
    assert column_type_of(once["a"]) is ColumnType.FLOAT
    assert column_type_of(once["note"]) is ColumnType.STRING
    pd.testing.assert_frame_equal(once, twice)


def test_fractional_seconds_are_temporal():
    out = infer_column(pd.Series(["2024-01-01 10:00:00.125", "2024-01-01 10:00:00.250"], name="t"))
    assert column_type_of(out) is ColumnType.TEMPORAL
    assert out.iloc[1] - out.iloc[0] == pd.Timedelta(milliseconds=125)


def test_iso_offsets_become_naive_utc():
    out = infer_column(pd.Series(["2024-01-01T10:00:00+02:00", "2024-01-01T11:30:00+02:00"], name="t"))
    assert column_type_of(out) is ColumnType.TEMPORAL
    assert out.tolist() == [pd.Timestamp("2024-01-01 08:00"), pd.Timestamp("2024-01-01 09:30")]


@pytest.mark.parametrize(
    "values, expected",
    [
        (["31/01/2024 10", "01/02/2024 11"], ["2024-01-31 10:00", "2024-02-01 11:00"]),
        (["2024 01 31", "2024 02 01"], ["2024-01-31", "2024-02-01"]),
        (["31/01/2024 10:00:00.5", "31/01/2024 10:00:01.5"], ["2024-01-31 10:00:00.5", "2024-01-31 10:00:01.5"]),
        (["2024.01.31 10:15", "2024.02.01 10:15"], ["2024-01-31 10:15", "2024-02-01 10:15"]),
    ],
)
def test_wider_datetime_layouts(values, expected):
    out = infer_column(pd.Series(values, name="t"))
    assert column_type_of(out) is ColumnType.TEMPORAL
    assert out.tolist() == [pd.Timestamp(v) for v in expected]
