import math

import pandas as pd
import pytest

from radar_plotter.data.loaders import (
    coerce_numeric,
    detect_delimiter,
    load_text_file,
    make_unique_name,
    parse_number,
    parse_table,
)


def test_tab_delimited_table():
    table = parse_table("Model\tA\tB\nX\t10\t90\nY\t20\t10")
    assert table.headers == ("Model", "A", "B")
    assert table.rows == (("X", "10", "90"), ("Y", "20", "10"))
    assert len(table) == 2


def test_comma_delimited_table_trims_cells():
    table = parse_table("  Model , A ,B \n X , 1.5, 2\n")
    assert table.headers == ("Model", "A", "B")
    assert table.rows == (("X", "1.5", "2"),)


def test_delimiter_decided_by_first_line_only():
    # Later tab rows are split on commas, so their cells stay glued together.
    table = parse_table("Model,A\nX\t1\t2")
    assert table.headers == ("Model", "A")
    assert table.rows == (("X\t1\t2", ""),)


def test_detect_delimiter_skips_blank_lines():
    assert detect_delimiter("\n\n  \nModel\tA\n") == "\t"
    assert detect_delimiter("Model,A") == ","
    assert detect_delimiter("") == ","


def test_crlf_line_endings():
    table = parse_table("Model,A,B\r\nX,1,2\r\nY,3,4\r\n")
    assert table.rows == (("X", "1", "2"), ("Y", "3", "4"))


def test_short_rows_padded_and_long_rows_truncated():
    table = parse_table("Model,A,B,C\nX,1\nY,1,2,3,4,5")
    assert table.rows[0] == ("X", "1", "", "")
    assert table.rows[1] == ("Y", "1", "2", "3")
    assert all(len(r) == table.width for r in table.rows)


def test_blank_interior_lines_skipped():
    table = parse_table("Model,A\n\nX,1\n   \nY,2")
    assert [r[0] for r in table.rows] == ["X", "Y"]


@pytest.mark.parametrize("text", ["", "   \n  ", "Model\tA\tB", "Model,A\n\n", None, 42])
def test_too_little_input_is_absent(text):
    assert parse_table(text) is None


@pytest.mark.parametrize(
    "cell, expected",
    [
        ("10", 10.0),
        (" -2.5 ", -2.5),
        ("1e3", 1000.0),
        (".5", 0.5),
        ("86.3%", 86.3),
        ("12abc", 12.0),
        ("", 0.0),
        ("n/a", 0.0),
        ("nan", 0.0),
        ("inf", 0.0),
        (None, 0.0),
        (float("nan"), 0.0),
        (7, 7.0),
    ],
)
def test_parse_number_is_lenient(cell, expected):
    assert parse_number(cell) == pytest.approx(expected)


def test_parse_number_custom_default():
    assert parse_number("oops", default=3.0) == 3.0
    assert parse_number(True, default=-1.0) == -1.0


def test_coerce_numeric_matches_parse_number():
    raw = pd.Series(["1", "x", "", "2.5%", None, "  4 "], dtype=object)
    out = coerce_numeric(raw)
    assert out.tolist() == [parse_number(v) for v in raw.tolist()]
    assert all(math.isfinite(v) for v in out)


def test_make_unique_name():
    assert make_unique_name("A", ["B"]) == "A"
    assert make_unique_name("A", ["A"]) == "A (2)"
    assert make_unique_name("A", ["A", "A (2)"]) == "A (3)"


def test_load_text_file(tmp_path):
    path = tmp_path / "table.tsv"
    path.write_text("Model\tA\nX\t1\n", encoding="utf-8")
    assert parse_table(load_text_file(str(path))).headers == ("Model", "A")
