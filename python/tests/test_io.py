import io

import pytest

from sparsemat import BoundsError, FormatError, SparseMatrix
from sparsemat.io import dump, dumps, format_grid, format_value, load, loads

SAMPLE = """rows=3
cols=4
(0,1,5)
(2,3,-1.5)
( 1 , 0 , 2 )
"""


def test_loads_basic():
    M = loads(SAMPLE)
    assert M.shape == (3, 4)
    assert set(M.nonzero_entries()) == {(0, 1, 5.0), (2, 3, -1.5), (1, 0, 2.0)}


def test_loads_skips_blank_lines_and_zero_values():
    M = loads("rows=2\ncols=2\n\n(0,0,1)\n   \n(1,1,0)\n\n")
    assert set(M.nonzero_entries()) == {(0, 0, 1.0)}


def test_loads_last_write_wins():
    M = loads("rows=1\ncols=1\n(0,0,1)\n(0,0,4)\n")
    assert M.get(0, 0) == 4.0


def test_header_whitespace_tolerated():
    M = loads("  rows = 2\ncols=  3  \n")
    assert M.shape == (2, 3)
    assert M.nnz == 0


def test_missing_parentheses_reports_line():
    with pytest.raises(FormatError) as excinfo:
        loads("rows=2\ncols=2\n1,2,3\n")
    assert excinfo.value.line == 3
    assert str(excinfo.value).startswith("line 3:")


@pytest.mark.parametrize(
    "bad",
    [
        "(0,1)",
        "(0,1,2,3)",
        "(a,1,2)",
        "(0,1.5,2)",
        "(0,1,x)",
        "(0,1,nan)",
        "(0,1,inf)",
        "(0,1,2",
        "0,1,2)",
        "[0,1,2]",
        "(1_0,1,2)",
        "(0,1,1_0)",
        "(0,١,2)",
        "(0,1,0x1)",
    ],
)
def test_malformed_triples(bad):
    text = "rows=3\ncols=3\n(0,0,1)\n\n" + bad + "\n"
    with pytest.raises(FormatError) as excinfo:
        loads(text)
    assert excinfo.value.line == 5


@pytest.mark.parametrize(
    "text, line",
    [
        ("", 1),
        ("rows=2\n", 2),
        ("cols=2\nrows=2\n", 1),
        ("rows=x\ncols=2\n", 1),
        ("rows=2\ncols=-1\n", 2),
        ("rows 2\ncols=2\n", 1),
        ("rows=2.0\ncols=2\n", 1),
        ("rows=1_0\ncols=2\n", 1),
        ("rows=2\ncols= 3_0\n", 2),
        ("\nrows=2\ncols=2\n", 1),
    ],
)
def test_malformed_headers(text, line):
    with pytest.raises(FormatError) as excinfo:
        loads(text)
    assert excinfo.value.line == line


def test_format_error_is_value_error():
    with pytest.raises(ValueError):
        loads("rows=1\ncols=1\n(0,0)\n")


def test_out_of_range_triple_reports_line():
    with pytest.raises(BoundsError) as excinfo:
        loads("rows=2\ncols=2\n(0,0,1)\n(2,0,1)\n")
    assert excinfo.value.line == 4
    assert "line 4" in str(excinfo.value)


def test_out_of_range_triple_accepted_without_check():
    M = loads("rows=2\ncols=2\n(0,0,1)\n(2,0,7)\n", check=False)
    assert M.get(2, 0) == 7.0
    assert format_grid(M) == "1 0\n0 0"


def test_load_from_path_and_file(tmp_path):
    p = tmp_path / "m.txt"
    p.write_text(SAMPLE, encoding="utf-8")
    assert load(p) == loads(SAMPLE)
    assert load(str(p)) == loads(SAMPLE)
    assert load(io.StringIO(SAMPLE)) == loads(SAMPLE)


def test_load_missing_file(tmp_path):
    with pytest.raises(OSError):
        load(tmp_path / "missing.txt")


def test_dumps_sorted_and_reloadable():
    M = SparseMatrix.from_triples([(1, 1, 0.1), (0, 2, 3.0), (0, 0, -2.0)], (2, 3))
    text = dumps(M)
    assert text == "rows=2\ncols=3\n(0,0,-2)\n(0,2,3)\n(1,1,0.1)\n"
    assert loads(text) == M


def test_dump_to_path_and_file(tmp_path):
    M = SparseMatrix.eye(2)
    p = tmp_path / "out.txt"
    dump(M, p)
    assert load(p) == M
    buf = io.StringIO()
    dump(M, buf)
    assert buf.getvalue() == dumps(M)


def test_format_value():
    assert format_value(3.0) == "3"
    assert format_value(-0.5) == "-0.5"
    assert format_value(0.0) == "0"
    assert format_value(1e20) == "1e+20"


def test_format_grid():
    M = SparseMatrix.from_triples([(0, 0, 4), (0, 1, 2), (1, 1, 5.5)], (2, 3))
    assert format_grid(M) == "4 2 0\n0 5.5 0"
    assert format_grid(SparseMatrix((0, 3))) == ""
    assert format_grid(SparseMatrix((2, 0))) == "\n"


def test_line_numbers_count_only_newlines():
    # form feed and other separators inside a line do not start a new line
    with pytest.raises(FormatError) as excinfo:
        loads("rows=2\ncols=2\n(0,0,1)\x0c\nbad\n")
    assert excinfo.value.line == 4
    with pytest.raises(FormatError) as excinfo:
        loads("rows=2\ncols=2\n(0,0,1) (1,1,1)\n")
    assert excinfo.value.line == 3


def test_crlf_line_endings():
    M = loads("rows=2\r\ncols=2\r\n(0,0,1)\r\n(1,1,2)\r\n")
    assert set(M.nonzero_entries()) == {(0, 0, 1.0), (1, 1, 2.0)}
    with pytest.raises(BoundsError) as excinfo:
        loads("rows=1\r\ncols=1\r\n\r\n(3,0,1)\r\n")
    assert excinfo.value.line == 4


def test_load_invalid_utf8_reports_line(tmp_path):
    p = tmp_path / "bad.txt"
    p.write_bytes(b"rows=2\ncols=2\n(0,0,1)\n(1,1,\xff)\n")
    with pytest.raises(FormatError) as excinfo:
        load(p)
    assert excinfo.value.line == 4
