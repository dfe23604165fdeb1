"""Text adapters for :class:`~sparsemat.sparse.SparseMatrix`.

The on-disk format is::

    rows=<integer>
    cols=<integer>
    (<row>,<col>,<value>)
    (<row>,<col>,<value>)
    ...

Line numbers reported in :class:`~sparsemat.errors.FormatError` and
:class:`~sparsemat.errors.BoundsError` are 1-based physical lines.
"""

import math
import re
from pathlib import Path

from . import logger
from .errors import BoundsError, FormatError
from .sparse import SparseMatrix

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _parse_header(lines, lineno, key):
    if lineno > len(lines):
        raise FormatError(lineno, f"missing '{key}=<integer>' header")
    line = lines[lineno - 1].strip()
    name, sep, value = line.partition("=")
    if not sep or name.strip() != key:
        raise FormatError(lineno, f"expected '{key}=<integer>', got {line!r}")
    value = value.strip()
    if not _INT_RE.fullmatch(value):
        raise FormatError(lineno, f"{key} must be an integer, got {value!r}")
    n = int(value)
    if n < 0:
        raise FormatError(lineno, f"{key} must be non-negative, got {n}")
    return n


def _parse_triple(line, lineno):
    if not (line.startswith("(") and line.endswith(")")):
        raise FormatError(lineno, f"expected '(row,col,value)', got {line!r}")
    fields = [f.strip() for f in line[1:-1].split(",")]
    if len(fields) != 3:
        raise FormatError(lineno, f"expected 3 fields, got {len(fields)}")
    if not (_INT_RE.fullmatch(fields[0]) and _INT_RE.fullmatch(fields[1])):
        raise FormatError(lineno, f"row and column must be integers, got {line!r}")
    if not _FLOAT_RE.fullmatch(fields[2]):
        raise FormatError(lineno, f"value must be a number, got {fields[2]!r}")
    value = float(fields[2])
    if not math.isfinite(value):
        raise FormatError(lineno, f"value must be finite, got {fields[2]!r}")
    return int(fields[0]), int(fields[1]), value


def _split_lines(text):
    # only "\n" (optionally preceded by "\r") ends a physical line
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def loads(text, check=None):
    """Parse matrix text into a :class:`SparseMatrix`.

    Parameters
    ----------
    text : str
        Matrix description in the ``rows=``/``cols=``/triple format.
    check : bool, optional
        Bounds checking for the new matrix, see :class:`SparseMatrix`.

    Raises
    ------
    FormatError
        On a malformed header or triple line.
    BoundsError
        If bounds checking is on and a triple lies outside the declared shape.
    """
    lines = _split_lines(text)
    nrows = _parse_header(lines, 1, "rows")
    ncols = _parse_header(lines, 2, "cols")
    matrix = SparseMatrix((nrows, ncols), check=check)
    for lineno, raw in enumerate(lines[2:], start=3):
        line = raw.strip()
        if not line:
            continue
        row, col, value = _parse_triple(line, lineno)
        try:
            matrix.set(row, col, value)
        except BoundsError as e:
            e.line = lineno
            raise
    logger.debug("loaded %dx%d matrix with %d non-zeros", nrows, ncols, matrix.nnz)
    return matrix


def load(source, check=None):
    """Read a matrix from a path or an open text file.

    Bytes that are not valid UTF-8 raise :class:`FormatError` naming the line
    that holds them.
    """
    if hasattr(source, "read"):
        return loads(source.read(), check=check)
    logger.info("reading matrix from %s", source)
    data = Path(source).read_bytes()
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        line = data.count(b"\n", 0, e.start) + 1
        raise FormatError(line, f"invalid UTF-8 byte at offset {e.start}") from None
    return loads(text, check=check)


def format_value(value):
    """Render a float compactly: ``3`` for ``3.0``, ``repr`` otherwise."""
    value = float(value)
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def dumps(matrix):
    """Serialize ``matrix`` to the text format, entries sorted by coordinate."""
    lines = [f"rows={matrix.nrows}", f"cols={matrix.ncols}"]
    for i, j, v in sorted(matrix.nonzero_entries()):
        lines.append(f"({i},{j},{format_value(v)})")
    return "\n".join(lines) + "\n"


def dump(matrix, target):
    """Write ``matrix`` to a path or an open text file."""
    text = dumps(matrix)
    if hasattr(target, "write"):
        target.write(text)
        return
    Path(target).write_text(text, encoding="utf-8")


def format_grid(matrix):
    """Dense-looking rendering: one line per row, space separated.

    Coordinates without a stored value print as ``0``. Only the declared
    extent is shown.
    """
    lines = []
    for i in range(matrix.nrows):
        lines.append(" ".join(format_value(matrix.get(i, j)) for j in range(matrix.ncols)))
    return "\n".join(lines)
