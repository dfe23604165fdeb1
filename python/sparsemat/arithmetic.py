"""Addition, subtraction and multiplication of sparse matrices.

Each function takes two :class:`~sparsemat.sparse.SparseMatrix` operands,
validates their shapes before doing any work, and returns a new matrix.
Operands are only read through ``get`` and ``nonzero_entries``; the dense
index space is never walked except for the column probe in
``multiply(..., method="probe")``.
"""

from . import logger
from .errors import DimensionMismatch
from .sparse import SparseMatrix

MULTIPLY_METHODS = ("probe", "rows")


def _check_same_shape(operation, a, b):
    if a.shape != b.shape:
        raise DimensionMismatch(operation, expected=a.shape, actual=b.shape)


def _result_like(a, b, shape):
    # unchecked if either operand is, so entries outside shape carry over
    return SparseMatrix(shape, check=a.check and b.check)


def add(a, b):
    """Elementwise sum ``a + b``.

    Parameters
    ----------
    a, b : SparseMatrix
        Operands of identical shape.

    Returns
    -------
    SparseMatrix
        New matrix; coordinates where the sum is zero are not stored.

    Raises
    ------
    DimensionMismatch
        If the shapes differ.
    """
    _check_same_shape("add", a, b)
    logger.debug("add: shape=%s nnz=(%d, %d)", a.shape, a.nnz, b.nnz)
    out = _result_like(a, b, a.shape)
    for i, j, v in a.nonzero_entries():
        out.set(i, j, v + b.get(i, j))
    for i, j, v in b.nonzero_entries():
        if (i, j) not in a.entries:
            out.set(i, j, v)
    return out


def subtract(a, b):
    """Elementwise difference ``a - b``.

    Same contract as :func:`add`.
    """
    _check_same_shape("subtract", a, b)
    logger.debug("subtract: shape=%s nnz=(%d, %d)", a.shape, a.nnz, b.nnz)
    out = _result_like(a, b, a.shape)
    for i, j, v in a.nonzero_entries():
        out.set(i, j, v - b.get(i, j))
    for i, j, v in b.nonzero_entries():
        if (i, j) not in a.entries:
            out.set(i, j, -v)
    return out


def _row_index(b):
    # columns past ncols are unreachable by the probe loop, so skip them here too
    rows = {}
    for i, j, v in b.nonzero_entries():
        if 0 <= j < b.ncols:
            rows.setdefault(i, []).append((j, v))
    return rows


def multiply(a, b, method="probe"):
    """Matrix product ``a @ b``.

    Parameters
    ----------
    a : SparseMatrix
        Left operand of shape ``(m, n)``.
    b : SparseMatrix
        Right operand of shape ``(n, p)``.
    method : {"probe", "rows"}, optional
        ``"probe"`` visits every column of ``b`` for each non-zero of ``a``
        (``nnz(a) * p`` lookups, the dominant cost for wide ``b``).
        ``"rows"`` indexes ``b`` by row once and only visits matching
        non-zeros. Both produce identical results.

    Returns
    -------
    SparseMatrix
        New ``(m, p)`` matrix without explicit zeros.

    Raises
    ------
    DimensionMismatch
        If ``a.ncols != b.nrows``.
    ValueError
        If ``method`` is unknown.
    """
    if method not in MULTIPLY_METHODS:
        raise ValueError(f"method must be one of {MULTIPLY_METHODS}, got {method!r}")
    if a.ncols != b.nrows:
        raise DimensionMismatch("multiply", expected=(a.ncols, None), actual=b.shape)
    logger.debug(
        "multiply[%s]: %s @ %s nnz=(%d, %d)", method, a.shape, b.shape, a.nnz, b.nnz
    )
    out = _result_like(a, b, (a.nrows, b.ncols))
    if method == "probe":
        for i, j, v in a.nonzero_entries():
            for k in range(b.ncols):
                product = v * b.get(j, k)
                if product != 0.0:
                    out.set(i, k, out.get(i, k) + product)
    else:
        rows = _row_index(b)
        for i, j, v in a.nonzero_entries():
            for k, w in rows.get(j, ()):
                product = v * w
                if product != 0.0:
                    out.set(i, k, out.get(i, k) + product)
    return out
