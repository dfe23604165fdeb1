"""Dictionary-of-keys sparse matrix.

This module exposes :class:`SparseMatrix`, a two-dimensional matrix that
stores only its non-zero entries in a ``dict`` keyed by ``(row, col)``
tuples.

Notes
-----
- A stored value is never zero: assigning zero removes the key. The zero test
  is exact unless a tolerance is configured through
  :func:`sparsemat.set_zero_tolerance`.
- Values are stored as Python floats.
- With bounds checking on (the default), ``set`` rejects coordinates outside
  the declared shape with :class:`~sparsemat.errors.BoundsError`. Reads never
  fail: ``get`` returns zero for any coordinate that is not stored.
"""

import numbers
import operator
from types import MappingProxyType

import numpy as np

from .. import _runtime
from ..errors import BoundsError
from .base import SparseMatrixBase


def _as_index(i):
    try:
        return operator.index(i)
    except TypeError:
        raise TypeError(f"matrix indices must be integers, got {i!r}") from None


def _as_value(value):
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise TypeError(f"matrix values must be real numbers, got {value!r}")
    return float(value)


class SparseMatrix(SparseMatrixBase):
    """Sparse matrix in dictionary-of-keys (DOK) format.

    Parameters
    ----------
    shape : tuple[int, int]
        Matrix shape ``(nrows, ncols)``; fixed for the matrix's lifetime.
    check : bool, optional
        Reject coordinates outside ``shape`` on assignment. ``None`` uses the
        process default from :func:`sparsemat.get_check_bounds`.

    Attributes
    ----------
    shape : tuple[int, int]
        Matrix dimensions.
    nrows, ncols : int
        ``shape[0]`` and ``shape[1]``.
    entries : mapping
        Read-only view of the ``(row, col) -> value`` storage.
    nnz : int
        Number of stored (non-zero) entries.

    Examples
    --------
    Build a small matrix and combine it with another::

        >>> from sparsemat import SparseMatrix
        >>> a = SparseMatrix.from_triples([(0, 0, 3), (1, 1, 5)], (2, 2))
        >>> b = SparseMatrix.from_triples([(0, 0, 1), (0, 1, 2)], (2, 2))
        >>> sorted((a + b).nonzero_entries())
        [(0, 0, 4.0), (0, 1, 2.0), (1, 1, 5.0)]
        >>> sorted((a @ b).nonzero_entries())
        [(0, 0, 3.0), (0, 1, 6.0)]
    """

    def __init__(self, shape, check=None):
        super().__init__(shape=shape, dtype=np.float64)
        self.check = _runtime.get_check_bounds() if check is None else bool(check)
        self._data = {}

    @classmethod
    def from_triples(cls, triples, shape, check=None):
        """Construct from an iterable of ``(row, col, value)`` triples.

        Triples are applied in order through :meth:`set`, so a repeated
        coordinate keeps its last value and zero values are dropped.

        Raises
        ------
        TypeError
            If an item is not a 3-sequence, or an index/value has the wrong type.
        BoundsError
            If bounds checking is on and a coordinate is outside ``shape``.
        """
        out = cls(shape, check=check)
        for item in triples:
            try:
                i, j, v = item
            except (TypeError, ValueError):
                raise TypeError(f"expected a (row, col, value) triple, got {item!r}") from None
            out.set(i, j, v)
        return out

    @classmethod
    def zeros(cls, shape, check=None):
        """Empty matrix of the given shape."""
        return cls(shape, check=check)

    @classmethod
    def eye(cls, n, check=None):
        """``n x n`` identity matrix."""
        out = cls((n, n), check=check)
        for i in range(out.nrows):
            out._data[(i, i)] = 1.0
        return out

    @classmethod
    def fromarray(cls, arr, check=None):
        """Construct from a dense 2D array, dropping zero entries."""
        arr = np.asarray(arr, dtype=np.float64)
        if arr.ndim != 2:
            raise ValueError("fromarray requires a 2D array")
        out = cls(arr.shape, check=check)
        for i, j in zip(*np.nonzero(arr)):
            out.set(int(i), int(j), float(arr[i, j]))
        return out

    @property
    def entries(self):
        return MappingProxyType(self._data)

    @property
    def nnz(self):
        """Number of stored non-zero entries (int)."""
        return len(self._data)

    @property
    def density(self):
        """Fraction of the declared extent that is stored, in ``[0, 1]``."""
        total = self.nrows * self.ncols
        return self.nnz / total if total else 0.0

    def get(self, row, col):
        """Value at ``(row, col)``, or ``0.0`` when nothing is stored there.

        Never raises, whatever the coordinate: out-of-range and unhashable
        indices both read as zero.
        """
        try:
            return self._data.get((row, col), 0.0)
        except TypeError:
            return 0.0

    def set(self, row, col, value):
        """Store ``value`` at ``(row, col)``; a zero value removes the entry.

        Raises
        ------
        TypeError
            If an index is not an integer or ``value`` is not a real number.
        BoundsError
            If bounds checking is on and the coordinate is outside ``shape``.
        """
        row = _as_index(row)
        col = _as_index(col)
        value = _as_value(value)
        if self.check and not (0 <= row < self.nrows and 0 <= col < self.ncols):
            raise BoundsError(row, col, self.shape)
        if _runtime.is_zero(value):
            self._data.pop((row, col), None)
        else:
            self._data[(row, col)] = value

    def nonzero_entries(self):
        """Iterate over stored ``(row, col, value)`` triples in no particular order."""
        for (i, j), v in self._data.items():
            yield i, j, v

    def row(self, i):
        """Non-zero entries of row ``i`` as a ``{col: value}`` dict."""
        return {c: v for (r, c), v in self._data.items() if r == i}

    def col(self, j):
        """Non-zero entries of column ``j`` as a ``{row: value}`` dict."""
        return {r: v for (r, c), v in self._data.items() if c == j}

    def copy(self):
        out = SparseMatrix(self.shape, check=self.check)
        out._data = dict(self._data)
        return out

    @property
    def T(self):
        """Transpose of the matrix as a new :class:`SparseMatrix`."""
        out = SparseMatrix((self.ncols, self.nrows), check=self.check)
        out._data = {(j, i): v for (i, j), v in self._data.items()}
        return out

    def __getitem__(self, key):
        """``A[i, j]`` is ``A.get(i, j)``."""
        if isinstance(key, tuple) and len(key) == 2:
            return self.get(*key)
        raise TypeError("SparseMatrix indices must be a (row, col) tuple")

    def __setitem__(self, key, value):
        """``A[i, j] = v`` is ``A.set(i, j, v)``."""
        if isinstance(key, tuple) and len(key) == 2:
            self.set(key[0], key[1], value)
            return
        raise TypeError("SparseMatrix indices must be a (row, col) tuple")

    def __eq__(self, other):
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return self.shape == other.shape and self._data == other._data

    __hash__ = None

    def __repr__(self):
        return f"SparseMatrix(shape={self.shape}, nnz={self.nnz})"

    def __add__(self, other):
        if isinstance(other, SparseMatrix):
            from ..arithmetic import add

            return add(self, other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, SparseMatrix):
            from ..arithmetic import subtract

            return subtract(self, other)
        return NotImplemented

    def __matmul__(self, other):
        if isinstance(other, SparseMatrix):
            from ..arithmetic import multiply

            return multiply(self, other)
        return NotImplemented

    def __mul__(self, alpha):
        """Scalar multiplication: returns ``alpha * self``."""
        if isinstance(alpha, SparseMatrix) or not isinstance(alpha, numbers.Real):
            return NotImplemented
        alpha = float(alpha)
        out = SparseMatrix(self.shape, check=self.check)
        for (i, j), v in self._data.items():
            p = v * alpha
            if not _runtime.is_zero(p):
                out._data[(i, j)] = p
        return out

    __rmul__ = __mul__

    def __neg__(self):
        return self * -1.0
