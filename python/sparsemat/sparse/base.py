"""Base classes for sparse arrays and matrices.

These classes define the minimal interface shared by concrete sparse types in
`sparsemat.sparse`, including shape bookkeeping and dense materialization for
display and testing.
"""

import operator

import numpy as np


class SparseArray:
    """Abstract base class for sparse N-dimensional arrays.

    Parameters
    ----------
    shape : tuple[int, ...]
        Array shape. Stored as a tuple of non-negative ints.
    dtype : numpy.dtype, optional
        Element dtype metadata, defaults to ``np.float64``.

    Attributes
    ----------
    shape : tuple[int, ...]
        Array shape.
    ndim : int
        Number of dimensions, equal to ``len(shape)``.
    dtype : numpy.dtype
        Element type metadata.

    Raises
    ------
    TypeError
        If a dimension is not an integer.
    ValueError
        If a dimension is negative.
    """

    def __init__(self, shape, dtype=np.float64):
        dims = []
        for d in shape:
            try:
                d = operator.index(d)
            except TypeError:
                raise TypeError(f"dimensions must be integers, got {d!r}") from None
            if d < 0:
                raise ValueError(f"dimensions must be non-negative, got {d}")
            dims.append(d)
        self._shape = tuple(dims)
        self.dtype = np.dtype(dtype)

    @property
    def shape(self):
        return self._shape

    @property
    def ndim(self):
        return len(self._shape)


class SparseMatrixBase(SparseArray):
    """Abstract base class for 2D sparse matrices.

    Parameters
    ----------
    shape : tuple[int, int]
        Matrix shape. Must be two-dimensional.
    dtype : numpy.dtype, optional
        Element dtype metadata.

    Raises
    ------
    ValueError
        If ``shape`` is not 2D.
    """

    def __init__(self, shape, dtype=np.float64):
        if len(shape) != 2:
            raise ValueError("sparse matrices require a 2D shape")
        super().__init__(shape, dtype=dtype)

    @property
    def nrows(self):
        return self._shape[0]

    @property
    def ncols(self):
        return self._shape[1]

    def nonzero_entries(self):
        raise NotImplementedError

    def toarray(self):
        """Return a dense numpy.ndarray with the same shape and dtype.

        Notes
        -----
        Only meant for display and testing. Entries stored outside the
        declared shape (possible when bounds checking is disabled) are
        ignored.
        """
        nrows, ncols = self._shape
        out = np.zeros((nrows, ncols), dtype=self.dtype)
        for i, j, v in self.nonzero_entries():
            if 0 <= i < nrows and 0 <= j < ncols:
                out[i, j] = v
        return out
