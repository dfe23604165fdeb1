"""Exceptions raised by sparsemat.

Every error derives from :class:`SparseMatrixError` and from the builtin
exception a caller would naturally catch for the same problem (``ValueError``
for malformed input and incompatible shapes, ``IndexError`` for coordinates
outside the declared extent).
"""


class SparseMatrixError(Exception):
    """Base class for all sparsemat errors."""


class FormatError(SparseMatrixError, ValueError):
    """A line of matrix text could not be parsed.

    Parameters
    ----------
    line : int
        1-based physical line number of the offending line.
    reason : str
        Human readable description of the problem.
    """

    def __init__(self, line, reason):
        self.line = line
        self.reason = reason
        super().__init__(f"line {line}: {reason}")


class DimensionMismatch(SparseMatrixError, ValueError):
    """Operand shapes are incompatible for the requested operation.

    Parameters
    ----------
    operation : str
        Name of the operation (``"add"``, ``"subtract"``, ``"multiply"``).
    expected : tuple
        Shape (or inner dimension) required of the right operand.
    actual : tuple
        What the right operand actually provided.
    """

    def __init__(self, operation, expected, actual):
        self.operation = operation
        self.expected = tuple(expected)
        self.actual = tuple(actual)
        super().__init__(
            f"matrix dimensions do not match for {operation}: "
            f"expected {_fmt_shape(self.expected)}, got {_fmt_shape(self.actual)}"
        )


class BoundsError(SparseMatrixError, IndexError):
    """A coordinate lies outside the matrix's declared shape."""

    def __init__(self, row, col, shape, line=None):
        self.row = row
        self.col = col
        self.shape = tuple(shape)
        self.line = line
        super().__init__(self._message())

    def _message(self):
        msg = f"index ({self.row}, {self.col}) out of bounds for shape {_fmt_shape(self.shape)}"
        if self.line is not None:
            msg = f"line {self.line}: {msg}"
        return msg

    def __str__(self):
        # line may be attached after construction by the text loader
        return self._message()


def _fmt_shape(shape):
    return "x".join("?" if d is None else str(d) for d in shape)
