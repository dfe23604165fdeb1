from .base import SparseArray, SparseMatrixBase
from .dok import SparseMatrix

__all__ = [
    "SparseArray",
    "SparseMatrixBase",
    "SparseMatrix",
]
