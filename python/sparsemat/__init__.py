import logging

__version__ = "0.1.0"

logger = logging.getLogger("sparsemat")
logger.setLevel(logging.WARNING)
handler = logging.StreamHandler()
formatter = logging.Formatter(
    "[%(asctime)s][%(levelname)s] %(name)s: %(message)s", datefmt="%m-%d %H:%M:%S"
)
handler.setFormatter(formatter)

if not logger.handlers:
    logger.addHandler(handler)
    logger.propagate = False

from ._runtime import (
    get_check_bounds,
    get_zero_tolerance,
    set_check_bounds,
    set_zero_tolerance,
)
from .errors import BoundsError, DimensionMismatch, FormatError, SparseMatrixError
from .sparse import SparseMatrix
from .arithmetic import add, multiply, subtract
from ._dispatch import Operation, dispatch
from .io import dump, dumps, format_grid, load, loads

__all__ = [
    "__version__",
    "logger",
    "SparseMatrix",
    "add",
    "subtract",
    "multiply",
    "Operation",
    "dispatch",
    "load",
    "loads",
    "dump",
    "dumps",
    "format_grid",
    "SparseMatrixError",
    "FormatError",
    "DimensionMismatch",
    "BoundsError",
    "set_zero_tolerance",
    "get_zero_tolerance",
    "set_check_bounds",
    "get_check_bounds",
]
