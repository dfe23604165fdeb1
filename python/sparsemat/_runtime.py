import os

_FALSE_STRINGS = ("0", "false", "no", "off")


def _env_tolerance() -> float:
    env = os.environ.get("SPARSEMAT_ZERO_TOL")
    if env:
        try:
            tol = float(env)
        except ValueError:
            return 0.0
        if tol >= 0.0:
            return tol
    return 0.0


def _env_check_bounds() -> bool:
    env = os.environ.get("SPARSEMAT_CHECK_BOUNDS")
    if env is None:
        return True
    return env.strip().lower() not in _FALSE_STRINGS


_zero_tolerance = _env_tolerance()
_check_bounds = _env_check_bounds()


def set_zero_tolerance(tol: float) -> None:
    """Treat values with ``abs(value) <= tol`` as zero. ``0.0`` means exact."""
    global _zero_tolerance
    tol = float(tol)
    if not tol >= 0.0:
        raise ValueError("zero tolerance must be a non-negative number")
    _zero_tolerance = tol


def get_zero_tolerance() -> float:
    return _zero_tolerance


def set_check_bounds(flag: bool) -> None:
    """Default for matrices constructed with ``check=None``."""
    global _check_bounds
    _check_bounds = bool(flag)


def get_check_bounds() -> bool:
    return _check_bounds


def is_zero(value: float) -> bool:
    if _zero_tolerance == 0.0:
        return value == 0.0
    return abs(value) <= _zero_tolerance
