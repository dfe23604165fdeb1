import argparse
import logging
import sys

from . import logger
from ._dispatch import Operation, dispatch
from .arithmetic import MULTIPLY_METHODS
from .errors import SparseMatrixError
from .io import dump, format_grid, load


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="sparsemat",
        description="Add, subtract or multiply two sparse matrices read from text files",
    )
    p.add_argument("matrix_a", help="Path of the left operand")
    p.add_argument("matrix_b", help="Path of the right operand")
    p.add_argument(
        "--op",
        choices=[op.value for op in Operation],
        default=None,
        help="Operation to run; prompts with a menu when omitted",
    )
    p.add_argument(
        "--method",
        choices=MULTIPLY_METHODS,
        default="probe",
        help="Multiplication strategy (results are identical)",
    )
    p.add_argument("--output", default=None, help="Also write the result to this path")
    p.add_argument(
        "--no-check",
        action="store_true",
        help="Accept coordinates outside the declared shape",
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return p


def prompt_operation(stdin, stdout):
    """Show the operation menu and read one selection from ``stdin``."""
    stdout.write("Choose operation:\n")
    for op in Operation:
        stdout.write(f"{op.number}. {op.label}\n")
    stdout.write("Enter your choice (1/2/3): ")
    stdout.flush()
    line = stdin.readline()
    return Operation.from_choice(line) if line else None


def main(argv=None, stdin=None, stdout=None, stderr=None) -> int:
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    stderr = sys.stderr if stderr is None else stderr

    args = build_parser().parse_args(argv)
    logger.setLevel(getattr(logging, args.log_level))
    check = False if args.no_check else None

    try:
        a = load(args.matrix_a, check=check)
        b = load(args.matrix_b, check=check)
    except (SparseMatrixError, OSError) as e:
        stderr.write(f"error: {e}\n")
        return 1

    if args.op is None:
        op = prompt_operation(stdin, stdout)
        if op is None:
            stdout.write("\nInvalid choice.\n")
            return 0
        stdout.write("\n")
    else:
        op = Operation(args.op)

    kwargs = {"method": args.method} if op is Operation.MULTIPLY else {}
    logger.info("running %s on %s and %s", op.value, a, b)
    try:
        result = dispatch(op, a, b, **kwargs)
    except SparseMatrixError as e:
        stderr.write(f"error: {e}\n")
        return 1

    stdout.write(f"Result of {op.noun}:\n")
    grid = format_grid(result)
    if grid:
        stdout.write(grid + "\n")

    if args.output is not None:
        try:
            dump(result, args.output)
        except OSError as e:
            stderr.write(f"error: {e}\n")
            return 1
        logger.info("wrote result to %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
