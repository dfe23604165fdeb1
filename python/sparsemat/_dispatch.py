from enum import Enum

from . import arithmetic


class Operation(Enum):
    """Binary operations offered to the command line menu."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def number(self) -> int:
        return list(Operation).index(self) + 1

    @property
    def noun(self) -> str:
        return _NOUNS[self]

    @classmethod
    def from_choice(cls, text):
        """Parse a menu selection: ``"1"``, ``"add"`` or ``"Add"``.

        Returns None for anything that is not one of the three operations.
        """
        if text is None:
            return None
        key = str(text).strip().lower()
        for op in cls:
            if key in (str(op.number), op.value):
                return op
        return None


_NOUNS = {
    Operation.ADD: "addition",
    Operation.SUBTRACT: "subtraction",
    Operation.MULTIPLY: "multiplication",
}


def dispatch(op, a, b, **kwargs):
    """Apply ``op`` to ``a`` and ``b``.

    Keyword arguments are forwarded to the arithmetic function, e.g.
    ``method="rows"`` for multiplication.
    """
    op = Operation(op)
    if op is Operation.ADD:
        return arithmetic.add(a, b, **kwargs)
    if op is Operation.SUBTRACT:
        return arithmetic.subtract(a, b, **kwargs)
    return arithmetic.multiply(a, b, **kwargs)
