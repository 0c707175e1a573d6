from contextlib import contextmanager
from decimal import Decimal, Inexact, Overflow, localcontext
from typing import Iterable

Numeric = int | float | Decimal


def to_decimal(amount: Numeric) -> Decimal:
    """Convert *amount* to Decimal, floats go through their string form."""
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


@contextmanager
def exact_arithmetic(what: str):
    """Decimal context where any rounding raises ArithmeticOverflow."""
    with localcontext() as ctx:
        ctx.traps[Inexact] = True
        ctx.traps[Overflow] = True
        try:
            yield ctx
        except (Overflow, Inexact) as e:
            raise ArithmeticOverflow(f"Cannot compute {what} exactly.") from e


class LedgerGraphError(Exception):
    pass

    @staticmethod
    def must_exist(collection: Iterable[str], name: str):
        if name not in collection:
            raise AccountNotFound(f"Account {name} not found.")


class AccountNotFound(LedgerGraphError):
    """Account never received a posting."""


class MalformedTransaction(LedgerGraphError):
    """More than one posting in a transaction has no amount."""


class ArithmeticOverflow(LedgerGraphError):
    """Sum of quantities cannot be represented exactly."""


class ParseError(LedgerGraphError):
    def __init__(self, message: str, source: str = "<string>", line: int = 0):
        super().__init__(f"{source}:{line}: {message}")
        self.source = source
        self.line = line
