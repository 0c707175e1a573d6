"""Double-entry transactions and zero-sum resolution of their postings."""

import datetime
import logging
from dataclasses import dataclass, field
from decimal import Decimal

from .base import MalformedTransaction, Numeric, exact_arithmetic, to_decimal

log = logging.getLogger(__name__)


@dataclass
class Present:
    """Amount stated in the journal."""

    quantity: Decimal


@dataclass
class Absent:
    """Amount left out, to be inferred from the other postings."""


@dataclass
class Posting:
    account: str
    amount: Present | Absent

    @classmethod
    def of(cls, account: str, amount: Numeric | None = None):
        if amount is None:
            return cls(account, Absent())
        return cls(account, Present(to_decimal(amount)))


@dataclass
class ResolvedPosting:
    account: str
    quantity: Decimal


@dataclass
class Transaction:
    description: str = ""
    postings: list[Posting] = field(default_factory=list)
    date: datetime.date | None = None

    def post(self, account: str, amount: Numeric | None = None):
        """Add posting, leave *amount* out to have it inferred."""
        self.postings.append(Posting.of(account, amount))
        return self

    @property
    def absent_count(self) -> int:
        return sum(1 for p in self.postings if isinstance(p.amount, Absent))

    def validate(self):
        if (n := self.absent_count) > 1:
            raise MalformedTransaction(
                f"Transaction {self.description!r} has {n} postings without amount, "
                "at most one is allowed."
            )
        return self


def resolve(transaction: Transaction) -> list[ResolvedPosting]:
    """Give every posting of *transaction* a signed quantity.

    Postings with amounts keep their position. The posting without amount
    receives the negated sum of the others and is placed last, whatever its
    position in the transaction was. With no such posting the amounts are
    returned as they are and their sum is not checked.
    """
    transaction.validate()
    resolved: list[ResolvedPosting] = []
    zero_sum = Decimal(0)
    pending: Posting | None = None
    with exact_arithmetic(f"sum of transaction {transaction.description!r}"):
        for posting in transaction.postings:
            match posting.amount:
                case Absent():
                    pending = posting
                case Present(quantity):
                    resolved.append(ResolvedPosting(posting.account, quantity))
                    zero_sum -= quantity
    if pending is not None:
        log.debug("Inferred %s for %s", zero_sum, pending.account)
        resolved.append(ResolvedPosting(pending.account, zero_sum))
    return resolved
