"""Balance series of one account, the data a chart is drawn from."""

from decimal import Decimal
from itertools import accumulate

from pydantic import BaseModel

from .base import LedgerGraphError, exact_arithmetic


class BalanceSeries(BaseModel):
    """Ordered quantities of an account with their bounds.

    Position in `values` is the order in which postings were applied,
    not a date.
    """

    account: str
    values: list[Decimal]
    min: Decimal
    max: Decimal

    @classmethod
    def from_values(cls, account: str, values: list[Decimal]):
        if not values:
            raise LedgerGraphError(f"No values for account {account}.")
        return cls(account=account, values=list(values), min=min(values), max=max(values))

    def model_post_init(self, _):
        if self.min != min(self.values) or self.max != max(self.values):
            raise LedgerGraphError(f"Bounds do not match values for {self.account}.")

    def cumulative(self) -> "BalanceSeries":
        """Running balance, starting from the first quantity."""
        with exact_arithmetic(f"running balance of {self.account}"):
            values = list(accumulate(self.values))
        return self.from_values(self.account, values)

    def __len__(self) -> int:
        return len(self.values)


def series_for(ledger, account: str) -> BalanceSeries:
    """Return balance series for *account* or raise AccountNotFound."""
    LedgerGraphError.must_exist(ledger, account)
    return BalanceSeries.from_values(account, ledger.get(account))
