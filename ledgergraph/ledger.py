"""Per-account history of posting quantities.

The main class is `Ledger`. A ledger is created empty for a run and fed
transactions one at a time with `Ledger.apply()`. Each transaction is resolved
first (see `entry.resolve`), then every resolved quantity is appended to the
sequence of its account.

Conventions:

- account names are exact, case-sensitive keys
- sequences are append-only and keep the order in which postings were applied
- two postings to one account in a transaction make two entries
- quantities carry no commodity, all amounts are plain decimals
"""

import logging
from collections import UserDict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

import simplejson as json  # type: ignore

from .base import exact_arithmetic
from .entry import Transaction, resolve
from .series import BalanceSeries, series_for

log = logging.getLogger(__name__)


@dataclass
class Ledger:
    postings: dict[str, list[Decimal]] = field(default_factory=dict)

    @classmethod
    def from_list(cls, transactions: Iterable[Transaction]):
        return cls().apply_many(transactions)

    def apply(self, transaction: Transaction):
        # resolve before touching state, a bad transaction leaves ledger as is
        resolved = resolve(transaction)
        for posting in resolved:
            self.postings.setdefault(posting.account, []).append(posting.quantity)
        log.debug("Applied %d postings from %r", len(resolved), transaction.description)
        return self

    def apply_many(self, transactions: Iterable[Transaction]):
        for transaction in transactions:
            self.apply(transaction)
        return self

    def get(self, account: str) -> list[Decimal] | None:
        """Return quantities posted to *account* or None if account is unknown.

        The list is the ledger's own, callers must not modify it.
        """
        return self.postings.get(account)

    def __contains__(self, account: str) -> bool:
        return account in self.postings

    @property
    def accounts(self) -> list[str]:
        """Account names in the order they were first posted to."""
        return list(self.postings.keys())

    @property
    def totals(self) -> "ReportDict":
        with exact_arithmetic("account totals"):
            return ReportDict(
                {name: Decimal(sum(values)) for name, values in self.postings.items()}
            )

    def series_for(self, account: str) -> BalanceSeries:
        return series_for(self, account)


class ReportDict(UserDict[str, Decimal]):
    @property
    def total(self):
        with exact_arithmetic("report total"):
            return Decimal(sum(self.data.values()))

    def model_dump_json(self, indent: int = 2):
        return json.dumps(self.data, indent=indent)

    @classmethod
    def model_validate_json(cls, text: str):
        return cls(json.loads(text, use_decimal=True))
