import pytest

from ledgergraph import Ledger, Transaction

ASSETS_CHECKING = "Assets:Checking"
GROCERIES = "Expenses:Food:Groceries"


@pytest.fixture
def inferred_groceries() -> Transaction:
    return Transaction("Groceries").post(ASSETS_CHECKING, -1).post(GROCERIES)


@pytest.fixture
def stated_groceries() -> Transaction:
    return Transaction("Groceries").post(ASSETS_CHECKING, -1).post(GROCERIES, 1)


@pytest.fixture
def toy_ledger(inferred_groceries, stated_groceries) -> Ledger:
    return Ledger.from_list([inferred_groceries, stated_groceries])


JOURNAL = """\
; household journal
account Assets:Checking
    note main account

2024-01-01 * Opening
    Assets:Checking          100.00 EUR
    Equity:Opening


2024-01-05 Groceries ; weekly
    Assets:Checking          -12.50 EUR
    Expenses:Food:Groceries


2024/01/20 (42) Amazon refund
    Income:Amazon            EUR -30
    Assets:Checking          EUR 30
"""


@pytest.fixture
def journal_file(tmp_path):
    path = tmp_path / "household.ledger"
    path.write_text(JOURNAL, encoding="utf-8")
    return path
