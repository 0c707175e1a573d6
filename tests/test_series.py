from decimal import Decimal

import pytest

from ledgergraph import (
    AccountNotFound,
    ArithmeticOverflow,
    BalanceSeries,
    Ledger,
    LedgerGraphError,
    Transaction,
    series_for,
)


def test_series_for_account(toy_ledger):
    series = toy_ledger.series_for("Assets:Checking")
    assert series.account == "Assets:Checking"
    assert series.values == [-1, -1]
    assert series.min == -1
    assert series.max == -1


def test_series_bounds():
    series = BalanceSeries.from_values("a", [Decimal(3), Decimal(-7), Decimal("2.5")])
    assert (series.min, series.max) == (-7, 3)


def test_unknown_account_raises_not_found(toy_ledger):
    with pytest.raises(AccountNotFound):
        toy_ledger.series_for("Income:Amazon")


def test_module_function_matches_method(toy_ledger):
    assert series_for(toy_ledger, "Expenses:Food:Groceries") == toy_ledger.series_for(
        "Expenses:Food:Groceries"
    )


def test_series_is_a_copy(toy_ledger):
    series = toy_ledger.series_for("Assets:Checking")
    toy_ledger.apply(Transaction().post("Assets:Checking", 5).post("Income:Other"))
    assert series.values == [-1, -1]


def test_empty_series_is_not_allowed():
    with pytest.raises(LedgerGraphError):
        BalanceSeries.from_values("a", [])


def test_inconsistent_bounds_are_not_allowed():
    with pytest.raises(LedgerGraphError):
        BalanceSeries(account="a", values=[1, 2], min=0, max=2)


def test_cumulative():
    series = BalanceSeries.from_values("a", [Decimal(100), Decimal(-30), Decimal(-80)])
    balance = series.cumulative()
    assert balance.values == [100, 70, -10]
    assert (balance.min, balance.max) == (-10, 100)


def test_series_json_keeps_decimals():
    series = BalanceSeries.from_values("a", [Decimal("1.10")])
    assert BalanceSeries.model_validate_json(series.model_dump_json()) == series


def test_inexact_running_balance_raises_arithmetic_overflow():
    ledger = Ledger(postings={"a": [Decimal("1E+30"), Decimal("1E-30")]})
    with pytest.raises(ArithmeticOverflow):
        ledger.series_for("a").cumulative()


def test_running_balance_keeps_small_digits():
    series = BalanceSeries.from_values("a", [Decimal("1E+20"), Decimal("0.01")])
    assert series.cumulative().values[-1] == Decimal("100000000000000000000.01")
