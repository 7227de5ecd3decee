from datetime import date
from decimal import Decimal

import pytest

from splitshare.errors import ExpenseNotFound, LedgerError, SplitMismatch
from splitshare.models import Balance, Settlement, ShareEntry
from splitshare.services.split import split_equally
from splitshare.state import CURRENT_USER_ID, STEP_AMOUNT, STEP_TITLE, Ledger, LedgerStateManager


def _ledger_with_friends() -> Ledger:
    ledger = Ledger()
    ledger.add_friend("Alex", "alex@example.com")
    ledger.add_friend("Sam")
    ledger.add_friend("Jordan")
    return ledger


def test_friends_get_sequential_ids():
    ledger = _ledger_with_friends()
    assert [p.id for p in ledger.participants] == [CURRENT_USER_ID, "2", "3", "4"]
    assert ledger.find_participant("alex").id == "2"
    assert ledger.find_participant("#3").name == "Sam"
    assert ledger.find_participant("nobody") is None


def test_blank_friend_name_rejected():
    with pytest.raises(LedgerError):
        Ledger().add_friend("   ")


def test_sample_ledger_balances_and_settlements():
    ledger = _ledger_with_friends()
    ledger.add_expense("Dinner", 120, "1", split_equally(120, ["1", "2", "3", "4"], "1"), date(2023, 6, 15))
    ledger.add_expense("Movie Tickets", 60, "2", split_equally(60, ["1", "2", "3"], "2"), date(2023, 6, 20))
    ledger.add_expense("Groceries", "85.50", "1", split_equally("85.50", ["1", "4"], "1"), date(2023, 7, 1))

    assert ledger.balances() == [
        Balance("1", Decimal("112.75")),
        Balance("2", Decimal("10")),
        Balance("3", Decimal("-50")),
        Balance("4", Decimal("-72.75")),
    ]
    assert ledger.settlements() == [
        Settlement("4", "1", Decimal("72.75")),
        Settlement("3", "1", Decimal("40.00")),
        Settlement("3", "2", Decimal("10.00")),
    ]


def test_settling_is_one_way_and_idempotent():
    ledger = _ledger_with_friends()
    expense = ledger.add_expense("Taxi", 20, "2", split_equally(20, ["1", "2"], "2"))

    assert ledger.balances() != []
    ledger.settle_expense(expense.id)
    ledger.settle_expense(expense.id)

    assert expense.settled is True
    assert ledger.balances() == []
    assert ledger.settlements() == []


def test_settle_unknown_expense():
    with pytest.raises(ExpenseNotFound):
        Ledger().settle_expense("42")


def test_reject_policy_blocks_mismatched_shares():
    ledger = Ledger(split_policy="reject")
    with pytest.raises(SplitMismatch):
        ledger.add_expense("Pizza", 30, "1", [ShareEntry("1", Decimal("10"))])
    assert ledger.expenses == []


def test_state_manager_keeps_one_ledger_per_chat():
    manager = LedgerStateManager()
    first = manager.get_ledger(100)
    first.add_friend("Alex")

    assert manager.get_ledger(100) is first
    assert manager.get_ledger(200) is not first


def test_state_manager_expense_flow():
    manager = LedgerStateManager()
    manager.set_adding_expense(7)
    assert manager.is_adding_expense(7)
    assert manager.get_expense_step(7) == STEP_TITLE

    manager.set_expense_data(7, "title", "Dinner")
    manager.set_expense_step(7, STEP_AMOUNT)
    assert manager.get_expense_data(7) == {"title": "Dinner"}

    manager.clear_user(7)
    assert not manager.is_adding_expense(7)
    assert manager.get_expense_data(7) == {}
    assert manager.get_expense_step(7) is None
