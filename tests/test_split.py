from datetime import date
from decimal import Decimal

import pytest

from splitshare.errors import InvalidAmount, InvalidSplit, SplitMismatch
from splitshare.models import ExpenseRecord, ShareEntry
from splitshare.services.split import (
    check_shares,
    distribute_remaining,
    remaining_amount,
    split_amount,
    split_custom,
    split_equally,
)


def test_split_amount_even():
    shares = split_amount(1000, ["1", "2", "3", "4"])
    assert shares == {"1": 250, "2": 250, "3": 250, "4": 250}


def test_split_amount_remainder():
    shares = split_amount(1001, ["1", "2", "3"])
    assert sum(shares.values()) == 1001
    assert shares == {"1": 334, "2": 334, "3": 333}


def test_split_amount_empty_consumers():
    with pytest.raises(InvalidSplit):
        split_amount(100, [])


def test_split_equally_marks_payer_paid():
    shares = split_equally("100", ["1", "2", "3"], payer_id="2")

    assert [s.amount for s in shares] == [Decimal("33.34"), Decimal("33.33"), Decimal("33.33")]
    assert sum(s.amount for s in shares) == Decimal("100")
    assert [s.paid for s in shares] == [False, True, False]


def test_split_equally_rejects_negative_amount():
    with pytest.raises(InvalidAmount):
        split_equally(-10, ["1"], payer_id="1")


def test_split_custom_skips_blank_entries():
    shares = split_custom({"1": "12.50", "2": "", "3": 7.5, "4": None}, payer_id="1")

    assert shares == [
        ShareEntry("1", Decimal("12.50"), paid=True),
        ShareEntry("3", Decimal("7.5"), paid=False),
    ]


def test_split_custom_requires_a_share():
    with pytest.raises(InvalidSplit):
        split_custom({"1": ""}, payer_id="1")


def _expense(amount, shares):
    return ExpenseRecord(
        id="1",
        title="Groceries",
        amount=Decimal(amount),
        date=date(2023, 7, 1),
        paid_by="1",
        shares=[ShareEntry(pid, Decimal(value)) for pid, value in shares],
    )


def test_check_shares_tolerates_drift_by_default():
    drift = check_shares(_expense("90", [("1", "30"), ("2", "30")]))
    assert drift == Decimal("30")


def test_check_shares_reject_policy():
    with pytest.raises(SplitMismatch):
        check_shares(_expense("90", [("1", "30"), ("2", "30")]), policy="reject")


def test_check_shares_accepts_cent_rounding():
    drift = check_shares(_expense("100", [("1", "33.333"), ("2", "33.333"), ("3", "33.333")]), policy="reject")
    assert drift == Decimal("0.001")


def test_remaining_amount():
    shares = split_custom({"1": "10", "2": "10"}, payer_id="1")
    assert remaining_amount(100, shares) == Decimal("80")
    assert remaining_amount("15", shares) == Decimal("-5")
    assert remaining_amount(20, shares) == 0


def test_distribute_remaining_on_cent_grid():
    shares = split_custom({"1": "10", "2": "10", "3": "0"}, payer_id="1")

    spread = distribute_remaining(100, shares)

    assert [s.amount for s in spread] == [Decimal("36.67"), Decimal("36.67"), Decimal("26.66")]
    assert sum(s.amount for s in spread) == Decimal("100")
    assert [s.paid for s in spread] == [True, False, False]


def test_distribute_remaining_takes_back_excess():
    shares = split_custom({"1": "30", "2": "30"}, payer_id="1")

    spread = distribute_remaining(50, shares)

    assert [s.amount for s in spread] == [Decimal("25.00"), Decimal("25.00")]


def test_distribute_remaining_cannot_go_negative():
    shares = split_custom({"1": "1", "2": "30"}, payer_id="1")
    with pytest.raises(InvalidSplit):
        distribute_remaining(10, shares)


def test_distribute_remaining_needs_shares():
    with pytest.raises(InvalidSplit):
        distribute_remaining(10, [])
