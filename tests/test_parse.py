from datetime import date
from decimal import Decimal

import pytest

from splitshare.errors import InvalidAmount, InvalidSplit
from splitshare.utils.parse import (
    parse_amount,
    parse_custom_split,
    parse_expense_date,
    parse_split_rule,
    split_command_args,
)


def test_split_command_args():
    parts = split_command_args("/addexpense@split_bot Dinner | 120 | You | equal |", "addexpense")
    assert parts == ["Dinner", "120", "You", "equal"]


def test_parse_amount():
    assert parse_amount("$85.50") == Decimal("85.50")
    assert parse_amount("12,5") == Decimal("12.5")


@pytest.mark.parametrize("raw", ["", "abc", "-3", "0", "nan"])
def test_parse_amount_invalid(raw):
    with pytest.raises(InvalidAmount):
        parse_amount(raw)


def test_parse_custom_split():
    assert parse_custom_split("Alex=12,50, Sam=7.50") == {"Alex": "12,50", "Sam": "7.50"}


def test_parse_custom_split_bad_token():
    with pytest.raises(InvalidSplit):
        parse_custom_split("Alex 12")


def test_parse_split_rule():
    assert parse_split_rule("equal") == ("equal", [])
    assert parse_split_rule("equal Alex, Sam") == ("equal", ["Alex", "Sam"])
    assert parse_split_rule("Alex Sam") == ("equal", ["Alex", "Sam"])
    assert parse_split_rule("custom Alex=10") == ("custom", {"Alex": "10"})
    assert parse_split_rule("custom Alex=10 Sam=5 spread") == ("custom+spread", {"Alex": "10", "Sam": "5"})


def test_parse_expense_date_formats():
    expected = date(2023, 6, 15)
    assert parse_expense_date("2023-06-15") == expected
    assert parse_expense_date("15.06.2023") == expected
    assert parse_expense_date("15/06/2023") == expected
    assert parse_expense_date("Jun 15, 2023") == expected
    assert parse_expense_date("15 June 2023") == expected
    assert parse_expense_date("today", today=expected) == expected


def test_parse_expense_date_invalid():
    with pytest.raises(ValueError):
        parse_expense_date("31.02.2023")
    with pytest.raises(ValueError):
        parse_expense_date("someday")
