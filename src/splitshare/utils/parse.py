from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from splitshare.errors import InvalidAmount, InvalidSplit
from splitshare.money import to_amount


ENGLISH_MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4,
    "may": 5, "jun": 6, "jul": 7, "aug": 8,
    "sep": 9, "oct": 10, "nov": 11, "dec": 12
}

SPLIT_EQUAL = "equal"
SPLIT_CUSTOM = "custom"
SPLIT_CUSTOM_SPREAD = "custom+spread"
SPREAD_KEYWORD = "spread"


def split_command_args(text: str, command: str) -> list[str]:
    """'/addexpense a | b |' -> ['a', 'b']; the command may carry @botname."""
    body = re.sub(rf"^/{re.escape(command)}(@\w+)?", "", text.strip(), count=1)
    return [part.strip() for part in body.split("|") if part.strip()]


def parse_amount(text: str) -> Decimal:
    cleaned = text.strip().lstrip("$€£").strip()
    if not cleaned:
        raise InvalidAmount("Amount is missing")
    amount = to_amount(cleaned)
    if amount == 0:
        raise InvalidAmount("Amount must be greater than zero")
    return amount


def parse_custom_split(text: str) -> dict[str, str]:
    """
    Parse custom shares written as ``name=amount`` pairs.

    Supported forms:
    - Alex=12.50 Sam=7.50
    - Alex=12,50, Sam=7,50
    """
    result: dict[str, str] = {}
    for token in re.split(r"[\s;]+", text.strip()):
        token = token.strip().rstrip(",")
        if not token:
            continue
        name, sep, value = token.partition("=")
        if not sep or not name or not value:
            raise InvalidSplit(f"Expected name=amount, got '{token}'")
        result[name] = value
    if not result:
        raise InvalidSplit("Custom split needs at least one name=amount pair")
    return result


def parse_split_rule(text: str) -> tuple[str, list[str] | dict[str, str]]:
    """
    'equal Alex Sam' -> ('equal', ['Alex', 'Sam'])
    'custom Alex=10 Sam=5' -> ('custom', {'Alex': '10', 'Sam': '5'})
    'custom Alex=10 Sam=5 spread' -> ('custom+spread', {...}): the unallocated
    rest of the total is spread over the listed people.
    A bare list of names means an equal split.
    """
    words = text.strip().split(maxsplit=1)
    if not words:
        raise InvalidSplit("Split is missing")

    mode = words[0].lower()
    rest = words[1] if len(words) > 1 else ""
    if mode == SPLIT_CUSTOM:
        tokens = rest.split()
        if tokens and tokens[-1].lower() == SPREAD_KEYWORD:
            return SPLIT_CUSTOM_SPREAD, parse_custom_split(" ".join(tokens[:-1]))
        return SPLIT_CUSTOM, parse_custom_split(rest)
    if mode == SPLIT_EQUAL:
        return SPLIT_EQUAL, rest.replace(",", " ").split()
    return SPLIT_EQUAL, text.replace(",", " ").split()


def parse_expense_date(text: str, today: Optional[date] = None) -> date:
    """
    Parse an expense date.

    Supported formats:
    - today
    - 2023-06-15
    - 15.06.2023, 15/06/2023, 15-06-2023
    - Jun 15, 2023 / 15 June 2023
    """
    text = text.strip().lower()
    if text in ("", "today"):
        return today or date.today()

    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        pass

    match = re.fullmatch(r'(\d{1,2})[\.\-/](\d{1,2})[\.\-/](\d{4})', text)
    if match:
        day, month, year = (int(group) for group in match.groups())
        return _build_date(year, month, day)

    for month_name, month_num in ENGLISH_MONTHS.items():
        if text.startswith(month_name):
            match = re.fullmatch(r'[a-z]+\.?\s+(\d{1,2}),?\s+(\d{4})', text)
            if match:
                return _build_date(int(match.group(2)), month_num, int(match.group(1)))
        match = re.fullmatch(rf'(\d{{1,2}})\s+{month_name}[a-z]*\.?,?\s+(\d{{4}})', text)
        if match:
            return _build_date(int(match.group(2)), month_num, int(match.group(1)))

    raise ValueError("Could not recognise the date")


def _build_date(year: int, month: int, day: int) -> date:
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise ValueError("Could not recognise the date") from exc
