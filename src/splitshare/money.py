"""Amount helpers shared by the split, balance and settlement services."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from splitshare.errors import InvalidAmount

CENT = Decimal("0.01")
ZERO = Decimal("0")

AmountLike = Union[Decimal, int, float, str]


def to_amount(value: AmountLike, *, allow_negative: bool = False) -> Decimal:
    if isinstance(value, bool):
        raise InvalidAmount(f"not an amount: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            # str() keeps 0.1 as 0.1 instead of its binary expansion
            amount = Decimal(str(value).strip().replace(",", "."))
        except (InvalidOperation, ValueError) as exc:
            raise InvalidAmount(f"not an amount: {value!r}") from exc

    if not amount.is_finite():
        raise InvalidAmount(f"amount must be finite, got {value!r}")
    if amount < 0 and not allow_negative:
        raise InvalidAmount(f"amount must be non-negative, got {value!r}")
    return amount


def to_cents(amount: Decimal) -> int:
    return int(amount.quantize(CENT, rounding=ROUND_HALF_UP) * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


def round_amount(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)
