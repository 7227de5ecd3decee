from __future__ import annotations

from decimal import Decimal
from typing import Literal, Mapping, Sequence

from splitshare.errors import InvalidSplit, SplitMismatch
from splitshare.logging import get_logger
from splitshare.models import ExpenseRecord, ShareEntry
from splitshare.money import CENT, AmountLike, from_cents, to_amount, to_cents

SplitPolicy = Literal["tolerate", "reject"]

log = get_logger(__name__)


def split_amount(amount_cents: int, consumers: Sequence[str]) -> dict[str, int]:
    if amount_cents < 0:
        raise InvalidSplit("amount_cents must be non-negative")
    if not consumers:
        raise InvalidSplit("consumers must not be empty")

    n = len(consumers)
    base_share, remainder = divmod(amount_cents, n)

    shares = [base_share for _ in consumers]
    for idx in range(remainder):
        shares[idx] += 1

    result: dict[str, int] = {}
    for consumer, share in zip(consumers, shares):
        result[consumer] = result.get(consumer, 0) + share
    return result


def split_equally(amount: AmountLike, participant_ids: Sequence[str], payer_id: str) -> list[ShareEntry]:
    """Split on the cent grid; leftover cents go to the first participants."""
    total = to_amount(amount)
    shares = split_amount(to_cents(total), participant_ids)
    return [
        ShareEntry(participant_id=pid, amount=from_cents(cents), paid=pid == payer_id)
        for pid, cents in shares.items()
    ]


def split_custom(amounts: Mapping[str, AmountLike | None], payer_id: str) -> list[ShareEntry]:
    shares: list[ShareEntry] = []
    for pid, raw in amounts.items():
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            continue
        shares.append(ShareEntry(participant_id=pid, amount=to_amount(raw), paid=pid == payer_id))
    if not shares:
        raise InvalidSplit("custom split needs at least one share")
    return shares


def shares_total(shares: Sequence[ShareEntry]) -> Decimal:
    return sum((to_amount(share.amount) for share in shares), Decimal("0"))


def check_shares(
    expense: ExpenseRecord,
    policy: SplitPolicy = "tolerate",
    tolerance: Decimal = CENT,
) -> Decimal:
    """Return the drift between the shares and the expense total.

    Under ``reject`` a drift of at least ``tolerance`` raises SplitMismatch;
    under ``tolerate`` it is only logged.
    """
    drift = to_amount(expense.amount) - shares_total(expense.shares)
    if abs(drift) >= tolerance:
        if policy == "reject":
            raise SplitMismatch(
                f"shares add up to {expense.amount - drift}, expense total is {expense.amount}"
            )
        log.warning("split.mismatch", expense_id=expense.id, drift=str(drift))
    return drift


def remaining_amount(total: AmountLike, shares: Sequence[ShareEntry]) -> Decimal:
    """Part of the total not yet allocated to any share; negative when over-allocated."""
    return to_amount(total) - shares_total(shares)


def distribute_remaining(total: AmountLike, shares: Sequence[ShareEntry]) -> list[ShareEntry]:
    """Spread the unallocated remainder across the existing shares on the cent grid."""
    if not shares:
        raise InvalidSplit("no shares to distribute the remaining amount over")

    remaining_cents = to_cents(remaining_amount(total, shares))
    ids = [share.participant_id for share in shares]
    extra = split_amount(abs(remaining_cents), ids)
    sign = -1 if remaining_cents < 0 else 1

    result: list[ShareEntry] = []
    for share in shares:
        # a repeated id takes its extra only once
        cents = extra.pop(share.participant_id, 0)
        amount = to_amount(share.amount) + sign * from_cents(cents)
        if amount < 0:
            raise InvalidSplit(f"shares exceed the total by {from_cents(-remaining_cents)}")
        result.append(ShareEntry(participant_id=share.participant_id, amount=amount, paid=share.paid))
    return result
