from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Tuple

from splitshare.logging import get_logger
from splitshare.models import Balance, Settlement
from splitshare.money import AmountLike, to_amount

SETTLE_TOLERANCE = Decimal("0.01")

log = get_logger(__name__)

Entry = Tuple[str, Decimal]


def _extremes(working: Tuple[Entry, ...]) -> tuple[int, int]:
    debtor = creditor = 0
    for index, (_, amount) in enumerate(working):
        if amount < working[debtor][1]:
            debtor = index
        if amount > working[creditor][1]:
            creditor = index
    return debtor, creditor


def _apply(
    working: Tuple[Entry, ...],
    debtor: int,
    creditor: int,
    amount: Decimal,
    tolerance: Decimal,
) -> Tuple[Entry, ...]:
    adjusted: list[Entry] = []
    for index, (participant_id, balance) in enumerate(working):
        if index == debtor:
            balance += amount
        elif index == creditor:
            balance -= amount
        if abs(balance) > tolerance:
            adjusted.append((participant_id, balance))
    return tuple(adjusted)


def compute_settlements(
    balances: Iterable[Balance],
    *,
    tolerance: AmountLike = SETTLE_TOLERANCE,
) -> List[Settlement]:
    """Greedy largest-debtor to largest-creditor matching.

    Every step fully discharges at least one side, so K non-negligible
    balances produce at most K - 1 transfers. Settlements come back in the
    order they were resolved.
    """
    tolerance = to_amount(tolerance)
    initial: list[Entry] = []
    for balance in balances:
        amount = to_amount(balance.amount, allow_negative=True)
        if abs(amount) >= tolerance:
            initial.append((balance.participant_id, amount))
    working: Tuple[Entry, ...] = tuple(initial)

    transfers: list[Settlement] = []
    while len(working) > 1:
        debtor, creditor = _extremes(working)
        debt_id, debt_amount = working[debtor]
        cred_id, cred_amount = working[creditor]

        if abs(debt_amount) < tolerance or cred_amount < tolerance:
            break
        if debt_amount >= 0:
            # only creditors left, the input did not net to zero
            break

        transfer_amount = min(-debt_amount, cred_amount)
        transfers.append(Settlement(from_id=debt_id, to_id=cred_id, amount=transfer_amount))
        working = _apply(working, debtor, creditor, transfer_amount, tolerance)

    if working:
        log.debug("settlements.residue", remaining=len(working))
    return transfers
