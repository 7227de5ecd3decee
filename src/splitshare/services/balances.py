from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Sequence

from splitshare.logging import get_logger
from splitshare.models import Balance, ExpenseRecord, Participant
from splitshare.money import ZERO, to_amount

log = get_logger(__name__)


def compute_balances(
    expenses: Sequence[ExpenseRecord],
    participants: Iterable[Participant] = (),
) -> List[Balance]:
    """Reduce unsettled expenses to one signed net amount per participant.

    Positive means the group owes the participant. Identifiers that are not
    among ``participants`` are carried through as they are. Zero balances are
    dropped and the rest is ordered largest first.
    """
    running: dict[str, Decimal] = {}
    for participant in participants:
        running.setdefault(participant.id, ZERO)

    for expense in expenses:
        if expense.settled:
            continue
        payer = expense.paid_by
        running.setdefault(payer, ZERO)
        for share in expense.shares:
            amount = to_amount(share.amount)
            if share.participant_id == payer:
                continue
            running[payer] += amount
            running[share.participant_id] = running.get(share.participant_id, ZERO) - amount

    balances = [Balance(participant_id=pid, amount=amount) for pid, amount in running.items() if amount != 0]
    balances.sort(key=lambda b: b.amount, reverse=True)

    log.debug("balances.computed", expenses=len(expenses), nonzero=len(balances))
    return balances
