"""SplitShare: shared expenses, net balances and suggested settlements."""

from splitshare.models import Balance, ExpenseRecord, Participant, Settlement, ShareEntry
from splitshare.services import compute_balances, compute_settlements

__all__ = [
    "Balance",
    "ExpenseRecord",
    "Participant",
    "Settlement",
    "ShareEntry",
    "compute_balances",
    "compute_settlements",
]
