"""In-memory ledgers and per-user dialog state."""

from __future__ import annotations

from datetime import date as date_type
from typing import Optional, Sequence

from splitshare.errors import ExpenseNotFound, LedgerError
from splitshare.logging import get_logger
from splitshare.models import Balance, ExpenseRecord, Participant, Settlement, ShareEntry
from splitshare.money import CENT, AmountLike, to_amount
from splitshare.services.balances import compute_balances
from splitshare.services.settlement import compute_settlements
from splitshare.services.split import SplitPolicy, check_shares

CURRENT_USER_ID = "1"
CURRENT_USER_NAME = "You"

STEP_TITLE = "title"
STEP_AMOUNT = "amount"
STEP_PAYER = "payer"
STEP_SPLIT = "split"


class Ledger:
    def __init__(
        self,
        owner_name: str = CURRENT_USER_NAME,
        *,
        split_policy: SplitPolicy = "tolerate",
        tolerance: AmountLike = CENT,
    ) -> None:
        self.owner_id = CURRENT_USER_ID
        self.participants: list[Participant] = [Participant(id=CURRENT_USER_ID, name=owner_name)]
        self.expenses: list[ExpenseRecord] = []
        self.split_policy = split_policy
        self.tolerance = to_amount(tolerance)
        self._log = get_logger(__name__)

    def add_friend(self, name: str, email: Optional[str] = None) -> Participant:
        clean = name.strip()
        if not clean:
            raise LedgerError("Friend name must not be empty")
        friend = Participant(id=str(len(self.participants) + 1), name=clean, email=email or None)
        self.participants.append(friend)
        self._log.info("ledger.friend.added", participant_id=friend.id)
        return friend

    def find_participant(self, query: str) -> Optional[Participant]:
        needle = query.strip().lstrip("#").casefold()
        for participant in self.participants:
            if participant.id == needle or participant.name.casefold() == needle:
                return participant
        return None

    def add_expense(
        self,
        title: str,
        amount: AmountLike,
        paid_by: str,
        shares: Sequence[ShareEntry],
        date: Optional[date_type] = None,
    ) -> ExpenseRecord:
        if not title.strip():
            raise LedgerError("Expense title must not be empty")
        expense = ExpenseRecord(
            id=str(len(self.expenses) + 1),
            title=title.strip(),
            amount=to_amount(amount),
            date=date or date_type.today(),
            paid_by=paid_by,
            shares=list(shares),
            settled=False,
        )
        check_shares(expense, self.split_policy, self.tolerance)
        self.expenses.append(expense)
        self._log.info("ledger.expense.added", expense_id=expense.id, amount=str(expense.amount))
        return expense

    def get_expense(self, expense_id: str) -> ExpenseRecord:
        for expense in self.expenses:
            if expense.id == expense_id:
                return expense
        raise ExpenseNotFound(f"Expense #{expense_id} not found")

    def settle_expense(self, expense_id: str) -> ExpenseRecord:
        expense = self.get_expense(expense_id)
        if not expense.settled:
            expense.settled = True
            self._log.info("ledger.expense.settled", expense_id=expense.id)
        return expense

    def balances(self) -> list[Balance]:
        return compute_balances(self.expenses, self.participants)

    def settlements(self) -> list[Settlement]:
        return compute_settlements(self.balances(), tolerance=self.tolerance)


class LedgerStateManager:
    def __init__(self) -> None:
        self._ledgers: dict[int, Ledger] = {}
        self._adding_expense: dict[int, bool] = {}
        self._expense_data: dict[int, dict[str, str]] = {}  # answers collected so far
        self._expense_step: dict[int, str] = {}

    def get_ledger(
        self,
        chat_id: int,
        owner_name: str = CURRENT_USER_NAME,
        *,
        split_policy: SplitPolicy = "tolerate",
        tolerance: AmountLike = CENT,
    ) -> Ledger:
        ledger = self._ledgers.get(chat_id)
        if ledger is None:
            ledger = Ledger(owner_name, split_policy=split_policy, tolerance=tolerance)
            self._ledgers[chat_id] = ledger
        return ledger

    def set_adding_expense(self, user_id: int) -> None:
        self._adding_expense[user_id] = True
        self._expense_step[user_id] = STEP_TITLE

    def is_adding_expense(self, user_id: int) -> bool:
        return self._adding_expense.get(user_id, False)

    def set_expense_step(self, user_id: int, step: str) -> None:
        self._expense_step[user_id] = step

    def get_expense_step(self, user_id: int) -> Optional[str]:
        return self._expense_step.get(user_id)

    def set_expense_data(self, user_id: int, key: str, value: str) -> None:
        self._expense_data.setdefault(user_id, {})[key] = value

    def get_expense_data(self, user_id: int) -> dict[str, str]:
        return self._expense_data.get(user_id, {})

    def clear_user(self, user_id: int) -> None:
        self._adding_expense.pop(user_id, None)
        self._expense_data.pop(user_id, None)
        self._expense_step.pop(user_id, None)


state = LedgerStateManager()
