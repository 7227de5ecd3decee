from __future__ import annotations

from datetime import date
from html import escape
from decimal import Decimal
from typing import Iterable, Mapping, Sequence

from splitshare.models import Balance, ExpenseRecord, Participant, Settlement
from splitshare.money import round_amount

UNKNOWN_NAME = "Unknown"
NO_BALANCES = "All expenses are settled! No balances to show."
NO_SETTLEMENTS = "No settlements needed! All balances are settled."


def participant_index(participants: Iterable[Participant]) -> dict[str, Participant]:
    return {participant.id: participant for participant in participants}


def participant_name(participants: Mapping[str, Participant], participant_id: str) -> str:
    participant = participants.get(participant_id)
    return participant.name if participant else UNKNOWN_NAME


def format_amount(amount: Decimal, currency_symbol: str = "$") -> str:
    return f"{currency_symbol}{round_amount(abs(amount)):.2f}"


def format_date(value: date) -> str:
    return f"{value:%b} {value.day}, {value.year}"


def initials(name: str) -> str:
    return "".join(part[0] for part in name.split() if part).upper()[:2]


def describe_balance(balance: Balance, current_user_id: str, currency_symbol: str = "$") -> str:
    amount = format_amount(balance.amount, currency_symbol)
    if balance.participant_id == current_user_id:
        return f"You are owed {amount}" if balance.amount > 0 else f"You owe {amount}"
    return f"Owes you {amount}" if balance.amount > 0 else f"You owe {amount}"


def format_expense_line(
    expense: ExpenseRecord,
    participants: Mapping[str, Participant],
    currency_symbol: str = "$",
) -> str:
    status = "Settled" if expense.settled else "Unsettled"
    return (
        f"#{expense.id} {escape(expense.title)} — {format_amount(expense.amount, currency_symbol)}"
        f" · {format_date(expense.date)}"
        f" · paid by {escape(participant_name(participants, expense.paid_by))}"
        f" · {status}"
    )


def format_settlement_line(
    settlement: Settlement,
    participants: Mapping[str, Participant],
    currency_symbol: str = "$",
) -> str:
    return (
        f"{escape(participant_name(participants, settlement.from_id))} → "
        f"{escape(participant_name(participants, settlement.to_id))}: "
        f"{format_amount(settlement.amount, currency_symbol)}"
    )


def format_overview(
    balances: Sequence[Balance],
    settlements: Sequence[Settlement],
    participants: Iterable[Participant],
    current_user_id: str,
    currency_symbol: str = "$",
) -> str:
    index = participant_index(participants)

    lines = ["<b>Current Balances</b>"]
    if not balances:
        lines.append(NO_BALANCES)
    for balance in balances:
        name = participant_name(index, balance.participant_id)
        lines.append(f"[{initials(name)}] {escape(name)}: {describe_balance(balance, current_user_id, currency_symbol)}")

    lines.append("")
    lines.append("<b>Suggested Settlements</b>")
    if not settlements:
        lines.append(NO_SETTLEMENTS)
    for settlement in settlements:
        lines.append(format_settlement_line(settlement, index, currency_symbol))

    return "\n".join(lines)
