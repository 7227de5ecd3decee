from __future__ import annotations

from typing import Sequence

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from splitshare.models import ExpenseRecord, Participant


def main_menu_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="🧾 Expenses", callback_data="menu:expenses")],
        [InlineKeyboardButton(text="👥 Friends", callback_data="menu:friends")],
        [InlineKeyboardButton(text="🧮 Balances", callback_data="menu:balances")],
        [InlineKeyboardButton(text="➕ Add Expense", callback_data="menu:addexpense")],
        [InlineKeyboardButton(text="ℹ️ Help", callback_data="menu:help")],
    ])


def back_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="◀️ Back to menu", callback_data="menu:main")]
    ])


def expenses_keyboard(expenses: Sequence[ExpenseRecord]) -> InlineKeyboardMarkup:
    rows: list[list[InlineKeyboardButton]] = []
    for expense in expenses:
        if expense.settled:
            continue
        rows.append(
            [InlineKeyboardButton(text=f"Settle #{expense.id}", callback_data=f"settle:{expense.id}")]
        )
    rows.append([InlineKeyboardButton(text="◀️ Back to menu", callback_data="menu:main")])
    return InlineKeyboardMarkup(inline_keyboard=rows)


def payer_keyboard(participants: Sequence[Participant]) -> InlineKeyboardMarkup:
    rows = [
        [InlineKeyboardButton(text=participant.name, callback_data=f"payer:{participant.id}")]
        for participant in participants
    ]
    rows.append([InlineKeyboardButton(text="Cancel", callback_data="menu:main")])
    return InlineKeyboardMarkup(inline_keyboard=rows)
