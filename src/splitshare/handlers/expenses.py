from __future__ import annotations

from html import escape
from typing import Optional

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from splitshare.config import get_settings
from splitshare.errors import SplitShareError
from splitshare.handlers.common import build_shares, ledger_for, resolve_participant_id
from splitshare.keyboards import expenses_keyboard, payer_keyboard
from splitshare.logging import get_logger
from splitshare.models import ExpenseRecord
from splitshare.services.overview import format_amount, format_expense_line, participant_index
from splitshare.services.split import remaining_amount
from splitshare.state import STEP_AMOUNT, STEP_PAYER, STEP_SPLIT, STEP_TITLE, Ledger, state
from splitshare.utils.parse import parse_amount, parse_expense_date, split_command_args

expenses_router = Router()
log = get_logger(__name__)

USAGE = (
    "Usage: /addexpense <title> | <amount> | <payer> | equal <names...> | <date>\n"
    "or: /addexpense <title> | <amount> | <payer> | custom Name=10 Name2=5 [spread]"
)


def render_expenses(ledger: Ledger) -> str:
    if not ledger.expenses:
        return "No expenses yet. Add one with /addexpense."
    symbol = get_settings().currency_symbol
    index = participant_index(ledger.participants)
    lines = ["<b>🧾 Expenses</b>"]
    lines.extend(format_expense_line(expense, index, symbol) for expense in ledger.expenses)
    return "\n".join(lines)


def _added_text(expense: ExpenseRecord) -> str:
    symbol = get_settings().currency_symbol
    text = f"✅ {escape(expense.title)} ({format_amount(expense.amount, symbol)}) has been added."
    remaining = remaining_amount(expense.amount, expense.shares)
    if remaining != 0:
        if remaining > 0:
            warning = f"{format_amount(remaining, symbol)} of the total is not allocated to anyone."
        else:
            warning = f"Shares exceed the total by {format_amount(remaining, symbol)}."
        text += f"\n⚠️ {warning} Add <i>spread</i> after custom shares to even it out."
    return text


@expenses_router.message(Command("addexpense"))
async def cmd_addexpense(message: Message) -> None:
    if not message.text:
        return
    user = message.from_user
    if not user:
        return

    parts = split_command_args(message.text, "addexpense")
    if not parts:
        state.clear_user(user.id)
        state.set_adding_expense(user.id)
        await message.answer("What was the expense for?")
        return

    if len(parts) < 4:
        await message.answer(escape(USAGE))
        return

    ledger = ledger_for(message.chat.id)
    try:
        amount = parse_amount(parts[1])
        payer_id = resolve_participant_id(ledger, parts[2])
        shares = build_shares(ledger, amount, payer_id, parts[3])
        expense_date = parse_expense_date(parts[4]) if len(parts) > 4 else None
        expense = ledger.add_expense(parts[0], amount, payer_id, shares, date=expense_date)
    except (SplitShareError, ValueError) as exc:
        await message.answer(f"❌ {escape(str(exc))}")
        return

    await message.answer(_added_text(expense))


@expenses_router.callback_query(lambda c: c.data == "menu:addexpense")
async def cb_addexpense(callback: CallbackQuery) -> None:
    user = callback.from_user
    state.clear_user(user.id)
    state.set_adding_expense(user.id)
    await callback.message.answer("What was the expense for?")
    await callback.answer()


def _in_expense_flow(message: Message) -> bool:
    if not message.from_user or not message.text or message.text.startswith("/"):
        return False
    return state.is_adding_expense(message.from_user.id)


@expenses_router.message(_in_expense_flow)
async def expense_flow_step(message: Message) -> None:
    user = message.from_user
    assert user and message.text
    ledger = ledger_for(message.chat.id)
    step = state.get_expense_step(user.id)
    text = message.text.strip()

    try:
        if step == STEP_TITLE:
            state.set_expense_data(user.id, "title", text)
            state.set_expense_step(user.id, STEP_AMOUNT)
            await message.answer("How much was it?")
        elif step == STEP_AMOUNT:
            parse_amount(text)
            state.set_expense_data(user.id, "amount", text)
            state.set_expense_step(user.id, STEP_PAYER)
            await message.answer("Who paid?", reply_markup=payer_keyboard(ledger.participants))
        elif step == STEP_PAYER:
            state.set_expense_data(user.id, "payer", resolve_participant_id(ledger, text))
            state.set_expense_step(user.id, STEP_SPLIT)
            await message.answer(_split_prompt())
        elif step == STEP_SPLIT:
            expense = _finish_expense(ledger, user.id, text)
            await message.answer(_added_text(expense))
    except (SplitShareError, ValueError) as exc:
        await message.answer(f"❌ {escape(str(exc))}\nTry again or send /start to cancel.")


@expenses_router.callback_query(lambda c: c.data and c.data.startswith("payer:"))
async def cb_choose_payer(callback: CallbackQuery) -> None:
    user = callback.from_user
    if state.get_expense_step(user.id) != STEP_PAYER:
        await callback.answer("Start with /addexpense", show_alert=True)
        return

    payer_id = callback.data.split(":", 1)[1]
    state.set_expense_data(user.id, "payer", payer_id)
    state.set_expense_step(user.id, STEP_SPLIT)
    await callback.message.answer(_split_prompt())
    await callback.answer()


def _split_prompt() -> str:
    return (
        "How should it be split?\n"
        "• equal — everyone\n"
        "• equal Alex Sam — only these friends\n"
        "• custom Alex=12.50 Sam=7.50\n"
        "• custom Alex=12.50 Sam=7.50 spread — share out what is left of the total"
    )


def _finish_expense(ledger: Ledger, user_id: int, rule: str) -> ExpenseRecord:
    data = state.get_expense_data(user_id)
    amount = parse_amount(data["amount"])
    shares = build_shares(ledger, amount, data["payer"], rule)
    expense = ledger.add_expense(data["title"], amount, data["payer"], shares)
    state.clear_user(user_id)
    return expense


@expenses_router.message(Command("expenses"))
async def cmd_expenses(message: Message) -> None:
    ledger = ledger_for(message.chat.id)
    await message.answer(render_expenses(ledger), reply_markup=expenses_keyboard(ledger.expenses))


@expenses_router.callback_query(lambda c: c.data == "menu:expenses")
async def cb_expenses(callback: CallbackQuery) -> None:
    ledger = ledger_for(callback.message.chat.id)
    await callback.message.edit_text(render_expenses(ledger), reply_markup=expenses_keyboard(ledger.expenses))
    await callback.answer()


def _settle(ledger: Ledger, expense_id: Optional[str]) -> tuple[str, bool]:
    if not expense_id:
        return escape("Usage: /settle <expense_id>"), False
    try:
        expense = ledger.get_expense(expense_id.lstrip("#"))
    except SplitShareError as exc:
        return f"❌ {escape(str(exc))}", False
    if expense.settled:
        return f"{escape(expense.title)} is already settled.", False
    ledger.settle_expense(expense.id)
    return f"✅ {escape(expense.title)} has been marked as settled.", True


@expenses_router.message(Command("settle"))
async def cmd_settle(message: Message) -> None:
    if not message.text:
        return
    parts = message.text.split()
    ledger = ledger_for(message.chat.id)
    text, _ = _settle(ledger, parts[1] if len(parts) > 1 else None)
    await message.answer(text)


@expenses_router.callback_query(lambda c: c.data and c.data.startswith("settle:"))
async def cb_settle(callback: CallbackQuery) -> None:
    ledger = ledger_for(callback.message.chat.id)
    text, changed = _settle(ledger, callback.data.split(":", 1)[1])
    if changed:
        await callback.message.edit_text(
            render_expenses(ledger), reply_markup=expenses_keyboard(ledger.expenses)
        )
    await callback.answer(text.replace("✅ ", ""))
