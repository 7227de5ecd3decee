from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from splitshare.config import get_settings
from splitshare.handlers.common import ledger_for
from splitshare.keyboards import back_keyboard
from splitshare.services.overview import format_overview
from splitshare.state import Ledger

balances_router = Router()


def render_balances(ledger: Ledger) -> str:
    return format_overview(
        ledger.balances(),
        ledger.settlements(),
        ledger.participants,
        current_user_id=ledger.owner_id,
        currency_symbol=get_settings().currency_symbol,
    )


@balances_router.message(Command("balances"))
async def cmd_balances(message: Message) -> None:
    ledger = ledger_for(message.chat.id)
    await message.answer(render_balances(ledger))


@balances_router.callback_query(lambda c: c.data == "menu:balances")
async def cb_balances(callback: CallbackQuery) -> None:
    ledger = ledger_for(callback.message.chat.id)
    await callback.message.edit_text(render_balances(ledger), reply_markup=back_keyboard())
    await callback.answer()
