from __future__ import annotations

from html import escape

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from splitshare.errors import SplitShareError
from splitshare.handlers.common import ledger_for
from splitshare.keyboards import back_keyboard
from splitshare.logging import get_logger
from splitshare.services.overview import initials
from splitshare.state import Ledger
from splitshare.utils.parse import split_command_args

friends_router = Router()
log = get_logger(__name__)


def render_friends(ledger: Ledger) -> str:
    lines = ["<b>👥 Friends</b>"]
    for participant in ledger.participants:
        line = f"[{initials(participant.name)}] {escape(participant.name)}"
        if participant.email:
            line += f" · {escape(participant.email)}"
        lines.append(line)
    return "\n".join(lines)


@friends_router.message(Command("friends"))
async def cmd_friends(message: Message) -> None:
    ledger = ledger_for(message.chat.id)
    await message.answer(render_friends(ledger))


@friends_router.callback_query(lambda c: c.data == "menu:friends")
async def cb_friends(callback: CallbackQuery) -> None:
    ledger = ledger_for(callback.message.chat.id)
    await callback.message.edit_text(render_friends(ledger), reply_markup=back_keyboard())
    await callback.answer()


@friends_router.message(Command("addfriend"))
async def cmd_addfriend(message: Message) -> None:
    if not message.text:
        return
    parts = split_command_args(message.text, "addfriend")
    if not parts:
        await message.answer(escape("Usage: /addfriend <name> | <email>"))
        return

    ledger = ledger_for(message.chat.id)
    email = parts[1] if len(parts) > 1 else None
    try:
        friend = ledger.add_friend(parts[0], email)
    except SplitShareError as exc:
        await message.answer(f"❌ {escape(str(exc))}")
        return

    log.info("friend.added", chat_id=message.chat.id, participant_id=friend.id)
    await message.answer(f"✅ {escape(friend.name)} has been added to your friends list.")
