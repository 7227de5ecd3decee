from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.types import CallbackQuery, Message

from splitshare.keyboards import back_keyboard, main_menu_keyboard
from splitshare.state import state

basic_router = Router()

HELP_TEXT = (
    "<b>📖 Commands</b>\n\n"
    "<b>Friends:</b>\n"
    "/friends - list friends\n"
    "/addfriend [name] | [email] - add a friend\n\n"
    "<b>Expenses:</b>\n"
    "/addexpense - add an expense step by step\n"
    "/expenses - list expenses\n"
    "/settle [id] - mark an expense as settled\n"
    "/balances - balances and suggested settlements\n\n"
    "<b>One-line format:</b>\n"
    "• /addexpense [title] | [amount] | [payer] | equal [names...] | [date]\n"
    "• /addexpense [title] | [amount] | [payer] | custom Name=10 Name2=5 [spread]\n"
)


def _welcome(first_name: str) -> str:
    return (
        f"👋 Hi, {first_name}!\n\n"
        "I'm <b>SplitShare</b>. I keep track of shared expenses and tell you who owes whom.\n\n"
        "Choose an action:"
    )


@basic_router.message(CommandStart())
async def cmd_start(message: Message) -> None:
    user = message.from_user
    if not user:
        return

    state.clear_user(user.id)
    await message.answer(_welcome(user.first_name), reply_markup=main_menu_keyboard())


@basic_router.callback_query(lambda c: c.data == "menu:main")
async def cb_main_menu(callback: CallbackQuery) -> None:
    user = callback.from_user
    if user:
        state.clear_user(user.id)

    first_name = user.first_name if user else "friend"
    await callback.message.edit_text(_welcome(first_name), reply_markup=main_menu_keyboard())
    await callback.answer()


@basic_router.callback_query(lambda c: c.data == "menu:help")
async def cb_help_menu(callback: CallbackQuery) -> None:
    await callback.message.edit_text(HELP_TEXT, reply_markup=back_keyboard())
    await callback.answer()


@basic_router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    await message.answer(HELP_TEXT + "\nUse /start to return to the main menu")
