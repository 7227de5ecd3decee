from __future__ import annotations

from decimal import Decimal

from splitshare.config import get_settings
from splitshare.errors import InvalidSplit
from splitshare.models import ShareEntry
from splitshare.services.split import distribute_remaining, split_custom, split_equally
from splitshare.state import Ledger, state
from splitshare.utils.parse import SPLIT_CUSTOM, SPLIT_CUSTOM_SPREAD, parse_split_rule


def ledger_for(chat_id: int) -> Ledger:
    settings = get_settings()
    return state.get_ledger(
        chat_id,
        split_policy=settings.split_policy,
        tolerance=settings.settle_tolerance,
    )


def resolve_participant_id(ledger: Ledger, name: str) -> str:
    participant = ledger.find_participant(name)
    if participant is None:
        raise InvalidSplit(f"Unknown friend: {name}. Add them with /addfriend first.")
    return participant.id


def build_shares(ledger: Ledger, amount: Decimal, payer_id: str, rule: str) -> list[ShareEntry]:
    mode, value = parse_split_rule(rule)
    if mode in (SPLIT_CUSTOM, SPLIT_CUSTOM_SPREAD):
        assert isinstance(value, dict)
        amounts = {resolve_participant_id(ledger, name): raw for name, raw in value.items()}
        shares = split_custom(amounts, payer_id)
        if mode == SPLIT_CUSTOM_SPREAD:
            return distribute_remaining(amount, shares)
        return shares

    assert isinstance(value, list)
    if value:
        ids = [resolve_participant_id(ledger, name) for name in value]
    else:
        ids = [participant.id for participant in ledger.participants]
    return split_equally(amount, ids, payer_id)
