from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence


@dataclass(slots=True)
class Participant:
    id: str
    name: str
    email: Optional[str] = None


@dataclass(slots=True)
class ShareEntry:
    participant_id: str
    amount: Decimal
    paid: bool = False


@dataclass(slots=True)
class ExpenseRecord:
    id: str
    title: str
    amount: Decimal
    date: date
    paid_by: str
    shares: Sequence[ShareEntry] = field(default_factory=list)
    settled: bool = False


@dataclass(frozen=True, slots=True)
class Balance:
    participant_id: str
    amount: Decimal


@dataclass(frozen=True, slots=True)
class Settlement:
    from_id: str
    to_id: str
    amount: Decimal
