from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence


class SplitType(str, Enum):
    EQUAL = "EQUAL"
    CUSTOM = "CUSTOM"


class SettlementStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


@dataclass(frozen=True, slots=True)
class Member:
    id: str
    display_name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.display_name or self.id


@dataclass(frozen=True, slots=True)
class Share:
    participant: str
    share_cents: int


@dataclass(frozen=True, slots=True)
class ExpenseRecord:
    amount_cents: int
    payer: str
    shares: Sequence[Share] = ()


@dataclass(frozen=True, slots=True)
class SettlementRecord:
    from_participant: str
    to_participant: str
    amount_cents: int
    status: SettlementStatus = SettlementStatus.COMPLETED


@dataclass(frozen=True, slots=True)
class Balance:
    participant: str
    net_cents: int


@dataclass(frozen=True, slots=True)
class Transfer:
    from_participant: str
    to_participant: str
    amount_cents: int
