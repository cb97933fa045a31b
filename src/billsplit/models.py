from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence


class ExtraKind(str, Enum):
    FIXED = "FIXED"
    SERVICE_PERCENT = "SERVICE_PERCENT"


class AllocationMode(str, Enum):
    EQUAL = "EQUAL"
    PROPORTIONAL = "PROPORTIONAL"


@dataclass(slots=True, frozen=True)
class Participant:
    id: str
    name: str
    sort_order: int = 0


@dataclass(slots=True, frozen=True)
class Item:
    id: str
    name: str
    amount_cents: int


@dataclass(slots=True, frozen=True)
class ItemShare:
    item_id: str
    participant_id: str


@dataclass(slots=True, frozen=True)
class Extra:
    id: str
    kind: ExtraKind
    allocation_mode: AllocationMode
    value_cents: Optional[int] = None
    value_percent_bp: Optional[int] = None


@dataclass(slots=True, frozen=True)
class Bill:
    participants: Sequence[Participant]
    items: Sequence[Item]
    shares: Sequence[ItemShare]
    extras: Sequence[Extra] = ()


@dataclass(slots=True)
class CalculationResult:
    participant_totals: dict[str, int]
    items_total_cents: int
    extras_total_cents: int
    grand_total_cents: int
    base_fee_cents: int = 0
    ai_cents: int = 0
    participant_totals_raw: Optional[dict[str, str]] = None
    item_allocations: dict[str, dict[str, int]] = field(default_factory=dict)
    extra_allocations: dict[str, dict[str, int]] = field(default_factory=dict)
    skipped_extras: list[str] = field(default_factory=list)

    @property
    def platform_fees_cents(self) -> int:
        return self.base_fee_cents + self.ai_cents

    @property
    def final_total_to_pay_cents(self) -> int:
        return self.grand_total_cents + self.platform_fees_cents

    def platform_fee_due(self, wallet_balance_cents: int) -> int:
        """Platform fees still owed once the owner's wallet balance is spent."""
        return max(0, self.platform_fees_cents - wallet_balance_cents)

    def public_summary(self) -> dict[str, Any]:
        return {
            "totals": dict(self.participant_totals),
            "grand_total_cents": self.grand_total_cents,
        }

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "participant_totals": dict(self.participant_totals),
            "items_total_cents": self.items_total_cents,
            "extras_total_cents": self.extras_total_cents,
            "grand_total_cents": self.grand_total_cents,
            "base_fee_cents": self.base_fee_cents,
            "ai_cents": self.ai_cents,
            "platform_fees_cents": self.platform_fees_cents,
            "final_total_to_pay_cents": self.final_total_to_pay_cents,
            "item_allocations": {key: dict(value) for key, value in self.item_allocations.items()},
            "extra_allocations": {key: dict(value) for key, value in self.extra_allocations.items()},
            "skipped_extras": list(self.skipped_extras),
        }
        if self.participant_totals_raw is not None:
            data["participant_totals_raw"] = dict(self.participant_totals_raw)
        return data
