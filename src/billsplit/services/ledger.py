from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable

from billsplit.models import Participant
from billsplit.services.rational import ZERO


@dataclass(slots=True)
class ParticipantAccount:
    """Per-participant running totals for one calculation.

    The integer and exact accumulators are updated side by side and never
    derived from each other.
    """

    participant: Participant
    total_cents: int = 0
    items_cents: int = 0
    items_exact: Fraction = ZERO
    exact: Fraction = ZERO


def canonical_key(participant: Participant) -> tuple[int, str]:
    return participant.sort_order, participant.id


def canonical_order(participants: Iterable[Participant]) -> list[Participant]:
    return sorted(participants, key=canonical_key)


def open_accounts(participants: Iterable[Participant]) -> dict[str, ParticipantAccount]:
    return {participant.id: ParticipantAccount(participant) for participant in participants}
