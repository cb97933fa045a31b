from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

from billsplit.logging import get_logger
from billsplit.models import AllocationMode, Extra, ExtraKind, Participant
from billsplit.services.ledger import ParticipantAccount
from billsplit.services.rational import scale, share_of
from billsplit.services.split import apportion_largest_remainder, merge_shares, split_amount

log = get_logger(__name__)

BASIS_POINTS = 10_000


@dataclass(slots=True)
class ExtrasAllocation:
    extras_total_cents: int = 0
    allocations: dict[str, dict[str, int]] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)


def extra_amount_cents(extra: Extra, items_total_cents: int) -> int:
    """Integer amount of an extra; percentages apply to the items total only."""
    if extra.kind == ExtraKind.FIXED:
        return extra.value_cents or 0
    if extra.kind == ExtraKind.SERVICE_PERCENT:
        return items_total_cents * (extra.value_percent_bp or 0) // BASIS_POINTS
    raise ValueError(f"unknown extra kind: {extra.kind!r}")


def allocate_extras(
    extras: Sequence[Extra],
    participants: Sequence[Participant],
    accounts: Mapping[str, ParticipantAccount],
    items_total_cents: int,
) -> ExtrasAllocation:
    """Distribute every extra across ``participants`` (in canonical order).

    The proportional base is the item-only consumption captured in
    ``accounts``; nothing allocated here feeds back into it.
    """
    result = ExtrasAllocation()
    participant_ids = [participant.id for participant in participants]

    for extra in extras:
        amount = extra_amount_cents(extra, items_total_cents)
        if amount <= 0:
            result.extras_total_cents += amount
            continue

        if extra.allocation_mode == AllocationMode.EQUAL:
            if not participant_ids:
                _skip(result, extra, amount, reason="no_participants")
                continue
            allocation = split_amount(amount, participant_ids)
            exact_part = share_of(amount, len(participant_ids))
            for pid in participant_ids:
                accounts[pid].exact += exact_part
        elif extra.allocation_mode == AllocationMode.PROPORTIONAL:
            weights = [(pid, accounts[pid].items_cents) for pid in participant_ids]
            if sum(weight for _, weight in weights) <= 0:
                _skip(result, extra, amount, reason="no_consumption")
                continue
            allocation = apportion_largest_remainder(amount, weights)
        else:
            raise ValueError(f"unknown allocation mode: {extra.allocation_mode!r}")

        result.extras_total_cents += amount
        for pid, cents in allocation.items():
            accounts[pid].total_cents += cents
        result.allocations[extra.id] = merge_shares([result.allocations.get(extra.id, {}), allocation])

    accumulate_exact_proportional(extras, participant_ids, accounts, items_total_cents)
    return result


def accumulate_exact_proportional(
    extras: Sequence[Extra],
    participant_ids: Sequence[str],
    accounts: Mapping[str, ParticipantAccount],
    items_total_cents: int,
) -> None:
    """Add the unrounded proportional shares to the exact accumulators.

    Uses the exact item-only consumption, so the display figures never see
    the largest-remainder rounding of the integer pass.
    """
    if items_total_cents <= 0:
        return
    for extra in extras:
        if extra.allocation_mode != AllocationMode.PROPORTIONAL:
            continue
        amount = extra_amount_cents(extra, items_total_cents)
        if amount <= 0:
            continue
        for pid in participant_ids:
            account = accounts[pid]
            account.exact += scale(account.items_exact, amount, items_total_cents)


def _skip(result: ExtrasAllocation, extra: Extra, amount: int, *, reason: str) -> None:
    log.info("split.extra.skipped", extra_id=extra.id, amount_cents=amount, reason=reason)
    result.skipped.append(extra.id)
