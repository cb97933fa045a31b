from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from billsplit.logging import get_logger
from billsplit.models import Bill, CalculationResult, Extra, Item, ItemShare, Participant
from billsplit.services.extras import allocate_extras
from billsplit.services.formatting import DEFAULT_CURRENCY, DEFAULT_LOCALE, RAW_DECIMALS, format_exact_amount
from billsplit.services.items import allocate_items
from billsplit.services.ledger import ParticipantAccount, canonical_order, open_accounts

log = get_logger(__name__)


class InvariantViolationError(RuntimeError):
    """Participant totals do not reconcile with the bill total.

    Never caused by user input; it means the allocator itself is wrong.
    """

    def __init__(
        self,
        participants_sum: int,
        items_total_cents: int,
        extras_total_cents: int,
        participant_totals: Mapping[str, int],
    ) -> None:
        expected = items_total_cents + extras_total_cents
        super().__init__(
            f"Invariant failed: sum of participants ({participants_sum}) != total ({expected})"
        )
        self.participants_sum = participants_sum
        self.items_total_cents = items_total_cents
        self.extras_total_cents = extras_total_cents
        self.participant_totals = dict(participant_totals)


def check_reconciliation(
    participant_totals: Mapping[str, int],
    items_total_cents: int,
    extras_total_cents: int,
) -> int:
    participants_sum = sum(participant_totals.values())
    grand_total = items_total_cents + extras_total_cents
    if participants_sum != grand_total:
        log.error(
            "split.invariant_failed",
            participants_sum=participants_sum,
            items_total_cents=items_total_cents,
            extras_total_cents=extras_total_cents,
            participant_totals=dict(participant_totals),
        )
        raise InvariantViolationError(
            participants_sum, items_total_cents, extras_total_cents, participant_totals
        )
    return grand_total


def format_exact_totals(
    accounts: Mapping[str, ParticipantAccount],
    *,
    decimals: int = RAW_DECIMALS,
    locale: str = DEFAULT_LOCALE,
    currency: str = DEFAULT_CURRENCY,
) -> dict[str, str]:
    return {
        pid: format_exact_amount(account.exact, decimals=decimals, locale=locale, currency=currency)
        for pid, account in accounts.items()
    }


def calculate_split(
    participants: Sequence[Participant],
    items: Sequence[Item],
    shares: Iterable[ItemShare],
    extras: Sequence[Extra] = (),
    base_fee_cents: int = 0,
    ai_cents: int = 0,
    *,
    include_raw: bool = True,
    raw_decimals: int = RAW_DECIMALS,
    locale: str = DEFAULT_LOCALE,
    currency: str = DEFAULT_CURRENCY,
) -> CalculationResult:
    """Distribute every cent of a bill among its participants.

    Items are split first, then extras on top of the item-only totals.
    Raises ``OrphanedItemError`` for an item nobody consumes and
    ``InvariantViolationError`` if the totals fail to reconcile.
    Platform fees are echoed on the result but never allocated.
    """
    accounts = open_accounts(participants)
    ordered = canonical_order(account.participant for account in accounts.values())

    items_allocation = allocate_items(items, shares, accounts)
    extras_allocation = allocate_extras(extras, ordered, accounts, items_allocation.items_total_cents)

    participant_totals = {pid: account.total_cents for pid, account in accounts.items()}

    grand_total = check_reconciliation(
        participant_totals,
        items_allocation.items_total_cents,
        extras_allocation.extras_total_cents,
    )

    raw = None
    if include_raw:
        raw = format_exact_totals(accounts, decimals=raw_decimals, locale=locale, currency=currency)

    log.debug(
        "split.calculated",
        participants=len(participant_totals),
        items=len(items),
        extras=len(extras),
        grand_total_cents=grand_total,
    )

    return CalculationResult(
        participant_totals=participant_totals,
        items_total_cents=items_allocation.items_total_cents,
        extras_total_cents=extras_allocation.extras_total_cents,
        grand_total_cents=grand_total,
        base_fee_cents=base_fee_cents,
        ai_cents=ai_cents,
        participant_totals_raw=raw,
        item_allocations=items_allocation.allocations,
        extra_allocations=extras_allocation.allocations,
        skipped_extras=extras_allocation.skipped,
    )


def calculate_bill(bill: Bill, base_fee_cents: int = 0, ai_cents: int = 0, **options: Any) -> CalculationResult:
    return calculate_split(
        bill.participants,
        bill.items,
        bill.shares,
        bill.extras,
        base_fee_cents,
        ai_cents,
        **options,
    )
