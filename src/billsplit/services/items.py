from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

from billsplit.logging import get_logger
from billsplit.models import Item, ItemShare, Participant
from billsplit.services.ledger import ParticipantAccount, canonical_order
from billsplit.services.rational import share_of
from billsplit.services.split import merge_shares, split_balanced

log = get_logger(__name__)


class OrphanedItemError(ValueError):
    def __init__(self, item: Item) -> None:
        super().__init__(f'Item "{item.name}" has no valid consumers')
        self.item = item


@dataclass(slots=True)
class ItemsAllocation:
    items_total_cents: int = 0
    allocations: dict[str, dict[str, int]] = field(default_factory=dict)


def group_consumers(shares: Iterable[ItemShare]) -> dict[str, list[str]]:
    consumers: dict[str, list[str]] = {}
    for share in shares:
        bucket = consumers.setdefault(share.item_id, [])
        if share.participant_id not in bucket:
            bucket.append(share.participant_id)
    return consumers


def valid_consumers(
    item: Item,
    consumer_ids: Sequence[str],
    accounts: Mapping[str, ParticipantAccount],
) -> list[Participant]:
    # shares pointing at removed participants are ignored
    consumers = [accounts[pid].participant for pid in consumer_ids if pid in accounts]
    if not consumers:
        log.warning("split.item.orphaned", item_id=item.id, item_name=item.name)
        raise OrphanedItemError(item)
    return canonical_order(consumers)


def allocate_items(
    items: Sequence[Item],
    shares: Iterable[ItemShare],
    accounts: Mapping[str, ParticipantAccount],
) -> ItemsAllocation:
    result = ItemsAllocation()
    consumers_by_item = group_consumers(shares)

    for item in items:
        result.items_total_cents += item.amount_cents
        consumers = valid_consumers(item, consumers_by_item.get(item.id, []), accounts)
        consumer_ids = [consumer.id for consumer in consumers]

        running = {pid: accounts[pid].items_cents for pid in consumer_ids}
        allocation = split_balanced(item.amount_cents, consumer_ids, running)
        exact_share = share_of(item.amount_cents, len(consumer_ids))

        for pid, cents in allocation.items():
            account = accounts[pid]
            account.total_cents += cents
            account.items_cents += cents
            account.items_exact += exact_share
            account.exact += exact_share

        # a repeated item id folds into the same breakdown entry
        result.allocations[item.id] = merge_shares([result.allocations.get(item.id, {}), allocation])

    return result
