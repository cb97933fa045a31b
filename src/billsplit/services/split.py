from __future__ import annotations

from typing import Hashable, Mapping, Sequence, TypeVar

K = TypeVar("K", bound=Hashable)


def split_amount(amount_cents: int, recipients: Sequence[K]) -> dict[K, int]:
    """Even split; the remainder cents go to the first recipients in order."""
    if amount_cents < 0:
        raise ValueError("amount_cents must be non-negative")
    if not recipients:
        raise ValueError("recipients must not be empty")

    base, remainder = divmod(amount_cents, len(recipients))
    return {
        recipient: base + (1 if index < remainder else 0)
        for index, recipient in enumerate(recipients)
    }


def split_balanced(
    amount_cents: int,
    recipients: Sequence[K],
    running_totals: Mapping[K, int],
) -> dict[K, int]:
    """Even split; the remainder cents go to the recipients with the lowest running totals.

    ``recipients`` must already be in tie-break order: among equal running
    totals the earlier recipient wins.
    """
    if amount_cents < 0:
        raise ValueError("amount_cents must be non-negative")
    if not recipients:
        raise ValueError("recipients must not be empty")

    base, remainder = divmod(amount_cents, len(recipients))
    shares = {recipient: base for recipient in recipients}
    if remainder:
        # sorted() is stable, so ties keep the caller's order
        ranked = sorted(recipients, key=lambda recipient: running_totals.get(recipient, 0))
        for recipient in ranked[:remainder]:
            shares[recipient] += 1
    return shares


def apportion_largest_remainder(amount_cents: int, weights: Sequence[tuple[K, int]]) -> dict[K, int]:
    """Largest-remainder apportionment of ``amount_cents`` by integer weights.

    ``weights`` must already be in tie-break order. Every recipient gets
    ``floor(amount * weight / total)``; the leftover cents go one each to the
    largest fractional parts, earlier recipients first among equal parts.
    """
    if amount_cents < 0:
        raise ValueError("amount_cents must be non-negative")
    weight_total = sum(weight for _, weight in weights)
    if weight_total <= 0:
        raise ValueError("weights must have a positive total")

    shares: dict[K, int] = {}
    candidates: list[tuple[int, int, K]] = []
    for position, (key, weight) in enumerate(weights):
        floor_share, remainder = divmod(amount_cents * weight, weight_total)
        shares[key] = floor_share
        # every fractional part is remainder / weight_total, so remainders compare exactly
        candidates.append((remainder, position, key))

    leftover = amount_cents - sum(shares.values())
    candidates.sort(key=lambda candidate: (-candidate[0], candidate[1]))
    for _, _, key in candidates[:leftover]:
        shares[key] += 1
    return shares


def merge_shares(shares: Sequence[Mapping[K, int]]) -> dict[K, int]:
    result: dict[K, int] = {}
    for share in shares:
        for key, amount in share.items():
            result[key] = result.get(key, 0) + amount
    return result
