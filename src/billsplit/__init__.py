"""Exact, reproducible bill splitting with shared extras."""

from billsplit.models import (
    AllocationMode,
    Bill,
    CalculationResult,
    Extra,
    ExtraKind,
    Item,
    ItemShare,
    Participant,
)
from billsplit.services.calculation import InvariantViolationError, calculate_bill, calculate_split
from billsplit.services.items import OrphanedItemError

__all__ = [
    "AllocationMode",
    "Bill",
    "CalculationResult",
    "Extra",
    "ExtraKind",
    "InvariantViolationError",
    "Item",
    "ItemShare",
    "OrphanedItemError",
    "Participant",
    "calculate_bill",
    "calculate_split",
]
