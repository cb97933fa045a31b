from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt, StrictStr

from billsplit.models import AllocationMode, Bill, Extra, ExtraKind, Item, ItemShare, Participant


class SnapshotRow(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class ParticipantRow(SnapshotRow):
    id: Union[StrictInt, StrictStr]
    name: str = ""
    sort_order: StrictInt = Field(0, validation_alias=AliasChoices("sort_order", "sortOrder"))

    def to_model(self) -> Participant:
        return Participant(id=str(self.id), name=self.name, sort_order=self.sort_order)


class ItemRow(SnapshotRow):
    id: Union[StrictInt, StrictStr]
    name: str = ""
    amount_cents: StrictInt = Field(..., ge=0, validation_alias=AliasChoices("amount_cents", "amountCents"))

    def to_model(self) -> Item:
        return Item(id=str(self.id), name=self.name, amount_cents=self.amount_cents)


class ShareRow(SnapshotRow):
    item_id: Union[StrictInt, StrictStr] = Field(..., validation_alias=AliasChoices("item_id", "itemId"))
    participant_id: Union[StrictInt, StrictStr] = Field(
        ..., validation_alias=AliasChoices("participant_id", "participantId")
    )

    def to_model(self) -> ItemShare:
        return ItemShare(item_id=str(self.item_id), participant_id=str(self.participant_id))


class ExtraRow(SnapshotRow):
    id: Union[StrictInt, StrictStr]
    kind: ExtraKind = Field(..., validation_alias=AliasChoices("kind", "type"))
    allocation_mode: AllocationMode = Field(..., validation_alias=AliasChoices("allocation_mode", "allocationMode"))
    value_cents: Optional[StrictInt] = Field(None, ge=0, validation_alias=AliasChoices("value_cents", "valueCents"))
    value_percent_bp: Optional[StrictInt] = Field(
        None, ge=0, validation_alias=AliasChoices("value_percent_bp", "valuePercentBp")
    )

    def to_model(self) -> Extra:
        return Extra(
            id=str(self.id),
            kind=self.kind,
            allocation_mode=self.allocation_mode,
            value_cents=self.value_cents,
            value_percent_bp=self.value_percent_bp,
        )


class BillSnapshot(SnapshotRow):
    participants: list[ParticipantRow] = Field(default_factory=list)
    items: list[ItemRow] = Field(default_factory=list)
    shares: list[ShareRow] = Field(default_factory=list)
    extras: list[ExtraRow] = Field(default_factory=list)

    def to_bill(self) -> Bill:
        return Bill(
            participants=[row.to_model() for row in self.participants],
            items=[row.to_model() for row in self.items],
            shares=[row.to_model() for row in self.shares],
            extras=[row.to_model() for row in self.extras],
        )


def bill_from_dict(data: Mapping[str, Any]) -> Bill:
    """Validate a bill snapshot (snake_case or storage camelCase keys).

    Raises ``pydantic.ValidationError`` for missing fields, unknown enum values
    and cents that are not non-negative integers.
    """
    return BillSnapshot.model_validate(data).to_bill()
