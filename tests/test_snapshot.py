import pytest
from pydantic import ValidationError

from billsplit.models import AllocationMode, ExtraKind
from billsplit.services.calculation import calculate_bill
from billsplit.services.snapshot import bill_from_dict


def test_bill_from_dict_snake_case():
    bill = bill_from_dict(
        {
            "participants": [{"id": "p1", "name": "Ana", "sort_order": 1}],
            "items": [{"id": "i1", "name": "Pizza", "amount_cents": 4000}],
            "shares": [{"item_id": "i1", "participant_id": "p1"}],
            "extras": [
                {
                    "id": "e1",
                    "kind": "SERVICE_PERCENT",
                    "allocation_mode": "PROPORTIONAL",
                    "value_percent_bp": 1000,
                }
            ],
        }
    )

    assert bill.participants[0].sort_order == 1
    assert bill.items[0].amount_cents == 4000
    assert bill.extras[0].kind is ExtraKind.SERVICE_PERCENT
    assert bill.extras[0].allocation_mode is AllocationMode.PROPORTIONAL
    assert bill.extras[0].value_cents is None


def test_bill_from_dict_storage_names():
    bill = bill_from_dict(
        {
            "participants": [{"id": "p1", "name": "Ana", "sortOrder": 0}, {"id": "p2", "name": "Bia"}],
            "items": [{"id": "i1", "name": "Chopp", "amountCents": 1500}],
            "shares": [
                {"itemId": "i1", "participantId": "p1"},
                {"itemId": "i1", "participantId": "p2"},
            ],
            "extras": [{"id": "e1", "type": "FIXED", "valueCents": 300, "allocationMode": "EQUAL"}],
        }
    )

    result = calculate_bill(bill, base_fee_cents=100)
    assert result.participant_totals == {"p1": 900, "p2": 900}
    assert result.final_total_to_pay_cents == 1900


def test_bill_from_dict_rejects_unknown_mode():
    with pytest.raises(ValidationError):
        bill_from_dict({"extras": [{"id": "e1", "kind": "FIXED", "allocation_mode": "RANDOM"}]})


def test_bill_from_dict_requires_amount():
    with pytest.raises(ValidationError):
        bill_from_dict({"items": [{"id": "i1", "name": "Pizza"}]})


def test_bill_from_dict_rejects_fractional_cents():
    with pytest.raises(ValidationError):
        bill_from_dict({"items": [{"id": "i1", "name": "Pizza", "amount_cents": 10.75}]})


def test_bill_from_dict_rejects_non_numeric_cents():
    with pytest.raises(ValidationError):
        bill_from_dict({"items": [{"id": "i1", "name": "Pizza", "amount_cents": "abc"}]})
    with pytest.raises(ValidationError):
        bill_from_dict({"extras": [{"id": "e1", "kind": "FIXED", "allocation_mode": "EQUAL", "value_cents": "10"}]})


def test_bill_from_dict_rejects_null_sort_order():
    with pytest.raises(ValidationError):
        bill_from_dict({"participants": [{"id": "p1", "name": "Ana", "sort_order": None}]})


def test_bill_from_dict_rejects_negative_cents():
    with pytest.raises(ValidationError):
        bill_from_dict({"items": [{"id": "i1", "name": "Pizza", "amount_cents": -1}]})


def test_bill_from_dict_accepts_integer_ids_and_null_values():
    bill = bill_from_dict(
        {
            "participants": [{"id": 7, "name": "Ana"}],
            "items": [{"id": 1, "name": "Pizza", "amount_cents": 300}],
            "shares": [{"item_id": 1, "participant_id": 7}],
            "extras": [{"id": 2, "kind": "FIXED", "allocation_mode": "EQUAL", "value_cents": None}],
        }
    )

    assert bill.participants[0].id == "7"
    assert bill.shares[0].item_id == "1"
    assert bill.extras[0].value_cents is None
