"""
Field parsing and draft seeding, without HTTP.
"""
from datetime import date
from decimal import Decimal

import pytest

from farmledger.errors import ValidationFailed
from farmledger.forms import FARMER_FORM, PARCHI_FORM, PAYMENT_FORM, Field


@pytest.mark.parametrize("raw,expected", [
    ("12.5", Decimal("12.5")),
    (" 7 ", Decimal("7")),
    (3, Decimal("3")),
    ("0", Decimal("0")),
    ("", None),
    ("   ", None),
    (None, None),
])
def test_number_fields_parse_text(raw, expected):
    assert Field("amount", kind="number").parse(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "NaN", "inf", "1,000"])
def test_number_fields_reject_garbage(raw):
    with pytest.raises(ValidationFailed):
        Field("amount", kind="number").parse(raw)


def test_required_blank_field_fails():
    with pytest.raises(ValidationFailed) as exc:
        Field("crop_name", required=True, label="crop name").parse("")
    assert exc.value.message == "crop name is required"


def test_blank_choice_falls_back_to_default():
    field = Field("season", kind="choice", choices=("rabi", "kharif", "zaid"), default="rabi")
    assert field.parse("") == "rabi"
    assert field.parse("zaid") == "zaid"
    with pytest.raises(ValidationFailed):
        field.parse("summer")


def test_date_fields():
    field = Field("parchi_date", kind="date")
    assert field.parse("2026-04-12") == date(2026, 4, 12)
    assert field.parse(date(2026, 4, 12)) == date(2026, 4, 12)
    with pytest.raises(ValidationFailed):
        field.parse("12-04-2026")


def test_unknown_keys_are_ignored():
    values = FARMER_FORM.parse({"name": "Ramesh", "user_id": 5, "id": 9})
    assert values == {"name": "Ramesh", "phone": None, "village": None}


def test_submitted_values_override_base_draft():
    base = {"name": "Ramesh", "phone": "1", "village": "Khedi"}
    values = FARMER_FORM.parse({"phone": ""}, base=base)
    assert values == {"name": "Ramesh", "phone": None, "village": "Khedi"}


def test_callable_defaults_are_evaluated_per_draft():
    assert PARCHI_FORM.defaults()["parchi_date"] == date.today().isoformat()


def test_payment_defaults():
    assert PAYMENT_FORM.defaults() == {
        "agreement_id": None,
        "expected_amount": None,
        "received_amount": None,
        "payment_date": None,
        "status": "pending",
        "notes": None,
    }


@pytest.mark.parametrize("raw", ["2.345", "0.001", "-1.999"])
def test_number_fields_reject_extra_decimal_places(raw):
    with pytest.raises(ValidationFailed) as exc:
        Field("amount", kind="number").parse(raw)
    assert exc.value.message == "amount can have at most 2 decimal places"


@pytest.mark.parametrize("raw,expected", [
    ("2.50", Decimal("2.50")),
    ("2.500", Decimal("2.500")),
    ("9999999999.99", Decimal("9999999999.99")),
    ("1E+3", Decimal("1E+3")),
])
def test_number_fields_accept_values_the_column_holds(raw, expected):
    assert Field("amount", kind="number").parse(raw) == expected


@pytest.mark.parametrize("raw,digits", [
    ("10000000000", 12),
    ("1E+10", 12),
    ("100000000", 10),
])
def test_number_fields_reject_values_too_large_for_the_column(raw, digits):
    with pytest.raises(ValidationFailed) as exc:
        Field("amount", kind="number", digits=digits).parse(raw)
    assert exc.value.message == "amount is too large"


def test_unselected_references_only_counts_required_ones():
    assert PARCHI_FORM.unselected_references(PARCHI_FORM.defaults()) == ["land_id"]
    assert PARCHI_FORM.unselected_references({"land_id": 3}) == []
    assert FARMER_FORM.unselected_references(FARMER_FORM.defaults()) == []
