# farmledger/forms.py
"""Field definitions behind each record form.

A ``FormSpec`` knows how to seed a draft (defaults for a new record, or the
current values of an existing one) and how to turn submitted text into
column values: numbers are parsed, blanks become ``None`` and required
fields, choices and references are checked before anything is written.
"""
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from .errors import NotFound, ValidationFailed
from .models import Agreement, Crop, Farmer, Land, Parchi, Payment
from .models.agreement import AGREEMENT_STATUSES, PAYMENT_TYPES
from .models.crop import SEASONS
from .models.land import LAND_STATUSES
from .models.parchi import PARCHI_TYPES
from .models.payment import PAYMENT_STATUSES


def _blank(raw):
    return raw is None or (isinstance(raw, str) and not raw.strip())


class Field:
    def __init__(self, name, kind="text", required=False, default=None,
                 choices=None, references=None, label=None, digits=12, places=2):
        self.name = name
        self.kind = kind
        self.required = required
        self.default = default
        self.choices = choices
        self.references = references
        self.label = label or name.replace("_", " ")
        # precision and scale of the Numeric column a number field is stored in
        self.digits = digits
        self.places = places

    def default_value(self):
        return self.default() if callable(self.default) else self.default

    def parse(self, raw, store=None):
        if _blank(raw):
            if self.choices and self.default is not None:
                return self.default_value()
            if self.required:
                raise ValidationFailed(f"{self.label} is required")
            return None

        parser = getattr(self, f"_parse_{self.kind}")
        return parser(raw, store)

    def _parse_text(self, raw, store):
        return str(raw).strip()

    def _parse_number(self, raw, store):
        try:
            value = Decimal(str(raw).strip())
        except InvalidOperation:
            raise ValidationFailed(f"{self.label} must be a valid number")
        if not value.is_finite():
            raise ValidationFailed(f"{self.label} must be a valid number")
        if value.normalize().as_tuple().exponent < -self.places:
            raise ValidationFailed(f"{self.label} can have at most {self.places} decimal places")
        if value and value.adjusted() >= self.digits - self.places:
            raise ValidationFailed(f"{self.label} is too large")
        return value

    def _parse_integer(self, raw, store):
        try:
            return int(str(raw).strip())
        except ValueError:
            raise ValidationFailed(f"{self.label} must be a whole number")

    def _parse_date(self, raw, store):
        if isinstance(raw, date):
            return raw
        try:
            return datetime.strptime(str(raw).strip(), "%Y-%m-%d").date()
        except ValueError:
            raise ValidationFailed(f"{self.label} must be in YYYY-MM-DD format")

    def _parse_choice(self, raw, store):
        value = str(raw).strip()
        if value not in self.choices:
            raise ValidationFailed(f"{self.label} must be one of: {', '.join(self.choices)}")
        return value

    def _parse_reference(self, raw, store):
        record_id = self._parse_integer(raw, store)
        if not self.resolves(record_id, store):
            raise ValidationFailed(f"{self.label} {record_id} does not exist")
        return record_id

    def resolves(self, record_id, store):
        if record_id is None or store is None:
            return True
        try:
            store.get(self.references, record_id)
        except NotFound:
            return False
        return True


def draft_value(value):
    """Column value as it is shown in a form field."""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


class FormSpec:
    def __init__(self, model, fields, lookups=(), required_lookups=()):
        self.model = model
        self.fields = fields
        # reference lists the form's pickers need, and those that must be non-empty
        self.lookups = tuple(lookups)
        self.required_lookups = tuple(required_lookups)

    @property
    def field_names(self):
        return [f.name for f in self.fields]

    def defaults(self):
        return {f.name: draft_value(f.default_value()) for f in self.fields}

    def draft_from(self, record):
        return {f.name: draft_value(getattr(record, f.name)) for f in self.fields}

    def parse(self, data, store=None, base=None):
        """Validate a submitted form.

        ``base`` is the current draft of the record being edited; submitted
        keys override it, so an edit may send only the fields it changes.
        """
        merged = dict(base or {})
        merged.update({k: v for k, v in data.items() if k in self.field_names})
        for f in self.fields:
            if f.kind != "reference" or f.name in data:
                continue
            # a kept reference whose row has since been deleted
            if not f.resolves(merged.get(f.name), store):
                if f.required:
                    raise ValidationFailed(f"The selected {f.label} no longer exists, choose another {f.label}")
                merged[f.name] = None
        return {f.name: f.parse(merged.get(f.name), store) for f in self.fields}

    def unselected_references(self, draft):
        """Required references the draft has no value for yet."""
        return [
            f.name for f in self.fields
            if f.kind == "reference" and f.required and _blank(draft.get(f.name))
        ]


LAND_FORM = FormSpec(Land, [
    Field("land_id_code", required=True, label="land ID"),
    Field("village"),
    Field("khasra_no", required=True, label="khasra number"),
    Field("area_acres", kind="number", label="area (acres)", digits=10),
    Field("area_bigha", kind="number", label="area (bigha)", digits=10),
    Field("farmer_id", kind="reference", references=Farmer, label="farmer"),
    Field("details"),
    Field("status", kind="choice", choices=LAND_STATUSES, default="active"),
], lookups=["farmers"])

FARMER_FORM = FormSpec(Farmer, [
    Field("name", required=True),
    Field("phone"),
    Field("village"),
])

AGREEMENT_FORM = FormSpec(Agreement, [
    Field("land_id", kind="reference", required=True, references=Land, label="land"),
    Field("farmer_id", kind="reference", required=True, references=Farmer, label="farmer"),
    Field("start_date", kind="date", required=True, label="start date"),
    Field("end_date", kind="date", required=True, label="end date"),
    Field("payment_type", kind="choice", choices=PAYMENT_TYPES, default="fixed", label="payment type"),
    Field("expected_amount", kind="number", label="expected amount"),
    Field("status", kind="choice", choices=AGREEMENT_STATUSES, default="active"),
], lookups=["lands", "farmers"], required_lookups=["lands", "farmers"])

CROP_FORM = FormSpec(Crop, [
    Field("land_id", kind="reference", required=True, references=Land, label="land"),
    Field("season", kind="choice", choices=SEASONS, default="rabi"),
    Field("crop_name", required=True, label="crop name"),
    Field("sowing_month", label="sowing month"),
    Field("harvest_month", label="harvest month"),
    Field("year", kind="integer", default=lambda: date.today().year),
], lookups=["lands"], required_lookups=["lands"])

PARCHI_FORM = FormSpec(Parchi, [
    Field("land_id", kind="reference", required=True, references=Land, label="land"),
    Field("season", kind="choice", choices=SEASONS, default="rabi"),
    Field("crop_name", required=True, label="crop name"),
    Field("parchi_type", kind="choice", choices=PARCHI_TYPES, default="mandi_sale", label="parchi type"),
    Field("parchi_date", kind="date", required=True, default=date.today, label="date"),
    Field("amount", kind="number"),
    Field("quantity_weight", kind="number", label="quantity/weight"),
], lookups=["lands"], required_lookups=["lands"])

PAYMENT_FORM = FormSpec(Payment, [
    Field("agreement_id", kind="reference", required=True, references=Agreement, label="agreement"),
    Field("expected_amount", kind="number", required=True, label="expected amount"),
    Field("received_amount", kind="number", required=True, label="received amount"),
    Field("payment_date", kind="date", label="payment date"),
    Field("status", kind="choice", choices=PAYMENT_STATUSES, default="pending"),
    Field("notes"),
], lookups=["agreements"], required_lookups=["agreements"])

FORMS = {
    "lands": LAND_FORM,
    "farmers": FARMER_FORM,
    "agreements": AGREEMENT_FORM,
    "crops": CROP_FORM,
    "parchi": PARCHI_FORM,
    "payments": PAYMENT_FORM,
}
