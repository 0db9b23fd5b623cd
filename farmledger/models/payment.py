from decimal import Decimal

from sqlalchemy.orm import joinedload

from . import db
from .mixins import NOT_AVAILABLE, OwnedRecord, reference_column, as_float, as_iso

PAYMENT_STATUSES = ("pending", "partial", "paid")


def pending_balance(expected, received):
    """Expected minus received. Over-payment gives a negative balance."""
    return Decimal(expected or 0) - Decimal(received or 0)


def progress_percentage(expected, received):
    expected = Decimal(expected or 0)
    if expected == 0:
        return 0.0
    return float(min(Decimal(received or 0) / expected * 100, Decimal(100)))


class Payment(OwnedRecord, db.Model):
    __tablename__ = "payments"

    agreement_id = reference_column("agreements")

    expected_amount = db.Column(db.Numeric(12, 2), nullable=True)
    received_amount = db.Column(db.Numeric(12, 2), nullable=True)
    payment_date = db.Column(db.Date, nullable=True)

    status = db.Column(db.String(20), default="pending", index=True)  # pending, partial, paid
    notes = db.Column(db.Text, nullable=True)

    agreement = db.relationship("Agreement")

    def __repr__(self):
        return f"<Payment {self.id}: {self.received_amount}/{self.expected_amount} - {self.status}>"

    @classmethod
    def eager_relations(cls):
        from .agreement import Agreement
        return [joinedload(cls.agreement).joinedload(Agreement.land)]

    @property
    def land_id_code(self):
        return self.agreement.land_id_code if self.agreement else NOT_AVAILABLE

    @property
    def pending_amount(self):
        return pending_balance(self.expected_amount, self.received_amount)

    @property
    def progress_percentage(self):
        return progress_percentage(self.expected_amount, self.received_amount)

    def serialize(self):
        return {
            "id": self.id,
            "agreement_id": self.agreement_id,
            "land_id_code": self.land_id_code,
            "expected_amount": float(self.expected_amount or 0),
            "received_amount": float(self.received_amount or 0),
            "pending_amount": float(self.pending_amount),
            "progress_percentage": self.progress_percentage,
            "payment_date": as_iso(self.payment_date),
            "status": self.status,
            "notes": self.notes,
            "created_at": as_iso(self.created_at),
        }
