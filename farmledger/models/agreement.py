from datetime import date

from sqlalchemy.orm import joinedload

from . import db
from .mixins import NOT_AVAILABLE, OwnedRecord, reference_column, as_float, as_iso

PAYMENT_TYPES = ("fixed", "crop_share")
AGREEMENT_STATUSES = ("active", "expired", "renewal_pending")


class Agreement(OwnedRecord, db.Model):
    __tablename__ = "agreements"

    land_id = reference_column("lands")
    farmer_id = reference_column("farmers")

    # Lease Terms
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)

    # Financial Terms
    payment_type = db.Column(db.String(20), default="fixed")  # fixed, crop_share
    expected_amount = db.Column(db.Numeric(12, 2), nullable=True)

    status = db.Column(db.String(20), default="active")  # active, expired, renewal_pending

    land = db.relationship("Land")
    farmer = db.relationship("Farmer")

    def __repr__(self):
        return f"<Agreement {self.id}: {self.start_date} to {self.end_date}>"

    @classmethod
    def eager_relations(cls):
        return [joinedload(cls.land), joinedload(cls.farmer)]

    @property
    def land_id_code(self):
        return self.land.land_id_code if self.land else NOT_AVAILABLE

    @property
    def farmer_name(self):
        return self.farmer.name if self.farmer else NOT_AVAILABLE

    @property
    def display(self):
        """Label used by pickers: "<land code> - <farmer name>"."""
        return f"{self.land_id_code} - {self.farmer_name}"

    def days_until_expiration(self, today=None):
        today = today or date.today()
        return (self.end_date - today).days

    def serialize(self):
        return {
            "id": self.id,
            "land_id": self.land_id,
            "farmer_id": self.farmer_id,
            "land_id_code": self.land_id_code,
            "farmer_name": self.farmer_name,
            "start_date": as_iso(self.start_date),
            "end_date": as_iso(self.end_date),
            "payment_type": self.payment_type,
            "expected_amount": as_float(self.expected_amount),
            "status": self.status,
            "created_at": as_iso(self.created_at),
        }
