from sqlalchemy.orm import joinedload

from . import db
from .mixins import NOT_AVAILABLE, OwnedRecord, reference_column, as_float, as_iso

LAND_STATUSES = ("active", "leased", "inactive")


class Land(OwnedRecord, db.Model):
    __tablename__ = "lands"

    land_id_code = db.Column(db.String(50), nullable=False, index=True)
    village = db.Column(db.String(200), nullable=True)
    khasra_no = db.Column(db.String(100), nullable=False)

    # Area, in acres and in the local bigha unit
    area_acres = db.Column(db.Numeric(10, 2), nullable=True)
    area_bigha = db.Column(db.Numeric(10, 2), nullable=True)

    # Farmer currently handling the land
    farmer_id = reference_column("farmers")
    details = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), default="active")  # active, leased, inactive

    farmer = db.relationship("Farmer")

    def __repr__(self):
        return f"<Land {self.id}: {self.land_id_code}>"

    @classmethod
    def eager_relations(cls):
        return [joinedload(cls.farmer)]

    @property
    def farmer_name(self):
        return self.farmer.name if self.farmer else NOT_AVAILABLE

    def serialize(self):
        return {
            "id": self.id,
            "land_id_code": self.land_id_code,
            "village": self.village,
            "khasra_no": self.khasra_no,
            "area_acres": as_float(self.area_acres),
            "area_bigha": as_float(self.area_bigha),
            "farmer_id": self.farmer_id,
            "farmer_name": self.farmer_name,
            "details": self.details,
            "status": self.status,
            "created_at": as_iso(self.created_at),
        }
