from sqlalchemy.orm import joinedload

from . import db
from .mixins import NOT_AVAILABLE, OwnedRecord, reference_column, as_iso

SEASONS = ("rabi", "kharif", "zaid")


class Crop(OwnedRecord, db.Model):
    __tablename__ = "crops"

    land_id = reference_column("lands")
    season = db.Column(db.String(10), default="rabi")  # rabi, kharif, zaid
    crop_name = db.Column(db.String(100), nullable=False)

    # Month names as entered, e.g. "October"
    sowing_month = db.Column(db.String(20), nullable=True)
    harvest_month = db.Column(db.String(20), nullable=True)
    year = db.Column(db.Integer, nullable=True)

    land = db.relationship("Land")

    def __repr__(self):
        return f"<Crop {self.id}: {self.crop_name} {self.season} {self.year}>"

    @classmethod
    def eager_relations(cls):
        return [joinedload(cls.land)]

    @property
    def land_id_code(self):
        return self.land.land_id_code if self.land else NOT_AVAILABLE

    def serialize(self):
        return {
            "id": self.id,
            "land_id": self.land_id,
            "land_id_code": self.land_id_code,
            "season": self.season,
            "crop_name": self.crop_name,
            "sowing_month": self.sowing_month,
            "harvest_month": self.harvest_month,
            "year": self.year,
            "created_at": as_iso(self.created_at),
        }
