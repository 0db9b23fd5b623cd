import re

from sqlalchemy.orm import joinedload

from . import db
from .mixins import NOT_AVAILABLE, OwnedRecord, reference_column, as_float, as_iso

PARCHI_TYPES = ("mandi_sale", "payment", "other")

_IMAGE_URL = re.compile(r"\.(jpg|jpeg|png|gif|webp)$", re.IGNORECASE)


def is_image_url(url):
    return bool(url) and _IMAGE_URL.search(url) is not None


class Parchi(OwnedRecord, db.Model):
    """A scanned sale slip or payment receipt tied to a land and season."""

    __tablename__ = "parchis"

    land_id = reference_column("lands")
    season = db.Column(db.String(10), default="rabi")
    crop_name = db.Column(db.String(100), nullable=False)
    parchi_type = db.Column(db.String(20), default="mandi_sale")  # mandi_sale, payment, other
    parchi_date = db.Column(db.Date, nullable=False)

    amount = db.Column(db.Numeric(12, 2), nullable=True)
    quantity_weight = db.Column(db.Numeric(12, 2), nullable=True)

    # Stored object: public URL and its path inside the blob store
    file_url = db.Column(db.String(500), nullable=True)
    file_path = db.Column(db.String(500), nullable=True)

    land = db.relationship("Land")

    def __repr__(self):
        return f"<Parchi {self.id}: {self.parchi_type} {self.parchi_date}>"

    @classmethod
    def default_ordering(cls):
        # Newest document date first
        return [cls.parchi_date.desc(), cls.id.desc()]

    @classmethod
    def eager_relations(cls):
        return [joinedload(cls.land)]

    @property
    def land_id_code(self):
        return self.land.land_id_code if self.land else NOT_AVAILABLE

    @property
    def is_image(self):
        return is_image_url(self.file_url)

    @property
    def preview_kind(self):
        if not self.file_url:
            return None
        return "image" if self.is_image else "document"

    def serialize(self):
        return {
            "id": self.id,
            "land_id": self.land_id,
            "land_id_code": self.land_id_code,
            "season": self.season,
            "crop_name": self.crop_name,
            "parchi_type": self.parchi_type,
            "parchi_date": as_iso(self.parchi_date),
            "amount": as_float(self.amount),
            "quantity_weight": as_float(self.quantity_weight),
            "file_url": self.file_url,
            "file_path": self.file_path,
            "created_at": as_iso(self.created_at),
        }
