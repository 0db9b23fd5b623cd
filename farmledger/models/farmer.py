from . import db
from .mixins import OwnedRecord, as_iso


class Farmer(OwnedRecord, db.Model):
    __tablename__ = "farmers"

    name = db.Column(db.String(200), nullable=False)
    phone = db.Column(db.String(20), nullable=True)
    village = db.Column(db.String(200), nullable=True)

    def __repr__(self):
        return f"<Farmer {self.id}: {self.name}>"

    def serialize(self):
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "village": self.village,
            "created_at": as_iso(self.created_at),
        }
