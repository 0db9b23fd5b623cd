from datetime import datetime

from sqlalchemy.orm import declared_attr

from . import db

NOT_AVAILABLE = "N/A"


class OwnedRecord:
    """Columns shared by every record a user keeps.

    ``user_id`` is the owner tag; it is written once, on insert, by the
    record store and never by forms or updates.
    """

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @declared_attr
    def user_id(cls):
        return db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    @classmethod
    def default_ordering(cls):
        """Newest first."""
        return [cls.created_at.desc(), cls.id.desc()]

    @classmethod
    def eager_relations(cls):
        """Relationships whose display fields the list rows carry."""
        return []


def reference_column(table):
    # Related rows may disappear without cascading; rows then show "N/A".
    return db.Column(db.Integer, db.ForeignKey(f"{table}.id", ondelete="SET NULL"), nullable=True, index=True)


def as_float(value):
    return float(value) if value is not None else None


def as_iso(value):
    return value.isoformat() if value is not None else None
