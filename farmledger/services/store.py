# farmledger/services/store.py
"""Owner-scoped access to every record table.

All reads and writes of the six record types go through a ``RecordStore``
bound to the signed-in user, so that each query only ever sees that user's
rows and each insert is stamped with that user's id.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..errors import OperationFailed, NotFound

log = logging.getLogger(__name__)


class RecordStore:
    def __init__(self, owner_id, session=None):
        if owner_id is None:
            raise OperationFailed("Not authenticated", status_code=401, retryable=False)
        self.owner_id = owner_id
        self.session = session or db.session

    def query(self, model):
        return model.query.filter(model.user_id == self.owner_id)

    def list(self, model, filters=(), order_by=None, limit=None):
        """Denormalized rows, newest first unless ``order_by`` says otherwise."""
        query = self.query(model).options(*model.eager_relations())
        for criterion in filters:
            query = query.filter(criterion)
        query = query.order_by(*(order_by if order_by is not None else model.default_ordering()))
        if limit:
            query = query.limit(limit)
        return self._run(lambda: query.all(), f"Could not load {model.__tablename__}")

    def count(self, model, filters=()):
        query = self.query(model)
        for criterion in filters:
            query = query.filter(criterion)
        return self._run(lambda: query.count(), f"Could not count {model.__tablename__}") or 0

    def get(self, model, record_id):
        record = self._run(
            lambda: self.query(model).filter(model.id == record_id).first(),
            f"Could not load {model.__tablename__}",
        )
        if record is None:
            raise NotFound(f"{model.__name__} {record_id} not found")
        return record

    def insert(self, model, values):
        record = model(**values)
        record.user_id = self.owner_id
        self.session.add(record)
        self._commit(f"Could not save {model.__name__.lower()}")
        log.info("Inserted %s %s for user %s", model.__name__, record.id, self.owner_id)
        return record

    def update(self, model, record_id, values):
        record = self.get(model, record_id)
        values = {k: v for k, v in values.items() if k != "user_id"}
        for field, value in values.items():
            setattr(record, field, value)
        self._commit(f"Could not update {model.__name__.lower()}")
        log.info("Updated %s %s", model.__name__, record.id)
        return record

    def delete(self, model, record_id):
        record = self.get(model, record_id)
        self.session.delete(record)
        self._commit(f"Could not delete {model.__name__.lower()}")
        log.info("Deleted %s %s", model.__name__, record_id)
        return record

    def _run(self, fn, message):
        try:
            return fn()
        except SQLAlchemyError as e:
            self.session.rollback()
            log.warning("%s: %s", message, e)
            raise OperationFailed(message) from e

    def _commit(self, message):
        self._run(self.session.commit, message)
