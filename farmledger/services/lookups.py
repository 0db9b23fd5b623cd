# farmledger/services/lookups.py
"""Selection lists for the foreign-key pickers of the record forms."""
from ..errors import NotFound
from ..models import Agreement, Farmer, Land


class LookupService:
    def __init__(self, store):
        self.store = store

    def lands(self):
        rows = self.store.list(Land, order_by=[Land.land_id_code.asc(), Land.id.asc()])
        return [{"id": land.id, "land_id_code": land.land_id_code} for land in rows]

    def farmers(self):
        rows = self.store.list(Farmer, order_by=[Farmer.name.asc(), Farmer.id.asc()])
        return [{"id": farmer.id, "name": farmer.name} for farmer in rows]

    def agreements(self):
        rows = self.store.list(Agreement, filters=[Agreement.status == "active"])
        return [
            {
                "id": agreement.id,
                "expected_amount": float(agreement.expected_amount) if agreement.expected_amount is not None else None,
                "display": agreement.display,
            }
            for agreement in rows
        ]

    def load(self, entity):
        loader = {
            "lands": self.lands,
            "farmers": self.farmers,
            "agreements": self.agreements,
        }.get(entity)
        if loader is None:
            raise NotFound(f"No lookup list for {entity}")
        return loader()

    def load_many(self, entities):
        return {entity: self.load(entity) for entity in entities}
