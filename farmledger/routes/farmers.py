# farmledger/routes/farmers.py
from flask import Blueprint, jsonify

from ..forms import FARMER_FORM
from ..models import Farmer
from ..security import session_required
from .common import (
    created_response, current_store, draft_response, list_response,
    request_data, require_confirmation,
)

bp = Blueprint("farmers", __name__)


@bp.get("/farmers")
@session_required
def list_farmers():
    farmers = current_store().list(Farmer)
    return list_response(farmers, "No farmers added yet")


@bp.get("/farmers/new")
@session_required
def new_farmer():
    return draft_response(FARMER_FORM, current_store(), FARMER_FORM.defaults())


@bp.get("/farmers/<int:farmer_id>/edit")
@session_required
def edit_farmer(farmer_id):
    store = current_store()
    farmer = store.get(Farmer, farmer_id)
    return draft_response(FARMER_FORM, store, FARMER_FORM.draft_from(farmer), record_id=farmer.id)


@bp.post("/farmers")
@session_required
def create_farmer():
    store = current_store()
    farmer = store.insert(Farmer, FARMER_FORM.parse(request_data(), store))
    return created_response(farmer, FARMER_FORM)


@bp.patch("/farmers/<int:farmer_id>")
@session_required
def update_farmer(farmer_id):
    store = current_store()
    farmer = store.get(Farmer, farmer_id)
    values = FARMER_FORM.parse(request_data(), store, base=FARMER_FORM.draft_from(farmer))
    farmer = store.update(Farmer, farmer_id, values)
    return jsonify(farmer.serialize()), 200


@bp.delete("/farmers/<int:farmer_id>")
@session_required
def delete_farmer(farmer_id):
    require_confirmation("farmer")
    current_store().delete(Farmer, farmer_id)
    return jsonify({"ok": True, "id": farmer_id}), 200
