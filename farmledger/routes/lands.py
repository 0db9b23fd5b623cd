# farmledger/routes/lands.py
from flask import Blueprint, jsonify

from ..forms import LAND_FORM
from ..models import Land
from ..security import session_required
from .common import (
    created_response, current_store, draft_response, list_response,
    request_data, require_confirmation,
)

bp = Blueprint("lands", __name__)


@bp.get("/lands")
@session_required
def list_lands():
    lands = current_store().list(Land)
    return list_response(lands, "No lands added yet")


@bp.get("/lands/new")
@session_required
def new_land():
    return draft_response(LAND_FORM, current_store(), LAND_FORM.defaults())


@bp.get("/lands/<int:land_id>/edit")
@session_required
def edit_land(land_id):
    store = current_store()
    land = store.get(Land, land_id)
    return draft_response(LAND_FORM, store, LAND_FORM.draft_from(land), record_id=land.id)


@bp.post("/lands")
@session_required
def create_land():
    store = current_store()
    values = LAND_FORM.parse(request_data(), store)
    land = store.insert(Land, values)
    return created_response(land, LAND_FORM)


@bp.patch("/lands/<int:land_id>")
@session_required
def update_land(land_id):
    store = current_store()
    land = store.get(Land, land_id)
    values = LAND_FORM.parse(request_data(), store, base=LAND_FORM.draft_from(land))
    land = store.update(Land, land_id, values)
    return jsonify(land.serialize()), 200


@bp.delete("/lands/<int:land_id>")
@session_required
def delete_land(land_id):
    require_confirmation("land")
    current_store().delete(Land, land_id)
    return jsonify({"ok": True, "id": land_id}), 200
