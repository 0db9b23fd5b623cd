# farmledger/routes/crops.py
from flask import Blueprint, jsonify

from ..forms import CROP_FORM
from ..models import Crop
from ..security import session_required
from .common import (
    created_response, current_store, draft_response, list_response,
    request_data, require_confirmation,
)

bp = Blueprint("crops", __name__)


@bp.get("/crops")
@session_required
def list_crops():
    crops = current_store().list(Crop)
    return list_response(crops, "No crop records yet")


@bp.get("/crops/new")
@session_required
def new_crop():
    return draft_response(CROP_FORM, current_store(), CROP_FORM.defaults())


@bp.get("/crops/<int:crop_id>/edit")
@session_required
def edit_crop(crop_id):
    store = current_store()
    crop = store.get(Crop, crop_id)
    return draft_response(CROP_FORM, store, CROP_FORM.draft_from(crop), record_id=crop.id)


@bp.post("/crops")
@session_required
def create_crop():
    store = current_store()
    crop = store.insert(Crop, CROP_FORM.parse(request_data(), store))
    return created_response(crop, CROP_FORM)


@bp.patch("/crops/<int:crop_id>")
@session_required
def update_crop(crop_id):
    store = current_store()
    crop = store.get(Crop, crop_id)
    values = CROP_FORM.parse(request_data(), store, base=CROP_FORM.draft_from(crop))
    crop = store.update(Crop, crop_id, values)
    return jsonify(crop.serialize()), 200


@bp.delete("/crops/<int:crop_id>")
@session_required
def delete_crop(crop_id):
    require_confirmation("crop record")
    current_store().delete(Crop, crop_id)
    return jsonify({"ok": True, "id": crop_id}), 200
