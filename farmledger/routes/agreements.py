# farmledger/routes/agreements.py
from flask import Blueprint, jsonify

from ..forms import AGREEMENT_FORM
from ..models import Agreement
from ..security import session_required
from .common import (
    created_response, current_store, draft_response, list_response,
    request_data, require_confirmation,
)

bp = Blueprint("agreements", __name__)


@bp.get("/agreements")
@session_required
def list_agreements():
    agreements = current_store().list(Agreement)
    return list_response(agreements, "No agreements added yet")


@bp.get("/agreements/new")
@session_required
def new_agreement():
    return draft_response(AGREEMENT_FORM, current_store(), AGREEMENT_FORM.defaults())


@bp.get("/agreements/<int:agreement_id>/edit")
@session_required
def edit_agreement(agreement_id):
    store = current_store()
    agreement = store.get(Agreement, agreement_id)
    return draft_response(AGREEMENT_FORM, store, AGREEMENT_FORM.draft_from(agreement), record_id=agreement.id)


@bp.post("/agreements")
@session_required
def create_agreement():
    store = current_store()
    agreement = store.insert(Agreement, AGREEMENT_FORM.parse(request_data(), store))
    return created_response(agreement, AGREEMENT_FORM)


@bp.patch("/agreements/<int:agreement_id>")
@session_required
def update_agreement(agreement_id):
    store = current_store()
    agreement = store.get(Agreement, agreement_id)
    values = AGREEMENT_FORM.parse(request_data(), store, base=AGREEMENT_FORM.draft_from(agreement))
    agreement = store.update(Agreement, agreement_id, values)
    return jsonify(agreement.serialize()), 200


@bp.delete("/agreements/<int:agreement_id>")
@session_required
def delete_agreement(agreement_id):
    require_confirmation("agreement")
    current_store().delete(Agreement, agreement_id)
    return jsonify({"ok": True, "id": agreement_id}), 200
