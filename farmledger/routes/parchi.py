# farmledger/routes/parchi.py
import logging

from flask import Blueprint, current_app, jsonify, request

from ..errors import OperationFailed
from ..forms import PARCHI_FORM
from ..models import Parchi
from ..security import session_required
from ..services import BlobStore
from ..services.storage import generate_object_path
from .common import (
    created_response, current_store, draft_response, list_response,
    request_data, require_confirmation,
)

log = logging.getLogger(__name__)

bp = Blueprint("parchi", __name__)


def _blob_store():
    return BlobStore.from_config(current_app.config)


@bp.get("/parchi")
@session_required
def list_parchis():
    parchis = current_store().list(Parchi)
    return list_response(parchis, "No parchis uploaded yet")


@bp.get("/parchi/new")
@session_required
def new_parchi():
    return draft_response(PARCHI_FORM, current_store(), PARCHI_FORM.defaults())


@bp.get("/parchi/<int:parchi_id>/edit")
@session_required
def edit_parchi(parchi_id):
    store = current_store()
    parchi = store.get(Parchi, parchi_id)
    return draft_response(PARCHI_FORM, store, PARCHI_FORM.draft_from(parchi), record_id=parchi.id)


@bp.post("/parchi")
@session_required
def create_parchi():
    """Upload the optional file first; only a stored file may be referenced."""
    store = current_store()
    values = PARCHI_FORM.parse(request_data(), store)

    file = request.files.get("file")
    blobs = _blob_store()
    object_path = None
    if file and file.filename:
        object_path = blobs.upload(generate_object_path(file.filename), file.stream)
        values["file_path"] = object_path
        values["file_url"] = blobs.public_url(object_path)

    try:
        parchi = store.insert(Parchi, values)
    except OperationFailed:
        if object_path:
            log.info("Removing %s after failed insert", object_path)
            blobs.remove(object_path)
        raise
    return created_response(parchi, PARCHI_FORM)


@bp.patch("/parchi/<int:parchi_id>")
@session_required
def update_parchi(parchi_id):
    store = current_store()
    parchi = store.get(Parchi, parchi_id)
    values = PARCHI_FORM.parse(request_data(), store, base=PARCHI_FORM.draft_from(parchi))
    parchi = store.update(Parchi, parchi_id, values)
    return jsonify(parchi.serialize()), 200


@bp.delete("/parchi/<int:parchi_id>")
@session_required
def delete_parchi(parchi_id):
    require_confirmation("parchi")
    parchi = current_store().delete(Parchi, parchi_id)
    if parchi.file_path:
        _blob_store().remove(parchi.file_path)
    return jsonify({"ok": True, "id": parchi_id}), 200


@bp.get("/parchi/<int:parchi_id>/preview")
@session_required
def preview_parchi(parchi_id):
    parchi = current_store().get(Parchi, parchi_id)
    payload = parchi.serialize()
    payload["kind"] = parchi.preview_kind
    if parchi.preview_kind == "document":
        payload["download_name"] = f"parchi-{parchi.id}.pdf"
    return jsonify(payload), 200
