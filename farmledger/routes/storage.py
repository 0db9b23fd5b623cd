# farmledger/routes/storage.py
from flask import Blueprint, current_app, send_from_directory

from ..services import BlobStore

bp = Blueprint("storage", __name__)


@bp.get("/storage/<path:object_path>")
def public_object(object_path):
    """Uploaded files are public, addressed by their object path."""
    blobs = BlobStore.from_config(current_app.config)
    return send_from_directory(blobs.root, object_path)
