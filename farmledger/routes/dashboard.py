# farmledger/routes/dashboard.py
from flask import Blueprint, jsonify

from ..security import session_required
from ..services import LookupService, build_dashboard
from .common import current_store

bp = Blueprint("dashboard", __name__)


@bp.get("")
@session_required
def overview():
    return jsonify(build_dashboard(current_store())), 200


@bp.get("/lookups/<entity>")
@session_required
def lookups(entity):
    items = LookupService(current_store()).load(entity)
    return jsonify({"entity": entity, "items": items}), 200
