# farmledger/routes/common.py
"""Request helpers shared by the record blueprints."""
from flask import g, jsonify, request

from ..errors import ConfirmationRequired, ValidationFailed
from ..services import LookupService, RecordStore

TRUTHY = {"1", "true", "yes", "on"}


def current_store():
    return RecordStore(g.current_user.id)


def request_data():
    """Submitted fields, from a JSON body or a (multipart) form."""
    if request.is_json:
        data = request.get_json(silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValidationFailed("Request body must be a JSON object")
        return data
    return request.form.to_dict()


def request_token():
    """Client-issued, increasing token echoed back with list responses.

    A client that fired several loads keeps only the response carrying the
    latest token it issued.
    """
    return request.args.get("request_token", type=int)


def list_response(records, empty_message, **extra):
    items = [r.serialize() for r in records]
    payload = {"total": len(items), "items": items, "empty": not items}
    if not items:
        payload["message"] = empty_message
    token = request_token()
    if token is not None:
        payload["request_token"] = token
    payload.update(extra)
    return jsonify(payload), 200


def require_confirmation(what):
    confirmed = request.args.get("confirm")
    if confirmed is None and request.is_json:
        confirmed = request_data().get("confirm")
    if str(confirmed).lower() not in TRUTHY:
        raise ConfirmationRequired(f"Are you sure you want to delete this {what}?")


def draft_response(form, store, draft, record_id=None):
    """Everything a form needs when it opens: the draft and its picker lists."""
    lookups = LookupService(store).load_many(form.lookups)
    can_submit = all(lookups[name] for name in form.required_lookups)
    if record_id is None:
        # a new record stays unsubmittable until its required references are chosen
        can_submit = can_submit and not form.unselected_references(draft)
    return jsonify({
        "id": record_id,
        "mode": "edit" if record_id is not None else "create",
        "draft": draft,
        "lookups": lookups,
        "can_submit": can_submit,
    }), 200


def created_response(record, form):
    # a fresh default draft lets the form reset after a successful create
    return jsonify({"item": record.serialize(), "draft": form.defaults()}), 201
