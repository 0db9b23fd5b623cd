# farmledger/routes/payments.py
from flask import Blueprint, jsonify, request

from ..errors import NotFound
from ..forms import PAYMENT_FORM
from ..models import Agreement, Payment
from ..security import session_required
from ..services.dashboard import total_amounts
from .common import (
    created_response, current_store, draft_response, list_response,
    request_data, require_confirmation,
)

bp = Blueprint("payments", __name__)


@bp.get("/payments")
@session_required
def list_payments():
    payments = current_store().list(Payment)
    expected, received = total_amounts(payments)
    return list_response(
        payments,
        "No payment records yet",
        total_expected=float(expected),
        total_received=float(received),
        total_pending=float(expected - received),
    )


@bp.get("/payments/new")
@session_required
def new_payment():
    store = current_store()
    draft = PAYMENT_FORM.defaults()
    agreement_id = request.args.get("agreement_id", type=int)
    if agreement_id is not None:
        # Picking an agreement pre-fills its expected amount; the user may change it.
        try:
            agreement = store.get(Agreement, agreement_id)
        except NotFound:
            agreement = None
        if agreement is not None:
            draft["agreement_id"] = agreement.id
            if agreement.expected_amount is not None:
                draft["expected_amount"] = float(agreement.expected_amount)
    return draft_response(PAYMENT_FORM, store, draft)


@bp.get("/payments/<int:payment_id>/edit")
@session_required
def edit_payment(payment_id):
    store = current_store()
    payment = store.get(Payment, payment_id)
    return draft_response(PAYMENT_FORM, store, PAYMENT_FORM.draft_from(payment), record_id=payment.id)


@bp.post("/payments")
@session_required
def create_payment():
    store = current_store()
    payment = store.insert(Payment, PAYMENT_FORM.parse(request_data(), store))
    return created_response(payment, PAYMENT_FORM)


@bp.patch("/payments/<int:payment_id>")
@session_required
def update_payment(payment_id):
    store = current_store()
    payment = store.get(Payment, payment_id)
    values = PAYMENT_FORM.parse(request_data(), store, base=PAYMENT_FORM.draft_from(payment))
    payment = store.update(Payment, payment_id, values)
    return jsonify(payment.serialize()), 200


@bp.delete("/payments/<int:payment_id>")
@session_required
def delete_payment(payment_id):
    require_confirmation("payment record")
    current_store().delete(Payment, payment_id)
    return jsonify({"ok": True, "id": payment_id}), 200
