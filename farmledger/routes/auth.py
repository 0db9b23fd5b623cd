# farmledger/routes/auth.py
import re
import logging
from datetime import datetime

from flask import Blueprint, current_app, g, jsonify, redirect, request, url_for
from flask_jwt_extended import create_access_token, get_jwt, set_access_cookies, unset_jwt_cookies
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import OperationFailed, ValidationFailed
from ..extensions import db
from ..models import TokenBlocklist, User
from ..security import current_session_user, session_required
from ..utils.email import send_confirmation_email

log = logging.getLogger(__name__)

bp = Blueprint("auth", __name__)

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
MIN_PASSWORD_LENGTH = 6


def _credentials():
    data = request.get_json(silent=True) if request.is_json else request.form.to_dict()
    if not isinstance(data, dict):
        raise ValidationFailed("email and password are required")
    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""
    if not email or not password:
        raise ValidationFailed("email and password are required")
    return email, password


def _commit(message):
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise OperationFailed(message) from e


@bp.get("/")
def landing():
    """Sign-in / sign-up landing. Signed-in users go straight to the dashboard."""
    if current_session_user() is not None:
        return redirect(url_for("dashboard.overview"))
    return jsonify({
        "view": "sign_in",
        "sign_in": url_for("auth.sign_in"),
        "sign_up": url_for("auth.sign_up"),
    }), 200


@bp.post("/auth/sign-up")
def sign_up():
    email, password = _credentials()
    if not EMAIL_PATTERN.match(email):
        raise ValidationFailed("Unable to validate email address: invalid format")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationFailed(f"Password should be at least {MIN_PASSWORD_LENGTH} characters")
    if User.query.filter_by(email=email).first():
        raise OperationFailed("User already registered", status_code=409, retryable=False)

    user = User(email=email)
    user.set_password(password)
    needs_confirmation = current_app.config.get("REQUIRE_EMAIL_CONFIRMATION", True)
    if needs_confirmation:
        user.issue_verification_token()
    else:
        user.confirm_email()
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        raise OperationFailed("User already registered", status_code=409, retryable=False) from e
    log.info("Signed up user %s", user.id)

    if not needs_confirmation:
        return jsonify({"message": "Account created", "user": user.serialize()}), 201

    email_sent = send_confirmation_email(user)
    return jsonify({
        "message": "Check your email to confirm your account",
        "email_sent": email_sent,
        "user": user.serialize(),
    }), 201


@bp.get("/auth/callback")
def callback():
    """Target of the confirmation link mailed at sign-up."""
    token = request.args.get("token") or ""
    user = User.query.filter_by(email_verification_token=token).first() if token else None
    if user is None:
        raise ValidationFailed("Confirmation link is invalid or has already been used")
    user.confirm_email()
    _commit("Could not confirm account")
    log.info("Confirmed email for user %s", user.id)
    return redirect(url_for("auth.landing"))


@bp.post("/auth/sign-in")
def sign_in():
    email, password = _credentials()
    user = User.query.filter_by(email=email).first()
    if not user or not user.is_active or not user.check_password(password):
        log.info("Failed sign-in for %s", email)
        raise OperationFailed("Invalid login credentials", status_code=401, retryable=False)
    if current_app.config.get("REQUIRE_EMAIL_CONFIRMATION", True) and not user.email_verified:
        raise OperationFailed("Email not confirmed", status_code=403, retryable=False)

    user.last_login = datetime.utcnow()
    _commit("Could not sign in")

    access = create_access_token(identity=str(user.id), additional_claims={"email": user.email})
    resp = jsonify(access_token=access, user=user.serialize())
    set_access_cookies(resp, access)
    log.info("User %s signed in", user.id)
    return resp, 200


@bp.post("/auth/sign-out")
@session_required
def sign_out():
    db.session.add(TokenBlocklist(jti=get_jwt()["jti"], user_id=g.current_user.id))
    _commit("Could not sign out")
    resp = redirect(url_for("auth.landing"))
    unset_jwt_cookies(resp)
    log.info("User %s signed out", g.current_user.id)
    return resp


@bp.get("/auth/session")
@session_required
def session():
    return jsonify({"user": g.current_user.serialize()}), 200
