# farmledger/security.py
import logging
from functools import wraps

from flask import g, redirect, url_for
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from sqlalchemy.exc import SQLAlchemyError

from .extensions import db
from .models import TokenBlocklist, User

log = logging.getLogger(__name__)


def register_jwt_callbacks(jwt):
    @jwt.token_in_blocklist_loader
    def _token_revoked(jwt_header, jwt_payload):
        jti = jwt_payload["jti"]
        return db.session.query(TokenBlocklist.id).filter_by(jti=jti).scalar() is not None


def current_session_user():
    """The signed-in user, or None when there is no usable session.

    Every failure (no token, expired, revoked, malformed, user gone, or the
    lookup itself failing) counts as "no session".
    """
    try:
        verify_jwt_in_request()
        user = db.session.get(User, int(get_jwt_identity()))
    except (JWTExtendedException, PyJWTError, SQLAlchemyError, TypeError, ValueError) as e:
        log.debug("No session: %s", e)
        return None
    if user is None or not user.is_active:
        return None
    return user


def session_required(fn):
    """Usage: @session_required. Redirects to the sign-in landing page."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        user = current_session_user()
        if user is None:
            return redirect(url_for("auth.landing"))
        g.current_user = user
        return fn(*args, **kwargs)
    return wrapper
