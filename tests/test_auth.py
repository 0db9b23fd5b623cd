"""
Sign-up, e-mail confirmation, sign-in, sign-out and the session guard.
"""
import pytest

from farmledger.extensions import mail
from farmledger.models import Farmer, TokenBlocklist, User

from .conftest import bearer, make_user

DASHBOARD_ROUTES = [
    "/dashboard",
    "/dashboard/lands",
    "/dashboard/farmers",
    "/dashboard/agreements",
    "/dashboard/crops",
    "/dashboard/parchi",
    "/dashboard/payments",
    "/dashboard/lands/new",
    "/dashboard/lookups/lands",
]


def _is_sign_in_redirect(resp):
    return resp.status_code == 302 and resp.headers["Location"].rstrip("/") in ("", "http://localhost")


@pytest.mark.parametrize("path", DASHBOARD_ROUTES)
def test_dashboard_routes_redirect_without_session(client, path):
    resp = client.get(path)
    assert _is_sign_in_redirect(resp)
    assert resp.get_json(silent=True) is None


@pytest.mark.parametrize("header", ["Bearer not-a-token", "Token abc", ""])
def test_bad_tokens_are_treated_as_no_session(client, user, header):
    resp = client.get("/dashboard/lands", headers={"Authorization": header})
    assert _is_sign_in_redirect(resp)


def test_writes_redirect_without_session(client, user):
    resp = client.post("/dashboard/farmers", json={"name": "Ramesh"})
    assert _is_sign_in_redirect(resp)
    assert Farmer.query.count() == 0


def test_landing_offers_sign_in_when_signed_out(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.get_json()["view"] == "sign_in"


def test_landing_redirects_signed_in_user_to_dashboard(client, auth_headers):
    resp = client.get("/", headers=auth_headers)
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/dashboard")


def test_sign_up_sends_confirmation_and_blocks_sign_in_until_confirmed(client, db):
    with mail.record_messages() as outbox:
        resp = client.post("/auth/sign-up", json={"email": "New@Example.com", "password": "hunter22"})
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["message"] == "Check your email to confirm your account"
    assert body["email_sent"] is True
    assert len(outbox) == 1
    assert outbox[0].recipients == ["new@example.com"]

    resp = client.post("/auth/sign-in", json={"email": "new@example.com", "password": "hunter22"})
    assert resp.status_code == 403
    assert resp.get_json()["message"] == "Email not confirmed"

    token = User.query.filter_by(email="new@example.com").one().email_verification_token
    assert token in outbox[0].body
    resp = client.get("/auth/callback", query_string={"token": token})
    assert resp.status_code == 302

    resp = client.post("/auth/sign-in", json={"email": "new@example.com", "password": "hunter22"})
    assert resp.status_code == 200
    assert resp.get_json()["access_token"]


def test_confirmation_link_cannot_be_reused(client):
    client.post("/auth/sign-up", json={"email": "once@example.com", "password": "hunter22"})
    token = User.query.filter_by(email="once@example.com").one().email_verification_token
    assert client.get("/auth/callback", query_string={"token": token}).status_code == 302
    resp = client.get("/auth/callback", query_string={"token": token})
    assert resp.status_code == 400


def test_sign_up_rejects_duplicates_and_bad_input(client, user):
    resp = client.post("/auth/sign-up", json={"email": "owner@example.com", "password": "hunter22"})
    assert resp.status_code == 409
    assert resp.get_json()["message"] == "User already registered"

    assert client.post("/auth/sign-up", json={"email": "nope", "password": "hunter22"}).status_code == 400
    assert client.post("/auth/sign-up", json={"email": "a@b.co", "password": "123"}).status_code == 400
    assert client.post("/auth/sign-up", json={"email": "a@b.co"}).status_code == 400


def test_sign_in_with_wrong_password_fails(client, user):
    resp = client.post("/auth/sign-in", json={"email": "owner@example.com", "password": "wrong"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "operation_failed"
    assert resp.get_json()["message"] == "Invalid login credentials"


def test_sign_in_sets_cookie_session(client, user):
    resp = client.post("/auth/sign-in", json={"email": "owner@example.com", "password": "secret123"})
    assert resp.status_code == 200
    assert any("access_token_cookie" in c for c in resp.headers.getlist("Set-Cookie"))

    resp = client.get("/auth/session")
    assert resp.status_code == 200
    assert resp.get_json()["user"]["email"] == "owner@example.com"


def test_sign_out_revokes_session_and_redirects(client, user):
    token = client.post(
        "/auth/sign-in", json={"email": "owner@example.com", "password": "secret123"}
    ).get_json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}
    assert client.get("/dashboard/lands", headers=headers).status_code == 200

    resp = client.post("/auth/sign-out", headers=headers)
    assert _is_sign_in_redirect(resp)
    assert TokenBlocklist.query.count() == 1

    assert _is_sign_in_redirect(client.get("/dashboard/lands", headers=headers))


def test_deleted_user_has_no_session(client, db):
    gone = make_user("gone@example.com")
    headers = bearer(gone)
    db.session.delete(gone)
    db.session.commit()
    assert _is_sign_in_redirect(client.get("/dashboard", headers=headers))
