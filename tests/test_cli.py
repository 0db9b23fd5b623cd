"""
flask init-db / flask create-user.
"""
from farmledger.models import User


def test_init_db_creates_tables(app):
    result = app.test_cli_runner().invoke(args=["init-db"])
    assert result.exit_code == 0, result.output
    assert "Tables created" in result.output
    assert User.query.count() == 0


def test_create_user_adds_confirmed_account(app, client):
    result = app.test_cli_runner().invoke(args=["create-user", " Owner@Example.com ", "secret123"])
    assert result.exit_code == 0, result.output
    assert "Upserted: owner@example.com" in result.output

    user = User.query.filter_by(email="owner@example.com").one()
    assert user.email_verified
    assert user.check_password("secret123")

    resp = client.post("/auth/sign-in", json={"email": "owner@example.com", "password": "secret123"})
    assert resp.status_code == 200


def test_create_user_resets_existing_password(app, db, user):
    result = app.test_cli_runner().invoke(args=["create-user", user.email, "another456"])
    assert result.exit_code == 0, result.output

    db.session.expire_all()
    assert User.query.count() == 1
    refreshed = User.query.filter_by(email=user.email).one()
    assert refreshed.check_password("another456")
    assert not refreshed.check_password("secret123")
