import pytest
from flask_jwt_extended import create_access_token

from farmledger import create_app
from farmledger.config import TestingConfig
from farmledger.extensions import db as _db
from farmledger.models import User


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def app(tmp_path):
    class Config(TestingConfig):
        UPLOAD_FOLDER = str(tmp_path / "uploads")

    app = create_app(Config)
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(email, password="secret123", confirmed=True):
    user = User(email=email)
    user.set_password(password)
    if confirmed:
        user.confirm_email()
    _db.session.add(user)
    _db.session.commit()
    return user


@pytest.fixture
def user(app):
    return make_user("owner@example.com")


@pytest.fixture
def other_user(app):
    return make_user("neighbour@example.com")


def bearer(user):
    return {"Authorization": f"Bearer {create_access_token(identity=str(user.id))}"}


@pytest.fixture
def auth_headers(user):
    return bearer(user)


class DashboardClient:
    """Thin wrapper over the test client for the /dashboard record routes."""

    def __init__(self, client, headers):
        self.client = client
        self.headers = headers

    def list(self, entity, **params):
        return self.client.get(f"/dashboard/{entity}", headers=self.headers, query_string=params)

    def new(self, entity, **params):
        return self.client.get(f"/dashboard/{entity}/new", headers=self.headers, query_string=params)

    def edit(self, entity, record_id):
        return self.client.get(f"/dashboard/{entity}/{record_id}/edit", headers=self.headers)

    def create(self, entity, data):
        return self.client.post(f"/dashboard/{entity}", json=data, headers=self.headers)

    def update(self, entity, record_id, data):
        return self.client.patch(f"/dashboard/{entity}/{record_id}", json=data, headers=self.headers)

    def delete(self, entity, record_id, confirm=True):
        params = {"confirm": "true"} if confirm else {}
        return self.client.delete(f"/dashboard/{entity}/{record_id}", headers=self.headers, query_string=params)

    def created_id(self, entity, data):
        resp = self.create(entity, data)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()["item"]["id"]


@pytest.fixture
def api(client, auth_headers):
    return DashboardClient(client, auth_headers)


@pytest.fixture
def other_api(client, other_user):
    return DashboardClient(client, bearer(other_user))


@pytest.fixture
def farmer_id(api):
    return api.created_id("farmers", {"name": "Ramesh", "phone": "9876543210", "village": "Khedi"})


@pytest.fixture
def land_id(api, farmer_id):
    return api.created_id("lands", {
        "land_id_code": "L-001",
        "village": "Khedi",
        "khasra_no": "112/3",
        "area_acres": "2.5",
        "area_bigha": "4",
        "farmer_id": farmer_id,
        "status": "leased",
    })


@pytest.fixture
def agreement_id(api, land_id, farmer_id):
    return api.created_id("agreements", {
        "land_id": land_id,
        "farmer_id": farmer_id,
        "start_date": "2026-04-01",
        "end_date": "2027-03-31",
        "payment_type": "fixed",
        "expected_amount": "45000",
        "status": "active",
    })
