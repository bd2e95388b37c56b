# tests/test_api.py
"""
End-to-end tests through the HTTP API with FastAPI's TestClient,
against an in-memory SQLite store.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient
from conftest import BRANCH, car_row
from app.database import Database
from app.main import create_app
from app.models.enums import Role
from app.security import create_access_token
from app.services import salesperson_service, user_service

API = "/api/v1"


@pytest.fixture
def database():
    return Database("sqlite://")


@pytest.fixture
def client(database):
    with TestClient(create_app(database)) as client:
        yield client


@pytest.fixture
def users(client, database):
    session = database.SessionLocal()
    try:
        created = {role: user_service.create_user(session, role.value, "pw", role) for role in Role}
        salesperson_service.create_salesperson(session, "Somchai")
        return {role: user.id for role, user in created.items()}
    finally:
        session.close()


def auth(users, role):
    token = create_access_token(users[role], role.value, role)
    return {"Authorization": f"Bearer {token}"}


class TestAuth:
    def test_login(self, client, users):
        resp = client.post(f"{API}/login", json={"username": "admin", "password": "pw"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["user"]["role"] == "admin"
        me = client.get(f"{API}/me", headers={"Authorization": f"Bearer {body['token']}"})
        assert me.json()["username"] == "admin"

    def test_bad_password(self, client, users):
        resp = client.post(f"{API}/login", json={"username": "admin", "password": "nope"})
        assert resp.status_code == 401

    def test_missing_token(self, client):
        assert client.get(f"{API}/cars").status_code == 401

    def test_garbage_token(self, client):
        resp = client.get(f"{API}/cars", headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401

    def test_expired_token(self, client, users):
        token = create_access_token(users[Role.ADMIN], "admin", Role.ADMIN, expires_minutes=-5)
        resp = client.get(f"{API}/cars", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    def test_health_is_open(self, client):
        assert client.get(f"{API}/health").json()["database"] == "ok"


class TestPermissions:
    def test_user_cannot_create_car(self, client, users):
        resp = client.post(f"{API}/cars", json=car_row(), headers=auth(users, Role.USER))
        assert resp.status_code == 403

    def test_user_can_read(self, client, users):
        assert client.get(f"{API}/cars", headers=auth(users, Role.USER)).status_code == 200

    def test_admin_cannot_physically_delete(self, client, users):
        car = client.post(f"{API}/cars", json=car_row(), headers=auth(users, Role.ADMIN)).json()
        resp = client.delete(f"{API}/cars/{car['id']}", headers=auth(users, Role.ADMIN))
        assert resp.status_code == 403
        resp = client.delete(f"{API}/cars/{car['id']}", headers=auth(users, Role.EXECUTIVE))
        assert resp.status_code == 200

    def test_admin_cannot_manage_users(self, client, users):
        assert client.get(f"{API}/users", headers=auth(users, Role.ADMIN)).status_code == 403
        assert client.get(f"{API}/users", headers=auth(users, Role.EXECUTIVE)).status_code == 200


class TestCarFlow:
    def test_reservation_to_sale_and_back(self, client, users):
        h = auth(users, Role.ADMIN)
        car = client.post(f"{API}/cars", json=car_row(), headers=h).json()
        assert car["status"] == "WAITING_FOR_TRAILER"

        stock = {"stock_in_date": "2024-04-20", "stock_location": BRANCH, "stock_no": "S-01"}
        car = client.put(f"{API}/cars/{car['id']}/stock", json=stock, headers=h).json()
        assert car["status"] == "IN_STOCK"

        match = client.post(f"{API}/matches", headers=h, json={
            "car_id": car["id"], "customer_name": "Nok", "salesperson": "Somchai",
            "status": "WAITING_FOR_CONTRACT",
        })
        assert match.status_code == 201
        match = match.json()
        assert match["car_status"] == "RESERVED"

        edit = {"customer_name": "Nok", "salesperson": "Somchai", "status": "DELIVERED"}
        resp = client.put(f"{API}/matches/{match['id']}", json=edit, headers=h)
        assert resp.status_code == 400
        assert "Sale date" in resp.json()["detail"]
        assert client.get(f"{API}/cars/{car['id']}", headers=h).json()["status"] == "RESERVED"

        edit["sale_date"] = "2024-05-01"
        resp = client.put(f"{API}/matches/{match['id']}", json=edit, headers=h)
        assert resp.json()["car_status"] == "SOLD"

        assert client.delete(f"{API}/matches/{match['id']}", headers=h).status_code == 200
        assert client.get(f"{API}/cars/{car['id']}", headers=h).json()["status"] == "IN_STOCK"

    def test_duplicate_vin_is_409(self, client, users):
        h = auth(users, Role.ADMIN)
        client.post(f"{API}/cars", json=car_row(), headers=h)
        resp = client.post(f"{API}/cars", json=car_row(), headers=h)
        assert resp.status_code == 409
        assert "VIN0001" in resp.json()["detail"]

    def test_batch_import_reports_duplicates(self, client, users):
        h = auth(users, Role.ADMIN)
        client.post(f"{API}/cars", json=car_row("VIN0002"), headers=h)
        rows = [car_row("VIN0001"), car_row("VIN0002"), car_row("VIN0003")]
        resp = client.post(f"{API}/cars/batch", json=rows, headers=h)
        assert resp.status_code == 200
        body = resp.json()
        assert body["success_count"] == 2
        assert body["duplicate_count"] == 1
        assert body["duplicates"][0]["key"] == "VIN0002"

    def test_batch_stock_and_stock_view_delete(self, client, users):
        h = auth(users, Role.ADMIN)
        ids = [client.post(f"{API}/cars", json=car_row(f"VIN000{i}"), headers=h).json()["id"] for i in (1, 2)]
        resp = client.put(f"{API}/cars/batch-stock", headers=h, json={
            "car_ids": ids, "stock_in_date": "2024-04-20", "stock_location": BRANCH,
        })
        assert resp.json()["success_count"] == 2

        resp = client.delete(f"{API}/cars/{ids[0]}?view=stock", headers=h)
        assert resp.json()["car_status"] == "UNLOADED"
        assert len(client.get(f"{API}/cars", headers=h).json()) == 2

    def test_missing_car_is_404(self, client, users):
        assert client.get(f"{API}/cars/999", headers=auth(users, Role.USER)).status_code == 404

    def test_stats(self, client, users):
        client.post(f"{API}/cars", json=car_row(), headers=auth(users, Role.ADMIN))
        body = client.get(f"{API}/stats/summary?year=2024&month=5", headers=auth(users, Role.USER)).json()
        assert body["total_cars"] == 1
        assert body["status_counts"]["WAITING_FOR_TRAILER"] == 1
