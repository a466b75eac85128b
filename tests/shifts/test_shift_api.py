from __future__ import annotations

from types import SimpleNamespace

import pytest

from shift_tracker.container import build_container
from shift_tracker.main import create_app
from shift_tracker.users.model import Employee

COORDS = {"longitude": -122.4, "latitude": 37.8}


@pytest.fixture
def container():
    c = build_container(settings=SimpleNamespace(SHIFT_STORE="memory", MAIL_ENABLED=False))
    c.employees_repo.add(Employee(employee_id=1, full_name="Ana", email="ana@example.com"))
    return c


@pytest.fixture
def client(container):
    app = create_app(container=container)
    return app.test_client()


def _login(client, user_id: int = 1, role: str = "employee"):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


def test_requires_authenticated_principal(client):
    res = client.get("/api/shifts/current")
    assert res.status_code == 401
    assert res.get_json()["success"] is False


def test_start_shift_returns_201_with_geojson_location(client):
    _login(client)
    res = client.post("/api/shifts/start", json=COORDS)
    assert res.status_code == 201

    data = res.get_json()["data"]
    assert data["status"] == "active"
    assert data["employee"] == 1
    assert data["startLocation"] == {"type": "Point", "coordinates": [-122.4, 37.8]}
    assert data["endLocation"] is None
    assert data["breaks"] == []


def test_start_shift_missing_coordinates_is_400(client):
    _login(client)
    res = client.post("/api/shifts/start", json={"latitude": 37.8})
    assert res.status_code == 400
    assert res.get_json() == {"success": False, "error": "Please provide location coordinates"}


def test_second_start_is_409(client):
    _login(client)
    assert client.post("/api/shifts/start", json=COORDS).status_code == 201
    res = client.post("/api/shifts/start", json=COORDS)
    assert res.status_code == 409


def test_break_cycle_and_end(client):
    _login(client)
    client.post("/api/shifts/start", json=COORDS)

    res = client.put("/api/shifts/break/start", json={"breakType": "lunch", "longitude": 1.0, "latitude": 2.0})
    assert res.status_code == 200
    assert res.get_json()["data"]["status"] == "on_break"

    assert client.put("/api/shifts/break/start", json={"breakType": "short", **COORDS}).status_code == 404

    res = client.put("/api/shifts/break/end", json={"longitude": 3.0, "latitude": 4.0})
    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["status"] == "active"
    assert data["breaks"][0]["type"] == "lunch"
    assert data["breaks"][0]["location"]["coordinates"] == [3.0, 4.0]
    assert data["breaks"][0]["endTime"] is not None

    assert client.put("/api/shifts/break/end", json=COORDS).status_code == 404

    res = client.put("/api/shifts/end", json=COORDS)
    assert res.status_code == 200
    body = res.get_json()
    assert body["data"]["status"] == "completed"
    assert body["data"]["endLocation"]["coordinates"] == [-122.4, 37.8]
    assert body["notification"] == "sent"

    assert client.get("/api/shifts/current").status_code == 404
    assert client.put("/api/shifts/end", json=COORDS).status_code == 404


def test_start_break_with_unknown_type_is_400(client):
    _login(client)
    client.post("/api/shifts/start", json=COORDS)
    res = client.put("/api/shifts/break/start", json={"breakType": "nap", **COORDS})
    assert res.status_code == 400


def test_list_shifts_is_scoped_to_caller(client):
    _login(client, user_id=1)
    client.post("/api/shifts/start", json=COORDS)
    client.put("/api/shifts/end", json=COORDS)
    client.post("/api/shifts/start", json=COORDS)

    _login(client, user_id=2)
    client.post("/api/shifts/start", json=COORDS)

    _login(client, user_id=1)
    body = client.get("/api/shifts").get_json()
    assert body["count"] == 2
    assert [s["status"] for s in body["data"]] == ["active", "completed"]


def test_all_shifts_requires_admin(client):
    _login(client, user_id=1)
    client.post("/api/shifts/start", json=COORDS)

    assert client.get("/api/shifts/all").status_code == 403

    _login(client, user_id=99, role="admin")
    body = client.get("/api/shifts/all").get_json()
    assert body["count"] == 1
    assert body["data"][0]["employee"] == {"id": 1, "name": "Ana", "email": "ana@example.com"}


def test_stats_endpoint(client):
    _login(client)
    client.post("/api/shifts/start", json=COORDS)
    client.put("/api/shifts/end", json=COORDS)

    data = client.get("/api/shifts/stats").get_json()["data"]
    assert data["shiftsCompleted"] == 1
    assert set(data) >= {"totalHours", "avgHoursPerShift", "currentWeekHours"}


def test_resend_email(client):
    _login(client)
    client.post("/api/shifts/start", json=COORDS)
    shift_id = client.put("/api/shifts/end", json=COORDS).get_json()["data"]["id"]

    assert client.post("/api/email/shift-complete", json={}).status_code == 400
    assert client.post("/api/email/shift-complete", json={"shiftId": 12345}).status_code == 404

    res = client.post("/api/email/shift-complete", json={"shiftId": shift_id})
    assert res.status_code == 200
    assert res.get_json()["message"] == "Email notification sent successfully"

    _login(client, user_id=2)
    assert client.post("/api/email/shift-complete", json={"shiftId": shift_id}).status_code == 403


def test_non_object_body_is_400(client):
    _login(client)
    res = client.post("/api/shifts/start", json=[1])
    assert res.status_code == 400
    assert res.get_json()["error"] == "Please provide location coordinates"

    res = client.post("/api/email/shift-complete", json=["x"])
    assert res.status_code == 400
    assert res.get_json()["error"] == "Please provide shift ID"
