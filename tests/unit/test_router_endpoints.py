"""Tests for the HTTP endpoints (health, attendance check, permissions)."""

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_orchestrator
from src.app import app
from src.services.geo.models import Coordinate

SF_OFFICE = {"latitude": 37.7749, "longitude": -122.4194}


@pytest.fixture
def orchestrator(build_orchestrator, fake_radio, fake_position):
    return build_orchestrator(
        fake_radio(burst=["Beacon-1"]),
        fake_position(Coordinate(37.7750, -122.4195)),
    )


@pytest.fixture
def client(orchestrator):
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    yield TestClient(app)
    app.dependency_overrides.clear()


# ==========================================
#  HEALTH
# ==========================================


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["version"]


# ==========================================
#  ATTENDANCE CHECK
# ==========================================


def test_check_radio_match(client):
    response = client.post(
        "/api/attendance/check",
        json={"targetIdentifiers": ["Beacon-1"], "scanTimeoutSeconds": 1},
    )
    assert response.status_code == 200
    assert response.json() == {
        "status": "matched-radio",
        "message": "Attendance verified via Bluetooth device: Beacon-1",
        "data": {"identifier": "Beacon-1"},
    }


def test_check_location_match(client):
    response = client.post("/api/attendance/check", json={"targetLocations": [SF_OFFICE]})
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "matched-location"
    assert body["data"]["latitude"] == 37.7750
    assert body["data"]["distanceMeters"] < 100


def test_check_no_match_has_null_data(client):
    response = client.post(
        "/api/attendance/check",
        json={"targetLocations": [{"latitude": 0, "longitude": 0}], "radiusMeters": 50},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "no-match"
    assert response.json()["data"] is None


def test_check_permission_denied(build_orchestrator, fake_radio):
    radio = fake_radio(burst=["Beacon-1"])
    app.dependency_overrides[get_orchestrator] = lambda: build_orchestrator(radio, granted=())
    try:
        response = TestClient(app).post("/api/attendance/check", json={"targetIdentifiers": ["Beacon-1"]})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "permission-denied"
    assert body["data"] == {"missingCapabilities": ["positioning", "radio-scan"]}
    assert radio.start_calls == 0


def test_check_requires_some_target(client):
    response = client.post("/api/attendance/check", json={"radiusMeters": 50})
    assert response.status_code == 422


@pytest.mark.parametrize(
    "payload",
    [
        {"targetIdentifiers": ["A"], "radiusMeters": 0},
        {"targetIdentifiers": ["A"], "scanTimeoutSeconds": -1},
        {"targetLocations": [{"latitude": 91, "longitude": 0}]},
    ],
)
def test_check_rejects_invalid_payload(client, payload):
    response = client.post("/api/attendance/check", json=payload)
    assert response.status_code == 422


def test_check_while_in_flight_conflicts(client, orchestrator):
    orchestrator._in_flight = True
    response = client.post("/api/attendance/check", json={"targetIdentifiers": ["Beacon-1"]})
    assert response.status_code == 409


# ==========================================
#  PERMISSIONS
# ==========================================


def test_permissions_all_granted(client):
    response = client.get("/api/attendance/permissions")
    assert response.status_code == 200
    assert response.json() == {
        "granted": True,
        "missingCapabilities": [],
        "message": "All permissions already granted",
    }


def test_permissions_missing(build_orchestrator):
    app.dependency_overrides[get_orchestrator] = lambda: build_orchestrator(granted=("positioning",))
    try:
        response = TestClient(app).get("/api/attendance/permissions")
    finally:
        app.dependency_overrides.clear()

    assert response.json()["granted"] is False
    assert response.json()["missingCapabilities"] == ["radio-scan"]
    assert response.json()["message"] == "Please enable Bluetooth scanning permission in Settings"
