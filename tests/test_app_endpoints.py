from __future__ import annotations

from datetime import datetime

import pytest

from src.ground_ops.ground_ops.core.enums import OperationType, Role, StationType
from src.ground_ops.ground_ops.main import create_app
from src.ground_ops.ground_ops.operations.model import Operation
from src.ground_ops.ground_ops.stations.model import Station
from src.ground_ops.ground_ops.users.model import Employee


@pytest.fixture
def client(make_container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    container = make_container(
        employees=[
            Employee(1, "Ana", Role.SUPERVISOR, station_id=1, certifications=frozenset({"ramp_safety"})),
            Employee(2, "Luis", Role.EMPLOYEE, station_id=1, certifications=frozenset({"ramp_safety"})),
            Employee(3, "Carla", Role.EMPLOYEE, station_id=1, is_active=False),
        ],
        stations=[
            Station(1, "Rampa Norte", minimum_staff=2, maximum_staff=8, station_type=StationType.PLATFORM),
        ],
        operations=[
            Operation(1, "AA1234", datetime(2030, 1, 15, 10, 0), OperationType.ARRIVAL, 150, 1),
            Operation(3, "UA9", datetime(2030, 1, 16, 8, 0), OperationType.ARRIVAL, 90, None),
        ],
    )
    app = create_app(container)
    return app.test_client()


def _login(client, user_id=1, role=Role.SUPERVISOR, station_id=None):
    with client.session_transaction() as s:
        s["user_id"] = user_id
        s["role"] = role.value
        if station_id is not None:
            s["station_id"] = station_id


def test_requests_without_session_are_unauthenticated(client):
    res = client.get("/scheduling/optimize-staffing/1")
    assert res.status_code == 401
    assert res.get_json()["error"] == "AuthenticationError"


def test_available_staff_lists_available_first(client):
    _login(client)
    res = client.get("/scheduling/available-staff/1")
    assert res.status_code == 200
    rows = res.get_json()
    assert [(r["id"], r["isAvailable"]) for r in rows] == [(1, True), (2, True), (3, False)]
    assert rows[2]["reasons"] == ["inactive"]


def test_optimize_staffing_payload(client):
    _login(client)
    res = client.get("/scheduling/optimize-staffing/1")
    assert res.status_code == 200
    plan = res.get_json()
    assert plan["minimumStaff"] == 2
    assert plan["recommendedStaff"] == 3
    assert plan["minimumStaffMet"] is True
    assert plan["staffAvailability"] == {"available": 2, "required": 2, "shortage": 0}
    assert [r["userId"] for r in plan["recommendedAssignments"]] == [1, 2]
    assert [r["recommendedPosition"] for r in plan["recommendedAssignments"]] == ["OPERADOR_RAMPA", "SUPERVISOR_RAMPA"]
    assert plan["window"] == {"startTime": "2030-01-15T10:00:00", "endTime": "2030-01-15T12:00:00"}


def test_domain_errors_map_to_status_codes(client):
    _login(client)
    missing_station = client.get("/scheduling/optimize-staffing/3")
    assert missing_station.status_code == 422
    assert missing_station.get_json()["error"] == "MissingStationError"

    assert client.get("/scheduling/optimize-staffing/404").status_code == 404

    _login(client, user_id=2, role=Role.EMPLOYEE)
    assert client.get("/scheduling/optimize-staffing/1").status_code == 403


def test_validate_assignment_returns_reasons(client):
    _login(client)
    res = client.post(
        "/scheduling/validate-assignment",
        json={"userId": 3, "operationId": 1, "startTime": "2030-01-15T10:00:00", "endTime": "2030-01-15T12:00:00"},
    )
    assert res.status_code == 200
    assert res.get_json() == {"valid": False, "reasons": ["Empleado inactivo"], "warnings": []}


def test_validate_assignment_rejects_bad_body(client):
    _login(client)
    res = client.post("/scheduling/validate-assignment", json={"userId": 2, "operationId": 1, "startTime": "ayer"})
    assert res.status_code == 422
    assert res.get_json()["error"] == "ValidationError"


def test_create_then_conflict_then_check_availability(client):
    _login(client)
    body = {
        "employeeId": 2,
        "operationId": 1,
        "startTime": "2030-01-15T10:00:00Z",
        "endTime": "2030-01-15T12:00:00Z",
        "function": "OPERADOR_RAMPA",
        "cost": 30,
    }
    created = client.post("/assignments", json=body)
    assert created.status_code == 201
    assignment_id = created.get_json()["id"]

    again = client.post("/assignments", json=body)
    assert again.status_code == 422
    assert again.get_json()["reasons"] == [f"Conflicto de horario con asignación #{assignment_id}"]

    res = client.post(
        "/scheduling/check-availability",
        json={"userIds": [1, 2], "startTime": "2030-01-15T11:00:00", "endTime": "2030-01-15T13:00:00"},
    )
    assert res.status_code == 200
    data = res.get_json()
    assert data["1"]["isAvailable"] is True
    assert data["2"]["isAvailable"] is False
    assert data["2"]["conflictingAssignmentIds"] == [assignment_id]


def test_replacement_endpoint(client):
    _login(client)
    created = client.post(
        "/assignments",
        json={
            "employeeId": 2,
            "operationId": 1,
            "startTime": "2030-01-15T10:00:00",
            "endTime": "2030-01-15T12:00:00",
            "function": "OPERADOR_RAMPA",
            "cost": 30,
        },
    )
    original_id = created.get_json()["id"]

    res = client.post(f"/assignments/{original_id}/replacement", json={"replacementUserId": 1, "reason": "Enfermedad"})
    assert res.status_code == 201
    assert res.get_json()["replaces"] == original_id


def test_employee_checks_only_own_availability(client):
    _login(client, user_id=2, role=Role.EMPLOYEE)
    window = {"startTime": "2030-01-15T11:00:00", "endTime": "2030-01-15T13:00:00"}
    assert client.post("/scheduling/check-availability", json={"userIds": [2], **window}).status_code == 200
    assert client.post("/scheduling/check-availability", json={"userIds": [1], **window}).status_code == 403


def test_category_query_parameter(client):
    _login(client)
    assert client.get("/scheduling/available-staff/1?category=ramp").get_json() == []

    res = client.get("/scheduling/optimize-staffing/1?category=pilot")
    assert res.status_code == 422
    assert res.get_json()["error"] == "ValidationError"
