from __future__ import annotations

import threading
import time
from datetime import datetime, timedelta, timezone

import pytest

from src.ground_ops.ground_ops.assignments.model import Assignment
from src.ground_ops.ground_ops.common.datetime_utils import parse_iso_datetime
from src.ground_ops.ground_ops.core.enums import AssignmentStatus, OperationType, Role
from src.ground_ops.ground_ops.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.ground_ops.ground_ops.operations.model import Operation
from src.ground_ops.ground_ops.stations.model import Station
from src.ground_ops.ground_ops.users.model import Caller, Employee

SUPERVISOR = Caller(user_id=1, role=Role.SUPERVISOR, station_id=1)
START = datetime(2030, 1, 15, 10, 0)
END = datetime(2030, 1, 15, 12, 0)


@pytest.fixture
def container(make_container):
    return make_container(
        employees=[
            Employee(1, "Ana", Role.SUPERVISOR, station_id=1),
            Employee(2, "Luis", Role.EMPLOYEE, station_id=1),
            Employee(3, "Carla", Role.EMPLOYEE, station_id=1),
        ],
        stations=[Station(1, "Rampa Norte", minimum_staff=2, maximum_staff=8)],
        operations=[Operation(1, "AA1234", START, OperationType.ARRIVAL, 150, 1)],
    )


def _create(container, employee_id=2, **overrides):
    kwargs = dict(
        caller=SUPERVISOR,
        employee_id=employee_id,
        operation_id=1,
        start_time=START,
        end_time=END,
        function="OPERADOR_RAMPA",
        cost=25,
        notes="  ",
    )
    kwargs.update(overrides)
    return container.assignment_service.create(**kwargs)


def test_create_persists_scheduled_assignment(container):
    aid = _create(container)
    saved = container.assignments_repo.get_by_id(aid)
    assert saved.status == AssignmentStatus.SCHEDULED
    assert saved.function == "OPERADOR_RAMPA"
    assert saved.notes is None


def test_second_overlapping_create_is_rejected(container):
    first = _create(container)
    with pytest.raises(ValidationError) as exc:
        _create(container, start_time=datetime(2030, 1, 15, 11, 0), end_time=datetime(2030, 1, 15, 13, 0))
    assert exc.value.reasons == [f"Conflicto de horario con asignación #{first}"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"function": "PILOTO"},
        {"function": ""},
        {"cost": -1},
        {"cost": 1001},
        {"cost": "caro"},
        {"start_time": datetime(2029, 12, 31, 10, 0), "end_time": datetime(2029, 12, 31, 12, 0)},
    ],
)
def test_create_rejects_invalid_input(container, overrides):
    with pytest.raises(ValidationError):
        _create(container, **overrides)
    assert container.assignments_repo.list_for_employee(2) == []


def test_employees_cannot_create_assignments(container):
    with pytest.raises(AuthorizationError):
        _create(container, caller=Caller(user_id=2, role=Role.EMPLOYEE))


def test_unknown_employee_is_not_found(container):
    with pytest.raises(NotFoundError):
        _create(container, employee_id=99)


def test_storage_conflict_maps_to_concurrent_reason(container, monkeypatch):
    def lost_race(new):
        raise ConflictError("Conflicto de horario (concurrente)")

    monkeypatch.setattr(container.assignments_repo, "create", lost_race)
    with pytest.raises(ValidationError) as exc:
        _create(container)
    assert exc.value.reasons == ["Conflicto de horario (concurrente)"]


def test_concurrent_creates_for_same_employee_commit_once(container):
    container.assignments_repo.commit_barrier = threading.Barrier(2)
    outcomes: list[object] = []

    def worker(start_hour: int):
        try:
            outcomes.append(
                _create(
                    container,
                    start_time=datetime(2030, 1, 15, start_hour, 0),
                    end_time=datetime(2030, 1, 15, start_hour + 2, 0),
                )
            )
        except ValidationError as e:
            outcomes.append(e)

    threads = [threading.Thread(target=worker, args=(h,)) for h in (10, 11)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    created = [o for o in outcomes if isinstance(o, int)]
    rejected = [o for o in outcomes if isinstance(o, ValidationError)]
    assert len(created) == 1
    assert len(rejected) == 1
    assert len(container.assignments_repo.list_for_employee(2)) == 1


def test_replacement_cancels_original_and_links_new(container):
    original_id = _create(container)
    new_id = container.assignment_service.create_replacement(
        caller=SUPERVISOR,
        original_assignment_id=original_id,
        replacement_employee_id=3,
        reason="Enfermedad",
    )

    original = container.assignments_repo.get_by_id(original_id)
    replacement = container.assignments_repo.get_by_id(new_id)
    assert original.status == AssignmentStatus.CANCELLED
    assert original.notes == "Reemplazado por empleado #3. Razón: Enfermedad"
    assert replacement.employee_id == 3
    assert replacement.is_replacement
    assert replacement.replacement_for == 2
    assert (replacement.start_time, replacement.end_time) == (START, END)
    assert replacement.notes == "Reemplazo para empleado #2. Razón: Enfermedad"


def test_replacement_requires_reason_and_other_employee(container):
    original_id = _create(container)
    service = container.assignment_service
    with pytest.raises(ValidationError):
        service.create_replacement(caller=SUPERVISOR, original_assignment_id=original_id, replacement_employee_id=3, reason=" ")
    with pytest.raises(ValidationError):
        service.create_replacement(caller=SUPERVISOR, original_assignment_id=original_id, replacement_employee_id=2, reason="x")
    with pytest.raises(NotFoundError):
        service.create_replacement(caller=SUPERVISOR, original_assignment_id=999, replacement_employee_id=3, reason="x")


def test_replacement_validates_the_substitute(make_container):
    busy = Assignment(
        assignment_id=50,
        employee_id=3,
        operation_id=7,
        function="OPERADOR_RAMPA",
        start_time=datetime(2030, 1, 15, 11, 0),
        end_time=datetime(2030, 1, 15, 15, 0),
        cost=10,
        status=AssignmentStatus.CONFIRMED,
    )
    original = Assignment(
        assignment_id=51,
        employee_id=2,
        operation_id=1,
        function="OPERADOR_RAMPA",
        start_time=START,
        end_time=END,
        cost=10,
    )
    container = make_container(
        employees=[Employee(2, "Luis", Role.EMPLOYEE), Employee(3, "Carla", Role.EMPLOYEE)],
        stations=[Station(1, "Rampa Norte", minimum_staff=2, maximum_staff=8)],
        operations=[Operation(1, "AA1234", START, OperationType.ARRIVAL, 150, 1)],
        assignments=[busy, original],
    )

    with pytest.raises(ValidationError) as exc:
        container.assignment_service.create_replacement(
            caller=Caller(user_id=9, role=Role.MANAGER),
            original_assignment_id=51,
            replacement_employee_id=3,
            reason="Enfermedad",
        )
    assert exc.value.reasons == ["Conflicto de horario con asignación #50"]
    assert container.assignments_repo.get_by_id(51).status == AssignmentStatus.SCHEDULED


@pytest.fixture
def non_utc_server(monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset not available")
    monkeypatch.setenv("TZ", "America/Guayaquil")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def _utc_z(delta: timedelta) -> datetime:
    moment = datetime.now(timezone.utc) + delta
    return parse_iso_datetime(moment.strftime("%Y-%m-%dT%H:%M:%SZ"), "startTime")


def test_default_clock_compares_utc_inputs_in_utc(make_container, non_utc_server):
    container = make_container(
        employees=[Employee(2, "Luis", Role.EMPLOYEE, station_id=1)],
        stations=[Station(1, "Rampa Norte", minimum_staff=2, maximum_staff=8)],
        operations=[Operation(1, "AA1234", _utc_z(timedelta(hours=3)), OperationType.ARRIVAL, 150, 1)],
        real_clock=True,
    )

    with pytest.raises(ValidationError) as exc:
        _create(container, start_time=_utc_z(timedelta(hours=-2)), end_time=_utc_z(timedelta(hours=-1)))
    assert exc.value.reasons == ["La fecha de inicio no puede ser en el pasado"]

    aid = _create(container, start_time=_utc_z(timedelta(hours=3)), end_time=_utc_z(timedelta(hours=5)))
    assert container.assignments_repo.get_by_id(aid).start_time.tzinfo is None
