from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional

import pytest

from src.ground_ops.ground_ops.assignments.model import Assignment, NewAssignment
from src.ground_ops.ground_ops.container import wire
from src.ground_ops.ground_ops.core.constants import ACTIVE_ASSIGNMENT_STATUSES
from src.ground_ops.ground_ops.core.enums import AssignmentStatus
from src.ground_ops.ground_ops.core.exceptions import ConflictError, NotFoundError
from src.ground_ops.ground_ops.operations.model import Operation
from src.ground_ops.ground_ops.scheduling.availability import conflict_reason
from src.ground_ops.ground_ops.scheduling.policy import ScoringWeights, StaffingPolicy
from src.ground_ops.ground_ops.scheduling.time_window import overlaps
from src.ground_ops.ground_ops.stations.model import Station
from src.ground_ops.ground_ops.users.model import Employee, EmployeeFilter


class InMemoryEmployees:
    def __init__(self, employees: Iterable[Employee] = ()):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(int(employee_id))

    def list_employees(self, employee_filter: EmployeeFilter = EmployeeFilter()):
        out = []
        for e in sorted(self._by_id.values(), key=lambda e: e.employee_id):
            if employee_filter.active_only and not e.is_active:
                continue
            if employee_filter.station_id is not None and e.station_id != employee_filter.station_id:
                continue
            if employee_filter.category is not None and employee_filter.category not in e.categories:
                continue
            if employee_filter.employee_ids is not None and e.employee_id not in employee_filter.employee_ids:
                continue
            out.append(e)
        return out


class InMemoryStations:
    def __init__(self, stations: Iterable[Station] = ()):
        self._by_id = {s.station_id: s for s in stations}

    def get_by_id(self, station_id: int) -> Optional[Station]:
        return self._by_id.get(int(station_id))


class InMemoryOperations:
    def __init__(self, operations: Iterable[Operation] = ()):
        self._by_id = {o.operation_id: o for o in operations}

    def get_by_id(self, operation_id: int) -> Optional[Operation]:
        return self._by_id.get(int(operation_id))


class InMemoryAssignments:
    """Assignment store whose commit points serialize on a lock, like the row lock in MySQL.

    ``commit_barrier`` lets a test hold concurrent writers until all of them have
    passed validation.
    """

    def __init__(self, assignments: Iterable[Assignment] = ()):
        self._lock = threading.Lock()
        self._items = {a.assignment_id: a for a in assignments}
        self._next_id = max(self._items, default=0) + 1
        self.commit_barrier: Optional[threading.Barrier] = None

    def get_by_id(self, assignment_id: int) -> Optional[Assignment]:
        return self._items.get(int(assignment_id))

    def _list(self, match, statuses):
        wanted = set(statuses) if statuses is not None else None
        items = [a for a in self._items.values() if match(a) and (wanted is None or a.status in wanted)]
        return sorted(items, key=lambda a: (a.start_time, a.assignment_id))

    def list_for_employee(self, employee_id: int, statuses=None):
        return self._list(lambda a: a.employee_id == int(employee_id), statuses)

    def list_for_operation(self, operation_id: int, statuses=None):
        return self._list(lambda a: a.operation_id == int(operation_id), statuses)

    def _raise_on_overlap(self, new: NewAssignment) -> None:
        for a in self._items.values():
            if a.employee_id == new.employee_id and a.status in ACTIVE_ASSIGNMENT_STATUSES and overlaps(a.window, new.window):
                raise ConflictError(conflict_reason(a))

    def _insert(self, new: NewAssignment) -> int:
        aid = self._next_id
        self._next_id += 1
        self._items[aid] = Assignment(
            assignment_id=aid,
            employee_id=new.employee_id,
            operation_id=new.operation_id,
            function=new.function,
            start_time=new.start_time,
            end_time=new.end_time,
            cost=new.cost,
            notes=new.notes,
            is_replacement=new.is_replacement,
            replacement_for=new.replacement_for,
        )
        return aid

    def create(self, new: NewAssignment) -> int:
        if self.commit_barrier is not None:
            self.commit_barrier.wait(timeout=5)
        with self._lock:
            self._raise_on_overlap(new)
            return self._insert(new)

    def replace(self, *, original_id: int, replacement: NewAssignment, cancel_note: str) -> int:
        with self._lock:
            original = self._items.get(int(original_id))
            if original is None:
                raise NotFoundError(f"Asignación #{original_id} no encontrada")
            if original.status not in ACTIVE_ASSIGNMENT_STATUSES:
                raise ConflictError(f"La asignación #{original_id} cambió de estado")
            self._raise_on_overlap(replacement)
            self._items[original.assignment_id] = replace(
                original, status=AssignmentStatus.CANCELLED, notes=cancel_note
            )
            return self._insert(replacement)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2030, 1, 1, 8, 0, 0)


@pytest.fixture
def policy() -> StaffingPolicy:
    return StaffingPolicy(
        staffing_ratio=50,
        weights=ScoringWeights(skill_match_weight=10, certification_bonus=5, workload_penalty=2),
        default_operation_hours=2,
    )


@pytest.fixture
def make_container(policy, fixed_now):
    """Wire the real services over in-memory repositories."""

    def _make(*, employees=(), stations=(), operations=(), assignments=(), real_clock=False):
        return wire(
            employees_repo=InMemoryEmployees(employees),
            stations_repo=InMemoryStations(stations),
            operations_repo=InMemoryOperations(operations),
            assignments_repo=InMemoryAssignments(assignments),
            policy=policy,
            clock=None if real_clock else (lambda: fixed_now),
        )

    return _make
