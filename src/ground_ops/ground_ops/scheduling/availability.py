from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Iterable, Mapping, Sequence, Tuple

from ..assignments.model import Assignment
from ..core.constants import ACTIVE_ASSIGNMENT_STATUSES, INACTIVE_REASON
from ..core.enums import Role
from ..operations.model import Operation
from ..users.model import Employee
from .time_window import TimeWindow, overlaps

logger = logging.getLogger(__name__)

# Every role must appear here; a new Role fails loudly with KeyError.
_ASSIGNABLE_BY_ROLE = {
    Role.EMPLOYEE: True,
    Role.SUPERVISOR: True,
    Role.MANAGER: False,
    Role.PRESIDENT: False,
    Role.ADMIN: False,
}


def is_assignable_role(role: Role) -> bool:
    return _ASSIGNABLE_BY_ROLE[role]


def conflict_reason(assignment: Assignment) -> str:
    return f"Conflicto de horario con asignación #{assignment.assignment_id}"


def missing_certifications(employee: Employee, required: AbstractSet[str]) -> list[str]:
    return sorted(set(required) - set(employee.certifications))


def find_conflicts(window: TimeWindow, assignments: Iterable[Assignment]) -> list[Assignment]:
    """Active assignments overlapping ``window``, ordered by start then id."""
    hits = [a for a in assignments if a.status in ACTIVE_ASSIGNMENT_STATUSES and overlaps(a.window, window)]
    hits.sort(key=lambda a: (a.start_time, a.assignment_id))
    return hits


@dataclass(frozen=True)
class EmployeeAvailability:
    employee: Employee
    is_available: bool
    reasons: Tuple[str, ...] = ()
    conflicting_assignment_ids: Tuple[int, ...] = ()


@dataclass(frozen=True)
class AvailabilityResult:
    window: TimeWindow
    available: Tuple[Employee, ...] = ()
    unavailable: Tuple[EmployeeAvailability, ...] = field(default_factory=tuple)


class AvailabilityResolver:
    """Split a candidate pool into available and unavailable employees.

    Read-only projection over already-fetched snapshots; the result is advisory
    until an assignment passes validation and is committed.
    """

    def __init__(self, default_operation_hours: float):
        self._default_hours = float(default_operation_hours)

    def window_for(self, operation: Operation) -> TimeWindow:
        hours = operation.estimated_duration_hours or self._default_hours
        return TimeWindow.starting_at(operation.scheduled_time, hours=hours)

    def check(
        self,
        employee: Employee,
        window: TimeWindow,
        assignments: Sequence[Assignment],
        *,
        required_certifications: AbstractSet[str] = frozenset(),
    ) -> EmployeeAvailability:
        if not employee.is_active:
            return EmployeeAvailability(employee=employee, is_available=False, reasons=(INACTIVE_REASON,))

        reasons: list[str] = []
        missing = missing_certifications(employee, required_certifications)
        if missing:
            reasons.append(f"Sin certificaciones requeridas: {', '.join(missing)}")

        own = [a for a in assignments if a.employee_id == employee.employee_id]
        conflicts = find_conflicts(window, own)
        reasons += [conflict_reason(a) for a in conflicts]

        return EmployeeAvailability(
            employee=employee,
            is_available=not reasons,
            reasons=tuple(reasons),
            conflicting_assignment_ids=tuple(a.assignment_id for a in conflicts),
        )

    def resolve_window(
        self,
        window: TimeWindow,
        candidates: Iterable[Employee],
        assignments_by_employee: Mapping[int, Sequence[Assignment]],
        *,
        required_certifications: AbstractSet[str] = frozenset(),
    ) -> AvailabilityResult:
        available: list[Employee] = []
        unavailable: list[EmployeeAvailability] = []

        for employee in sorted(candidates, key=lambda e: e.employee_id):
            status = self.check(
                employee,
                window,
                assignments_by_employee.get(employee.employee_id, ()),
                required_certifications=required_certifications,
            )
            if status.is_available:
                available.append(employee)
            else:
                unavailable.append(status)

        logger.debug(
            "availability window=%s..%s available=%d unavailable=%d",
            window.start.isoformat(),
            window.end.isoformat(),
            len(available),
            len(unavailable),
        )
        return AvailabilityResult(window=window, available=tuple(available), unavailable=tuple(unavailable))

    def resolve(
        self,
        operation: Operation,
        candidates: Iterable[Employee],
        assignments_by_employee: Mapping[int, Sequence[Assignment]],
        *,
        required_certifications: AbstractSet[str] = frozenset(),
    ) -> AvailabilityResult:
        return self.resolve_window(
            self.window_for(operation),
            candidates,
            assignments_by_employee,
            required_certifications=required_certifications,
        )
