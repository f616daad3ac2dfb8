from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence, Tuple

from ..assignments.model import Assignment
from ..common.datetime_utils import start_of_day, start_of_week
from ..core.constants import CLOSED_OPERATION_STATUSES, WORKED_ASSIGNMENT_STATUSES
from ..core.enums import ShiftType
from ..operations.model import Operation
from ..stations.model import Station
from ..users.model import Employee
from .availability import conflict_reason, find_conflicts, is_assignable_role, missing_certifications
from .time_window import TimeWindow


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reasons: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()


def closed_operation_reason(operation: Operation) -> str:
    return f"La operación no admite asignaciones (estado {operation.status.value})"


def shift_type_for(moment: datetime) -> ShiftType:
    hour = moment.hour
    if 6 <= hour < 14:
        return ShiftType.MORNING
    if 14 <= hour < 22:
        return ShiftType.AFTERNOON
    if hour >= 22 or hour < 2:
        return ShiftType.NIGHT
    return ShiftType.DAWN


class AssignmentValidator:
    """Decide whether one (employee, operation, window) assignment is legal.

    Pure decision logic: no writes. Every failed check adds a reason; nothing
    short-circuits, so callers can show all problems at once. The caller must
    persist only on ``valid`` and re-run the overlap check under serialization
    at commit time (see ``AssignmentRepository``).
    """

    def validate(
        self,
        employee: Employee,
        operation: Operation,
        station: Optional[Station],
        window: TimeWindow,
        existing_assignments: Sequence[Assignment],
    ) -> ValidationResult:
        reasons: list[str] = []
        warnings: list[str] = []
        own = [a for a in existing_assignments if a.employee_id == employee.employee_id]

        if not window.is_well_formed:
            reasons.append("La hora de inicio debe ser anterior a la hora de fin")

        if operation.status in CLOSED_OPERATION_STATUSES:
            reasons.append(closed_operation_reason(operation))

        reasons += self._eligibility_reasons(employee, station)
        reasons += [conflict_reason(a) for a in find_conflicts(window, own)]
        reasons += self.workload_reasons(employee, window, own)

        if employee.available_shifts and window.is_well_formed:
            shift = shift_type_for(window.start)
            if shift not in employee.available_shifts:
                warnings.append(f"El empleado no está disponible para turnos {shift.value}")

        return ValidationResult(valid=not reasons, reasons=tuple(reasons), warnings=tuple(warnings))

    @staticmethod
    def _eligibility_reasons(employee: Employee, station: Optional[Station]) -> list[str]:
        out: list[str] = []
        if not employee.is_active:
            out.append("Empleado inactivo")
        if not is_assignable_role(employee.role):
            out.append(f"El rol {employee.role.value} no es asignable a operaciones")
        if station is not None and station.required_certifications:
            missing = missing_certifications(employee, station.required_certifications)
            if missing:
                out.append(f"El empleado no tiene las certificaciones requeridas: {', '.join(missing)}")
        return out

    def workload_reasons(self, employee: Employee, window: TimeWindow, own: Sequence[Assignment]) -> list[str]:
        """Daily/weekly hour limit violations if ``window`` were added to ``own``."""
        out: list[str] = []
        if employee.max_daily_hours is not None:
            used = _hours_starting_in(own, start_of_day(window.start), timedelta(days=1))
            if used + window.hours > employee.max_daily_hours:
                out.append(f"Excede horas máximas diarias ({employee.max_daily_hours:g}h)")
        if employee.max_weekly_hours is not None:
            used = _hours_starting_in(own, start_of_week(window.start), timedelta(weeks=1))
            if used + window.hours > employee.max_weekly_hours:
                out.append(f"Excede horas máximas semanales ({employee.max_weekly_hours:g}h)")
        return out


def _hours_starting_in(assignments: Iterable[Assignment], period_start: datetime, length: timedelta) -> float:
    period_end = period_start + length
    return sum(
        a.window.hours
        for a in assignments
        if a.status in WORKED_ASSIGNMENT_STATUSES and period_start <= a.start_time < period_end
    )
