from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence, Tuple

from ..assignments.model import Assignment
from ..assignments.repository import AssignmentRepository
from ..core.constants import ACTIVE_ASSIGNMENT_STATUSES, CLOSED_OPERATION_STATUSES, WORKED_ASSIGNMENT_STATUSES
from ..core.enums import EmployeeCategory, Role
from ..core.exceptions import AuthorizationError, MissingStationError, NotFoundError, ValidationError
from ..operations.model import Operation
from ..operations.repository import OperationRepository
from ..stations.model import Station
from ..stations.repository import StationRepository
from ..users.model import Caller, Employee, EmployeeFilter
from ..users.repository import EmployeeRepository
from .availability import AvailabilityResolver, AvailabilityResult, EmployeeAvailability, is_assignable_role
from .optimizer import StaffingOptimizer, StaffingPlan
from .policy import StaffingPolicy
from .requirements import StaffingRequirementCalculator, skills_needed
from .time_window import TimeWindow
from .validator import AssignmentValidator, ValidationResult, closed_operation_reason

logger = logging.getLogger(__name__)

_SCHEDULER_ROLES = {Role.SUPERVISOR, Role.MANAGER, Role.ADMIN, Role.PRESIDENT}
_STATION_BOUND_ROLES = {Role.SUPERVISOR, Role.MANAGER}


@dataclass(frozen=True)
class AvailableStaff:
    """Candidate pool of an operation split by availability."""

    operation: Operation
    station: Optional[Station]
    result: AvailabilityResult
    widened_pool: bool = False


@dataclass(frozen=True)
class AvailabilityReport:
    """Per-user answer of ``check_availability``."""

    availability: EmployeeAvailability
    warnings: Tuple[str, ...] = ()


class SchedulingService:
    """Use cases of the staffing core: availability, validation and optimization.

    Reads snapshots through the repositories and hands them to the pure
    components. Holds no state between calls and takes no locks.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        stations: StationRepository,
        operations: OperationRepository,
        assignments: AssignmentRepository,
        *,
        policy: StaffingPolicy,
    ):
        self._employees = employees
        self._stations = stations
        self._operations = operations
        self._assignments = assignments
        self._requirements = StaffingRequirementCalculator(policy.staffing_ratio)
        self._resolver = AvailabilityResolver(policy.default_operation_hours)
        self._validator = AssignmentValidator()
        self._optimizer = StaffingOptimizer(policy.weights)

    # Permissions
    @staticmethod
    def _require_scheduler(caller: Caller) -> None:
        if caller.role not in _SCHEDULER_ROLES:
            raise AuthorizationError("No tiene permisos para consultar la planificación")

    @staticmethod
    def _require_station_scope(caller: Caller, operation: Operation) -> None:
        if caller.role in _STATION_BOUND_ROLES and caller.station_id is not None:
            if operation.station_id != caller.station_id:
                raise AuthorizationError("Solo puede consultar operaciones de su estación")

    # Loading
    def get_operation(self, operation_id: int) -> Operation:
        operation = self._operations.get_by_id(int(operation_id))
        if not operation:
            raise NotFoundError(f"Operación #{operation_id} no encontrada")
        return operation

    def get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError(f"Empleado #{employee_id} no encontrado")
        return employee

    def get_station(self, operation: Operation) -> Optional[Station]:
        if operation.station_id is None:
            return None
        station = self._stations.get_by_id(operation.station_id)
        if not station:
            raise NotFoundError(f"Estación #{operation.station_id} no encontrada")
        return station

    def _assignments_by_employee(self, employees: Iterable[Employee]) -> dict[int, Sequence[Assignment]]:
        return {
            e.employee_id: self._assignments.list_for_employee(e.employee_id, WORKED_ASSIGNMENT_STATUSES)
            for e in employees
        }

    def _candidate_pool(
        self,
        station: Optional[Station],
        minimum: int,
        category: Optional[EmployeeCategory] = None,
    ) -> tuple[list[Employee], bool]:
        """Station employees first; widen to everyone when they cannot cover ``minimum``.

        ``category`` narrows both the station pool and the widened one.
        """

        everyone = EmployeeFilter(category=category, active_only=False)
        if station is None:
            return self._assignable(self._employees.list_employees(everyone)), False

        at_station = EmployeeFilter(station_id=station.station_id, category=category, active_only=False)
        pool = self._assignable(self._employees.list_employees(at_station))
        if sum(1 for e in pool if e.is_active) >= minimum:
            return pool, False

        logger.info(
            "station %s pool too small (%d active < %d), widening",
            station.station_id,
            sum(1 for e in pool if e.is_active),
            minimum,
        )
        return self._assignable(self._employees.list_employees(everyone)), True

    @staticmethod
    def _assignable(employees: Iterable[Employee]) -> list[Employee]:
        return [e for e in employees if is_assignable_role(e.role)]

    # Use cases
    def available_staff(
        self,
        *,
        caller: Caller,
        operation_id: int,
        category: Optional[EmployeeCategory] = None,
    ) -> AvailableStaff:
        self._require_scheduler(caller)
        operation = self.get_operation(operation_id)
        self._require_station_scope(caller, operation)
        station = self.get_station(operation)

        minimum = station.minimum_staff if station else 0
        pool, widened = self._candidate_pool(station, minimum, category)
        result = self._resolver.resolve(
            operation,
            pool,
            self._assignments_by_employee(pool),
            required_certifications=station.required_certifications if station else frozenset(),
        )
        return AvailableStaff(operation=operation, station=station, result=result, widened_pool=widened)

    def validate_assignment(
        self,
        *,
        caller: Caller,
        employee_id: int,
        operation_id: int,
        start_time: datetime,
        end_time: datetime,
    ) -> ValidationResult:
        if caller.role not in _SCHEDULER_ROLES and int(employee_id) != caller.user_id:
            raise AuthorizationError("Solo puede validar sus propias asignaciones")

        employee = self.get_employee(employee_id)
        operation = self.get_operation(operation_id)
        self._require_station_scope(caller, operation)
        station = self.get_station(operation)

        existing = self._assignments.list_for_employee(employee.employee_id, WORKED_ASSIGNMENT_STATUSES)
        result = self._validator.validate(employee, operation, station, TimeWindow(start_time, end_time), existing)
        if not result.valid:
            logger.info(
                "assignment rejected employee=%s operation=%s reasons=%s",
                employee.employee_id,
                operation.operation_id,
                list(result.reasons),
            )
        return result

    def optimize_staffing(
        self,
        *,
        caller: Caller,
        operation_id: int,
        category: Optional[EmployeeCategory] = None,
    ) -> StaffingPlan:
        self._require_scheduler(caller)
        operation = self.get_operation(operation_id)
        self._require_station_scope(caller, operation)
        station = self.get_station(operation)
        if station is None:
            raise MissingStationError(f"La operación #{operation.operation_id} no tiene estación asignada")
        if operation.status in CLOSED_OPERATION_STATUSES:
            raise ValidationError(closed_operation_reason(operation))

        requirement = self._requirements.requirement(operation, station)
        pool, widened = self._candidate_pool(station, requirement.minimum, category)
        assignments = self._assignments_by_employee(pool)
        availability = self._resolver.resolve(
            operation,
            pool,
            assignments,
            required_certifications=station.required_certifications,
        )

        active_counts = {
            eid: sum(1 for a in items if a.status in ACTIVE_ASSIGNMENT_STATUSES) for eid, items in assignments.items()
        }
        filled: dict[str, int] = {}
        for a in self._assignments.list_for_operation(operation.operation_id, ACTIVE_ASSIGNMENT_STATUSES):
            filled[a.function] = filled.get(a.function, 0) + 1

        return self._optimizer.optimize(
            operation=operation,
            station=station,
            requirement=requirement,
            availability=availability,
            active_assignment_counts=active_counts,
            filled_functions=filled,
            skills_needed=skills_needed(operation),
            widened_pool=widened,
        )

    def check_availability(
        self,
        *,
        caller: Caller,
        user_ids: Sequence[int],
        start_time: datetime,
        end_time: datetime,
    ) -> list[AvailabilityReport]:
        if caller.role not in _SCHEDULER_ROLES and any(int(uid) != caller.user_id for uid in user_ids):
            raise AuthorizationError("Solo puede consultar su propia disponibilidad")

        window = TimeWindow.of(start_time, end_time)
        wanted = [int(uid) for uid in user_ids]
        found = {
            e.employee_id: e
            for e in self._employees.list_employees(EmployeeFilter(employee_ids=frozenset(wanted), active_only=False))
        }
        missing = [uid for uid in wanted if uid not in found]
        if missing:
            raise NotFoundError(f"Empleado #{missing[0]} no encontrado")

        reports: list[AvailabilityReport] = []
        for uid in wanted:
            employee = found[uid]
            existing = self._assignments.list_for_employee(employee.employee_id, WORKED_ASSIGNMENT_STATUSES)
            availability = self._resolver.check(employee, window, existing)
            warnings = self._validator.workload_reasons(employee, window, existing) if employee.is_active else []
            reports.append(AvailabilityReport(availability=availability, warnings=tuple(warnings)))
        return reports
