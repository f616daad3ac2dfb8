from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from ..core.constants import ACTIVE_ASSIGNMENT_STATUSES, CONCURRENT_CONFLICT_REASON
from ..core.enums import AssignmentFunction, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..scheduling.service import SchedulingService
from ..users.model import Caller
from .model import NewAssignment
from .repository import AssignmentRepository

logger = logging.getLogger(__name__)

_WRITER_ROLES = {Role.SUPERVISOR, Role.MANAGER, Role.ADMIN}
MAX_HOURLY_COST = 1000


class AssignmentService:
    """Write path for assignments.

    Every write is gated by the assignment validator; the repository then re-checks
    overlaps under serialization, and a lost race surfaces as the same
    ``ValidationError`` taxonomy as a failed pre-check.
    """

    def __init__(
        self,
        assignments: AssignmentRepository,
        scheduling: SchedulingService,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._assignments = assignments
        self._scheduling = scheduling
        self._clock = clock or now_utc

    @staticmethod
    def _require_writer(caller: Caller) -> None:
        if caller.role not in _WRITER_ROLES:
            raise AuthorizationError("No tiene permisos para crear asignaciones")

    @staticmethod
    def _parse_function(value: str) -> AssignmentFunction:
        try:
            return AssignmentFunction(require_non_empty(value, "La función"))
        except ValueError:
            raise ValidationError("Función de asignación inválida")

    @staticmethod
    def _check_cost(cost: float) -> float:
        try:
            value = float(cost)
        except (TypeError, ValueError):
            raise ValidationError("El costo debe ser un número")
        if value < 0:
            raise ValidationError("El costo no puede ser negativo")
        if value > MAX_HOURLY_COST:
            raise ValidationError(f"El costo no puede exceder ${MAX_HOURLY_COST}/hora")
        return value

    def create(
        self,
        *,
        caller: Caller,
        employee_id: int,
        operation_id: int,
        start_time: datetime,
        end_time: datetime,
        function: str,
        cost: float,
        notes: Optional[str] = None,
    ) -> int:
        self._require_writer(caller)
        function_value = self._parse_function(function)
        cost_value = self._check_cost(cost)
        if start_time < self._clock():
            raise ValidationError("La fecha de inicio no puede ser en el pasado")

        result = self._scheduling.validate_assignment(
            caller=caller,
            employee_id=employee_id,
            operation_id=operation_id,
            start_time=start_time,
            end_time=end_time,
        )
        if not result.valid:
            raise ValidationError("La asignación no es válida", result.reasons)

        new = NewAssignment(
            employee_id=int(employee_id),
            operation_id=int(operation_id),
            function=function_value.value,
            start_time=start_time,
            end_time=end_time,
            cost=cost_value,
            notes=(notes or "").strip() or None,
        )
        try:
            assignment_id = self._assignments.create(new)
        except ConflictError:
            logger.warning("concurrent overlap for employee=%s, assignment rejected", employee_id)
            raise ValidationError("La asignación no es válida", [CONCURRENT_CONFLICT_REASON])

        logger.info("assignment #%s created employee=%s operation=%s", assignment_id, employee_id, operation_id)
        return assignment_id

    def create_replacement(
        self,
        *,
        caller: Caller,
        original_assignment_id: int,
        replacement_employee_id: int,
        reason: str,
    ) -> int:
        self._require_writer(caller)
        reason = require_non_empty(reason, "La razón")

        original = self._assignments.get_by_id(int(original_assignment_id))
        if not original:
            raise NotFoundError(f"Asignación #{original_assignment_id} no encontrada")
        if original.status not in ACTIVE_ASSIGNMENT_STATUSES:
            raise ValidationError(f"La asignación #{original.assignment_id} ya no está activa")
        if int(replacement_employee_id) == original.employee_id:
            raise ValidationError("El reemplazo debe ser un empleado distinto")

        result = self._scheduling.validate_assignment(
            caller=caller,
            employee_id=replacement_employee_id,
            operation_id=original.operation_id,
            start_time=original.start_time,
            end_time=original.end_time,
        )
        if not result.valid:
            raise ValidationError("No se puede crear el reemplazo", result.reasons)

        replacement = NewAssignment(
            employee_id=int(replacement_employee_id),
            operation_id=original.operation_id,
            function=original.function,
            start_time=original.start_time,
            end_time=original.end_time,
            cost=original.cost,
            notes=f"Reemplazo para empleado #{original.employee_id}. Razón: {reason}",
            is_replacement=True,
            replacement_for=original.employee_id,
        )
        try:
            new_id = self._assignments.replace(
                original_id=original.assignment_id,
                replacement=replacement,
                cancel_note=f"Reemplazado por empleado #{replacement_employee_id}. Razón: {reason}",
            )
        except ConflictError:
            raise ValidationError("No se puede crear el reemplazo", [CONCURRENT_CONFLICT_REASON])

        logger.info("assignment #%s replaced by #%s", original.assignment_id, new_id)
        return new_id
