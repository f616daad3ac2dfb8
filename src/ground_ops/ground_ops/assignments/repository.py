from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import AssignmentStatus
from .model import Assignment, NewAssignment


class AssignmentRepository(Protocol):
    """Interfaz del repositorio de asignaciones.

    ``create`` and ``replace`` are the commit points. Implementations must re-check
    the employee's overlapping active assignments and insert inside one serialized
    unit of work, raising ``ConflictError`` when a concurrent write won the race.
    """

    def get_by_id(self, assignment_id: int) -> Optional[Assignment]:
        raise NotImplementedError

    def list_for_employee(
        self,
        employee_id: int,
        statuses: Optional[Iterable[AssignmentStatus]] = None,
    ) -> Sequence[Assignment]:
        raise NotImplementedError

    def list_for_operation(
        self,
        operation_id: int,
        statuses: Optional[Iterable[AssignmentStatus]] = None,
    ) -> Sequence[Assignment]:
        raise NotImplementedError

    def create(self, new: NewAssignment) -> int:
        """Persist ``new`` and return its assignment_id."""

        raise NotImplementedError

    def replace(self, *, original_id: int, replacement: NewAssignment, cancel_note: str) -> int:
        """Cancel ``original_id`` and persist ``replacement`` atomically."""

        raise NotImplementedError
