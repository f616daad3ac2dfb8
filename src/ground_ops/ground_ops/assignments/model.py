from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AssignmentStatus
from ..scheduling.time_window import TimeWindow


@dataclass(frozen=True)
class Assignment:
    """Entidad de dominio: asignación de un empleado a una operación."""

    assignment_id: int
    employee_id: int
    operation_id: int
    function: str
    start_time: datetime
    end_time: datetime
    cost: float
    status: AssignmentStatus = AssignmentStatus.SCHEDULED
    notes: Optional[str] = None
    is_replacement: bool = False
    replacement_for: Optional[int] = None

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(self.start_time, self.end_time)


@dataclass(frozen=True)
class NewAssignment:
    """Datos de una asignación aún no persistida."""

    employee_id: int
    operation_id: int
    function: str
    start_time: datetime
    end_time: datetime
    cost: float
    notes: Optional[str] = None
    is_replacement: bool = False
    replacement_for: Optional[int] = None

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(self.start_time, self.end_time)
