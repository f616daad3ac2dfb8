from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee, EmployeeFilter


class EmployeeRepository(Protocol):
    """Interfaz del repositorio de empleados.

    Nota (DIP): los servicios dependen de esta interfaz, no de una BD concreta.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_employees(self, employee_filter: EmployeeFilter) -> Sequence[Employee]:
        """Return employees matching the filter, ordered by employee_id."""

        raise NotImplementedError
