from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from ..core.enums import EmployeeCategory, Role, ShiftType


@dataclass(frozen=True)
class Employee:
    """Entidad de dominio: Empleado.

    Nota: snapshot de solo lectura del directorio de usuarios; no contiene acceso a BD.
    """

    employee_id: int
    name: str
    role: Role
    categories: FrozenSet[EmployeeCategory] = field(default_factory=frozenset)
    skills: FrozenSet[str] = field(default_factory=frozenset)
    certifications: FrozenSet[str] = field(default_factory=frozenset)
    available_shifts: FrozenSet[ShiftType] = field(default_factory=frozenset)
    station_id: Optional[int] = None
    is_active: bool = True
    max_daily_hours: Optional[float] = None
    max_weekly_hours: Optional[float] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class EmployeeFilter:
    """Criterios para ``EmployeeRepository.list_employees``."""

    station_id: Optional[int] = None
    category: Optional[EmployeeCategory] = None
    active_only: bool = True
    employee_ids: Optional[FrozenSet[int]] = None


@dataclass(frozen=True)
class Caller:
    """Identidad ya resuelta por la capa de autenticación externa.

    Se pasa explícitamente a cada servicio; nunca se lee de estado global.
    """

    user_id: int
    role: Role
    station_id: Optional[int] = None
