from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

from ..core.enums import AssignmentFunction, StationType


@dataclass(frozen=True)
class Station:
    """Entidad de dominio: Estación (terminal, plataforma, carga...)."""

    station_id: int
    name: str
    minimum_staff: int
    maximum_staff: int
    code: Optional[str] = None
    station_type: StationType = StationType.TERMINAL
    required_certifications: FrozenSet[str] = field(default_factory=frozenset)
    required_functions: Tuple[AssignmentFunction, ...] = ()
    is_active: bool = True
