from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple

from ..core.enums import AssignmentFunction, StationType
from ..operations.model import Operation
from ..stations.model import Station
from ..users.model import Employee
from .availability import AvailabilityResult
from .policy import ScoringWeights
from .requirements import StaffingRequirement
from .time_window import TimeWindow

logger = logging.getLogger(__name__)

# Positions staffed at a station when it does not list its own required functions.
DEFAULT_FUNCTIONS_BY_STATION_TYPE = {
    StationType.TERMINAL: (
        AssignmentFunction.OPERADOR_EQUIPAJE,
        AssignmentFunction.SUPERVISOR_EQUIPAJE,
        AssignmentFunction.COORDINADOR_OPERACIONES,
    ),
    StationType.PLATFORM: (AssignmentFunction.OPERADOR_RAMPA, AssignmentFunction.SUPERVISOR_RAMPA),
    StationType.CARGO: (AssignmentFunction.OPERADOR_CARGA, AssignmentFunction.SUPERVISOR_CARGA),
    StationType.MAINTENANCE: (AssignmentFunction.TECNICO_MANTENIMIENTO,),
    StationType.FUEL: (AssignmentFunction.OPERADOR_COMBUSTIBLE, AssignmentFunction.SUPERVISOR_COMBUSTIBLE),
    StationType.SECURITY: (AssignmentFunction.AGENTE_SEGURIDAD, AssignmentFunction.SUPERVISOR_SEGURIDAD),
}


@dataclass(frozen=True)
class RecommendedAssignment:
    employee: Employee
    score: float
    position: AssignmentFunction


@dataclass(frozen=True)
class StaffAvailabilitySummary:
    available: int
    required: int
    shortage: int


@dataclass(frozen=True)
class StaffingPlan:
    """Advisory staffing recommendation for one operation. Never persisted."""

    operation_id: int
    window: TimeWindow
    minimum_staff: int
    recommended_staff: int
    recommended_assignments: Tuple[RecommendedAssignment, ...]
    staff_availability: StaffAvailabilitySummary
    minimum_staff_met: bool
    shortage: int
    suggestions: Tuple[str, ...]
    skills_needed: Tuple[str, ...] = ()
    widened_pool: bool = False


def required_functions(station: Station) -> Tuple[AssignmentFunction, ...]:
    return tuple(station.required_functions) or DEFAULT_FUNCTIONS_BY_STATION_TYPE[station.station_type]


class StaffingOptimizer:
    """Rank available employees and build a ``StaffingPlan``."""

    def __init__(self, weights: ScoringWeights):
        self._weights = weights

    def score(self, employee: Employee, station: Station, active_assignment_count: int) -> float:
        w = self._weights
        skill_matches = len(set(employee.skills) & set(station.required_certifications))
        return (
            w.skill_match_weight * skill_matches
            + w.certification_bonus * len(employee.certifications)
            - w.workload_penalty * active_assignment_count
        )

    def optimize(
        self,
        *,
        operation: Operation,
        station: Station,
        requirement: StaffingRequirement,
        availability: AvailabilityResult,
        active_assignment_counts: Mapping[int, int],
        filled_functions: Optional[Mapping[str, int]] = None,
        skills_needed: Sequence[str] = (),
        widened_pool: bool = False,
    ) -> StaffingPlan:
        scored = [
            (self.score(e, station, active_assignment_counts.get(e.employee_id, 0)), e)
            for e in availability.available
        ]
        # Highest score first; ties broken by employee_id for deterministic output.
        scored.sort(key=lambda pair: (-pair[0], pair[1].employee_id))

        chosen = scored[: requirement.recommended]
        positions = self._assign_positions(len(chosen), required_functions(station), filled_functions or {})
        recommended = tuple(
            RecommendedAssignment(employee=e, score=score, position=position)
            for (score, e), position in zip(chosen, positions)
        )

        available_count = len(availability.available)
        shortage = max(0, requirement.minimum - available_count)
        plan = StaffingPlan(
            operation_id=operation.operation_id,
            window=availability.window,
            minimum_staff=requirement.minimum,
            recommended_staff=requirement.recommended,
            recommended_assignments=recommended,
            staff_availability=StaffAvailabilitySummary(
                available=available_count,
                required=requirement.minimum,
                shortage=shortage,
            ),
            minimum_staff_met=available_count >= requirement.minimum,
            shortage=shortage,
            suggestions=tuple(self._suggestions(requirement, available_count, shortage, widened_pool)),
            skills_needed=tuple(skills_needed),
            widened_pool=widened_pool,
        )
        logger.info(
            "staffing plan operation=%s minimum=%d recommended=%d available=%d shortage=%d",
            operation.operation_id,
            plan.minimum_staff,
            plan.recommended_staff,
            available_count,
            shortage,
        )
        return plan

    @staticmethod
    def _assign_positions(
        count: int,
        functions: Sequence[AssignmentFunction],
        filled: Mapping[str, int],
    ) -> list[AssignmentFunction]:
        """Round-robin over functions, least-filled first, station order on ties."""
        counts = {f: int(filled.get(f.value, 0)) for f in functions}
        order = {f: i for i, f in enumerate(functions)}
        out: list[AssignmentFunction] = []
        for _ in range(count):
            pick = min(functions, key=lambda f: (counts[f], order[f]))
            counts[pick] += 1
            out.append(pick)
        return out

    @staticmethod
    def _suggestions(
        requirement: StaffingRequirement,
        available_count: int,
        shortage: int,
        widened_pool: bool,
    ) -> list[str]:
        out: list[str] = []
        if shortage > 0:
            out.append(f"Faltan {shortage} empleados certificados para esta estación")
        if widened_pool:
            out.append("Se incluyó personal de otras estaciones porque la estación no alcanza el mínimo")
        if shortage == 0 and available_count < requirement.recommended:
            missing = requirement.recommended - available_count
            out.append(f"Se recomienda conseguir {missing} empleados más para cubrir el personal recomendado")
        if available_count > requirement.recommended:
            extra = available_count - requirement.recommended
            out.append(f"Hay {extra} empleados disponibles adicionales como reserva")
        return out
