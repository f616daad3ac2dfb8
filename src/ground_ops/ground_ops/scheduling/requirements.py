from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..core.constants import LARGE_AIRCRAFT_PASSENGERS
from ..core.enums import FlightType, OperationType
from ..core.exceptions import ConfigurationError, MissingStationError, ValidationError
from ..operations.model import Operation
from ..stations.model import Station


@dataclass(frozen=True)
class StaffingRequirement:
    minimum: int
    recommended: int


class StaffingRequirementCalculator:
    """Derive minimum and recommended headcount for an operation.

    ``minimum`` is the station's configured floor; ``recommended`` scales with
    passengers (one person per ``staffing_ratio`` passengers) and is clamped to
    ``[minimum, station.maximum_staff]``.
    """

    def __init__(self, staffing_ratio: float):
        if not staffing_ratio or staffing_ratio <= 0:
            raise ConfigurationError("STAFFING_RATIO debe ser mayor que 0")
        self._ratio = float(staffing_ratio)

    def requirement(self, operation: Operation, station: Optional[Station]) -> StaffingRequirement:
        if station is None:
            raise MissingStationError(f"La operación #{operation.operation_id} no tiene estación asignada")
        if station.minimum_staff < 0 or station.minimum_staff > station.maximum_staff:
            raise ValidationError(
                f"La estación {station.name} tiene límites de personal inválidos "
                f"(mínimo {station.minimum_staff}, máximo {station.maximum_staff})"
            )
        if operation.passenger_count < 0:
            raise ValidationError("El número de pasajeros no puede ser negativo")

        minimum = int(station.minimum_staff)
        by_passengers = math.ceil(operation.passenger_count / self._ratio)
        recommended = min(max(minimum, by_passengers), int(station.maximum_staff))
        return StaffingRequirement(minimum=minimum, recommended=recommended)


def skills_needed(operation: Operation) -> list[str]:
    """Skills the operation calls for, from its flight type, size and direction."""
    skills: list[str] = []

    if operation.flight_type == FlightType.INTERNATIONAL:
        skills += ["customs_handling", "international_procedures"]

    if operation.passenger_count > LARGE_AIRCRAFT_PASSENGERS:
        skills += ["large_aircraft_handling", "crowd_management"]

    by_type = {
        OperationType.DEPARTURE: ["departure_procedures", "baggage_loading"],
        OperationType.ARRIVAL: ["arrival_procedures", "baggage_unloading"],
    }
    skills += by_type[operation.operation_type]
    return skills
