from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import FlightType, OperationStatus, OperationType


@dataclass(frozen=True)
class Operation:
    """Entidad de dominio: Operación (llegada o salida de un vuelo)."""

    operation_id: int
    flight_number: str
    scheduled_time: datetime
    operation_type: OperationType
    passenger_count: int
    station_id: Optional[int]
    status: OperationStatus = OperationStatus.SCHEDULED
    flight_type: FlightType = FlightType.DOMESTIC
    estimated_duration_hours: Optional[float] = None
    name: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
