from __future__ import annotations

from typing import Optional

from ..core.enums import FlightType, OperationStatus, OperationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Operation
from .repository import OperationRepository


class MySQLOperationRepository(OperationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, operation_id: int) -> Optional[Operation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT operation_id, name, flight_number, origin, destination, scheduled_time,
                       passenger_count, operation_type, status, flight_type,
                       estimated_duration_hours, station_id
                FROM operations
                WHERE operation_id=%s
                """,
                (int(operation_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            duration = r.get("estimated_duration_hours")
            return Operation(
                operation_id=int(r["operation_id"]),
                name=r.get("name"),
                flight_number=r["flight_number"],
                origin=r.get("origin"),
                destination=r.get("destination"),
                scheduled_time=r["scheduled_time"],
                passenger_count=int(r["passenger_count"]),
                operation_type=OperationType(r["operation_type"]),
                status=OperationStatus(r["status"]),
                flight_type=FlightType(r["flight_type"]),
                estimated_duration_hours=float(duration) if duration is not None else None,
                station_id=int(r["station_id"]) if r.get("station_id") is not None else None,
            )
