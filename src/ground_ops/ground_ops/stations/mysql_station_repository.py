from __future__ import annotations

from typing import Optional

from ..core.enums import AssignmentFunction, StationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, load_json_list
from .model import Station
from .repository import StationRepository


class MySQLStationRepository(StationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, station_id: int) -> Optional[Station]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT station_id, name, code, station_type, minimum_staff, maximum_staff,
                       required_certifications, required_functions, is_active
                FROM stations
                WHERE station_id=%s
                """,
                (int(station_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Station(
                station_id=int(r["station_id"]),
                name=r["name"],
                code=r.get("code"),
                station_type=StationType(r["station_type"]),
                minimum_staff=int(r["minimum_staff"]),
                maximum_staff=int(r["maximum_staff"]),
                required_certifications=frozenset(load_json_list(r.get("required_certifications"))),
                # Order matters: positions are handed out round-robin in this order.
                required_functions=tuple(AssignmentFunction(f) for f in load_json_list(r.get("required_functions"))),
                is_active=bool(r.get("is_active", True)),
            )
