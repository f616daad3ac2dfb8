from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import EmployeeCategory, Role, ShiftType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, load_json_list
from .model import Employee, EmployeeFilter
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, name, email, role, categories, skills, certifications, available_shifts,
    station_id, is_active, max_daily_hours, max_weekly_hours
"""


def _optional_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def _to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        name=r["name"],
        email=r.get("email"),
        role=Role(r["role"]),
        categories=frozenset(EmployeeCategory(c) for c in load_json_list(r.get("categories"))),
        skills=frozenset(load_json_list(r.get("skills"))),
        certifications=frozenset(load_json_list(r.get("certifications"))),
        available_shifts=frozenset(ShiftType(s) for s in load_json_list(r.get("available_shifts"))),
        station_id=int(r["station_id"]) if r.get("station_id") is not None else None,
        is_active=bool(r.get("is_active", True)),
        max_daily_hours=_optional_float(r.get("max_daily_hours")),
        max_weekly_hours=_optional_float(r.get("max_weekly_hours")),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_employees(self, employee_filter: EmployeeFilter) -> Sequence[Employee]:
        clauses: list[str] = []
        params: list[object] = []
        if employee_filter.active_only:
            clauses.append("is_active=1")
        if employee_filter.station_id is not None:
            clauses.append("station_id=%s")
            params.append(int(employee_filter.station_id))
        if employee_filter.category is not None:
            clauses.append("JSON_CONTAINS(categories, JSON_QUOTE(%s))")
            params.append(employee_filter.category.value)
        if employee_filter.employee_ids is not None:
            if not employee_filter.employee_ids:
                return []
            placeholders, ids = in_clause(sorted(employee_filter.employee_ids))
            clauses.append(f"employee_id IN ({placeholders})")
            params.extend(ids)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees {where} ORDER BY employee_id ASC", tuple(params))
            return [_to_employee(r) for r in fetchall(cur)]
