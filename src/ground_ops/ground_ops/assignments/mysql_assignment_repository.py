from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Sequence

import mysql.connector

from ..core.constants import ACTIVE_ASSIGNMENT_STATUSES
from ..core.enums import AssignmentStatus
from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, db_transaction, fetchall, fetchone, in_clause, is_lock_conflict
from .model import Assignment, NewAssignment
from .repository import AssignmentRepository

_COLUMNS = """
    assignment_id, employee_id, operation_id, function, start_time, end_time, cost, status,
    notes, is_replacement, replacement_for
"""


def _to_assignment(r: Dict[str, Any]) -> Assignment:
    return Assignment(
        assignment_id=int(r["assignment_id"]),
        employee_id=int(r["employee_id"]),
        operation_id=int(r["operation_id"]),
        function=r["function"],
        start_time=r["start_time"],
        end_time=r["end_time"],
        cost=float(r["cost"]),
        status=AssignmentStatus(r["status"]),
        notes=r.get("notes"),
        is_replacement=bool(r.get("is_replacement", False)),
        replacement_for=int(r["replacement_for"]) if r.get("replacement_for") is not None else None,
    )


class MySQLAssignmentRepository(AssignmentRepository):
    """MySQL/InnoDB assignments.

    Writes serialize per employee: the transaction locks the employee row with
    ``SELECT ... FOR UPDATE`` before re-running the overlap query, so two
    concurrent inserts for the same employee cannot both pass the check.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, assignment_id: int) -> Optional[Assignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM assignments WHERE assignment_id=%s", (int(assignment_id),))
            r = fetchone(cur)
            return _to_assignment(r) if r else None

    def _list(self, column: str, value: int, statuses: Optional[Iterable[AssignmentStatus]]) -> Sequence[Assignment]:
        clauses = [f"{column}=%s"]
        params: list[object] = [int(value)]
        if statuses is not None:
            placeholders, values = in_clause(sorted(s.value for s in statuses))
            if not values:
                return []
            clauses.append(f"status IN ({placeholders})")
            params.extend(values)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM assignments
                WHERE {' AND '.join(clauses)}
                ORDER BY start_time ASC, assignment_id ASC
                """,
                tuple(params),
            )
            return [_to_assignment(r) for r in fetchall(cur)]

    def list_for_employee(
        self,
        employee_id: int,
        statuses: Optional[Iterable[AssignmentStatus]] = None,
    ) -> Sequence[Assignment]:
        return self._list("employee_id", employee_id, statuses)

    def list_for_operation(
        self,
        operation_id: int,
        statuses: Optional[Iterable[AssignmentStatus]] = None,
    ) -> Sequence[Assignment]:
        return self._list("operation_id", operation_id, statuses)

    @staticmethod
    def _lock_employee(cur, employee_id: int) -> None:
        cur.execute("SELECT employee_id FROM employees WHERE employee_id=%s FOR UPDATE", (int(employee_id),))
        if not fetchone(cur):
            raise NotFoundError(f"Empleado #{employee_id} no encontrado")

    @staticmethod
    def _raise_on_overlap(cur, new: NewAssignment) -> None:
        placeholders, statuses = in_clause(sorted(s.value for s in ACTIVE_ASSIGNMENT_STATUSES))
        cur.execute(
            f"""
            SELECT assignment_id
            FROM assignments
            WHERE employee_id=%s
              AND status IN ({placeholders})
              AND start_time < %s
              AND end_time > %s
            ORDER BY start_time ASC
            LIMIT 1
            """,
            (int(new.employee_id), *statuses, new.end_time, new.start_time),
        )
        r = fetchone(cur)
        if r:
            raise ConflictError(f"Conflicto de horario con asignación #{int(r['assignment_id'])}")

    @staticmethod
    def _insert(cur, new: NewAssignment) -> int:
        cur.execute(
            """
            INSERT INTO assignments(
                employee_id, operation_id, function, start_time, end_time, cost, status,
                notes, is_replacement, replacement_for
            )
            VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
            """,
            (
                int(new.employee_id),
                int(new.operation_id),
                new.function,
                new.start_time,
                new.end_time,
                float(new.cost),
                AssignmentStatus.SCHEDULED.value,
                new.notes,
                1 if new.is_replacement else 0,
                new.replacement_for,
            ),
        )
        return int(cur.lastrowid)

    def create(self, new: NewAssignment) -> int:
        try:
            with db_transaction(self._conn_factory) as (_, cur):
                self._lock_employee(cur, new.employee_id)
                self._raise_on_overlap(cur, new)
                return self._insert(cur, new)
        except mysql.connector.Error as e:
            if is_lock_conflict(e):
                raise ConflictError("Conflicto de horario (concurrente)") from e
            raise

    def replace(self, *, original_id: int, replacement: NewAssignment, cancel_note: str) -> int:
        try:
            with db_transaction(self._conn_factory) as (_, cur):
                self._lock_employee(cur, replacement.employee_id)
                cur.execute(
                    "SELECT status FROM assignments WHERE assignment_id=%s FOR UPDATE",
                    (int(original_id),),
                )
                r = fetchone(cur)
                if not r:
                    raise NotFoundError(f"Asignación #{original_id} no encontrada")
                if AssignmentStatus(r["status"]) not in ACTIVE_ASSIGNMENT_STATUSES:
                    raise ConflictError(f"La asignación #{original_id} cambió de estado")

                self._raise_on_overlap(cur, replacement)
                cur.execute(
                    "UPDATE assignments SET status=%s, notes=%s WHERE assignment_id=%s",
                    (AssignmentStatus.CANCELLED.value, cancel_note, int(original_id)),
                )
                return self._insert(cur, replacement)
        except mysql.connector.Error as e:
            if is_lock_conflict(e):
                raise ConflictError("Conflicto de horario (concurrente)") from e
            raise
