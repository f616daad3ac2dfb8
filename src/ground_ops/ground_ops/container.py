from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .assignments.mysql_assignment_repository import MySQLAssignmentRepository
from .assignments.repository import AssignmentRepository
from .assignments.service import AssignmentService
from .database.connection import DBConfig, DatabaseConnection
from .operations.mysql_operation_repository import MySQLOperationRepository
from .operations.repository import OperationRepository
from .scheduling.policy import StaffingPolicy
from .scheduling.service import SchedulingService
from .stations.mysql_station_repository import MySQLStationRepository
from .stations.repository import StationRepository
from .users.mysql_employee_repository import MySQLEmployeeRepository
from .users.repository import EmployeeRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    stations_repo: StationRepository
    operations_repo: OperationRepository
    assignments_repo: AssignmentRepository

    policy: StaffingPolicy
    scheduling_service: SchedulingService
    assignment_service: AssignmentService


def wire(
    *,
    employees_repo: EmployeeRepository,
    stations_repo: StationRepository,
    operations_repo: OperationRepository,
    assignments_repo: AssignmentRepository,
    policy: StaffingPolicy,
    conn: Optional[DatabaseConnection] = None,
    clock=None,
) -> Container:
    """Build the services on top of any repository implementation."""

    scheduling_service = SchedulingService(
        employees_repo,
        stations_repo,
        operations_repo,
        assignments_repo,
        policy=policy,
    )
    assignment_service = AssignmentService(assignments_repo, scheduling_service, clock=clock)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        stations_repo=stations_repo,
        operations_repo=operations_repo,
        assignments_repo=assignments_repo,
        policy=policy,
        scheduling_service=scheduling_service,
        assignment_service=assignment_service,
    )


def build_container(*, db_config: dict, policy: StaffingPolicy) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection(config)

    return wire(
        employees_repo=MySQLEmployeeRepository(conn),
        stations_repo=MySQLStationRepository(conn),
        operations_repo=MySQLOperationRepository(conn),
        assignments_repo=MySQLAssignmentRepository(conn),
        policy=policy,
        conn=conn,
    )
