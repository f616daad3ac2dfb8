from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Rol del usuario, usado para autorización."""

    EMPLOYEE = "employee"
    SUPERVISOR = "supervisor"
    MANAGER = "manager"
    PRESIDENT = "president"
    ADMIN = "admin"


class EmployeeCategory(str, Enum):
    """Área de trabajo del empleado."""

    BAGGAGE = "baggage"
    FUEL = "fuel"
    RAMP = "ramp"
    CARGO = "cargo"
    CLEANING = "cleaning"
    SECURITY = "security"
    MAINTENANCE = "maintenance"
    OPERATIONS = "operations"
    CUSTOMER_SERVICE = "customer_service"
    CATERING = "catering"
    PUSHBACK = "pushback"


class ShiftType(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"
    DAWN = "dawn"
    SPLIT = "split"
    ROTATING = "rotating"


class StationType(str, Enum):
    TERMINAL = "TERMINAL"
    PLATFORM = "PLATFORM"
    CARGO = "CARGO"
    MAINTENANCE = "MAINTENANCE"
    FUEL = "FUEL"
    SECURITY = "SECURITY"


class OperationType(str, Enum):
    ARRIVAL = "ARRIVAL"
    DEPARTURE = "DEPARTURE"


class OperationStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class FlightType(str, Enum):
    DOMESTIC = "DOMESTIC"
    INTERNATIONAL = "INTERNATIONAL"


class AssignmentStatus(str, Enum):
    """Estado de una asignación persistida."""

    SCHEDULED = "SCHEDULED"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    ABSENT = "ABSENT"
    CANCELLED = "CANCELLED"


class AssignmentFunction(str, Enum):
    """Función (puesto) que cubre un empleado dentro de una operación."""

    SUPERVISOR_EQUIPAJE = "SUPERVISOR_EQUIPAJE"
    OPERADOR_EQUIPAJE = "OPERADOR_EQUIPAJE"
    SUPERVISOR_RAMPA = "SUPERVISOR_RAMPA"
    OPERADOR_RAMPA = "OPERADOR_RAMPA"
    SUPERVISOR_COMBUSTIBLE = "SUPERVISOR_COMBUSTIBLE"
    OPERADOR_COMBUSTIBLE = "OPERADOR_COMBUSTIBLE"
    SUPERVISOR_CARGA = "SUPERVISOR_CARGA"
    OPERADOR_CARGA = "OPERADOR_CARGA"
    SUPERVISOR_LIMPIEZA = "SUPERVISOR_LIMPIEZA"
    OPERADOR_LIMPIEZA = "OPERADOR_LIMPIEZA"
    SUPERVISOR_SEGURIDAD = "SUPERVISOR_SEGURIDAD"
    AGENTE_SEGURIDAD = "AGENTE_SEGURIDAD"
    TECNICO_MANTENIMIENTO = "TECNICO_MANTENIMIENTO"
    COORDINADOR_OPERACIONES = "COORDINADOR_OPERACIONES"
