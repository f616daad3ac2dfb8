"""Constants shared by the scheduling core.

Note: numeric staffing policy (ratio, weights, default duration) is configuration,
not a constant; see ``scheduling/policy.py``.
"""

from .enums import AssignmentStatus, OperationStatus

# Statuses that occupy the employee's time window.
ACTIVE_ASSIGNMENT_STATUSES = frozenset(
    {
        AssignmentStatus.SCHEDULED,
        AssignmentStatus.CONFIRMED,
        AssignmentStatus.IN_PROGRESS,
    }
)

# Statuses whose hours count toward daily/weekly limits.
WORKED_ASSIGNMENT_STATUSES = ACTIVE_ASSIGNMENT_STATUSES | {AssignmentStatus.COMPLETED}

INACTIVE_REASON = "inactive"
CONCURRENT_CONFLICT_REASON = "Conflicto de horario (concurrente)"

LARGE_AIRCRAFT_PASSENGERS = 200

# Operations in these statuses take no new assignments.
CLOSED_OPERATION_STATUSES = frozenset({OperationStatus.COMPLETED, OperationStatus.CANCELLED})
