from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_datetime
from ..common.validators import require_int_list, require_positive_int
from ..common.web import current_caller, json_body
from ..container import Container
from ..core.enums import EmployeeCategory
from ..core.exceptions import ValidationError
from ..users.model import Employee
from .availability import EmployeeAvailability
from .optimizer import StaffingPlan
from .time_window import TimeWindow


def category_arg() -> Optional[EmployeeCategory]:
    raw = (request.args.get("category") or "").strip().lower()
    if not raw:
        return None
    try:
        return EmployeeCategory(raw)
    except ValueError:
        raise ValidationError(f"Categoría inválida: {raw}")


def employee_json(e: Employee) -> dict:
    return {
        "id": e.employee_id,
        "name": e.name,
        "email": e.email,
        "role": e.role.value,
        "categories": sorted(c.value for c in e.categories),
        "skills": sorted(e.skills),
        "certifications": sorted(e.certifications),
        "stationId": e.station_id,
        "isActive": e.is_active,
    }


def window_json(w: TimeWindow) -> dict:
    return {"startTime": w.start.isoformat(), "endTime": w.end.isoformat()}


def availability_json(a: EmployeeAvailability) -> dict:
    return {
        "isAvailable": a.is_available,
        "reasons": list(a.reasons),
        "conflictingAssignmentIds": list(a.conflicting_assignment_ids),
    }


def plan_json(plan: StaffingPlan) -> dict:
    return {
        "operationId": plan.operation_id,
        "window": window_json(plan.window),
        "minimumStaff": plan.minimum_staff,
        "recommendedStaff": plan.recommended_staff,
        "minimumStaffMet": plan.minimum_staff_met,
        "shortage": plan.shortage,
        "staffAvailability": {
            "available": plan.staff_availability.available,
            "required": plan.staff_availability.required,
            "shortage": plan.staff_availability.shortage,
        },
        "recommendedAssignments": [
            {
                **employee_json(r.employee),
                "userId": r.employee.employee_id,
                "recommendationScore": r.score,
                "recommendedPosition": r.position.value,
            }
            for r in plan.recommended_assignments
        ],
        "optimizationSuggestions": list(plan.suggestions),
        "skillsNeeded": list(plan.skills_needed),
        "widenedPool": plan.widened_pool,
    }


def register(app: Flask, container: Container) -> None:
    service = container.scheduling_service

    @app.route("/scheduling/available-staff/<int:operation_id>", methods=["GET"], endpoint="scheduling_available_staff")
    def available_staff(operation_id: int):
        staff = service.available_staff(caller=current_caller(), operation_id=operation_id, category=category_arg())
        rows = [{**employee_json(e), "isAvailable": True, "reasons": []} for e in staff.result.available]
        rows += [{**employee_json(u.employee), **availability_json(u)} for u in staff.result.unavailable]
        return jsonify(rows)

    @app.route("/scheduling/validate-assignment", methods=["POST"], endpoint="scheduling_validate_assignment")
    def validate_assignment():
        caller = current_caller()
        body = json_body()
        result = service.validate_assignment(
            caller=caller,
            employee_id=require_positive_int(body.get("employeeId", body.get("userId")), "employeeId"),
            operation_id=require_positive_int(body.get("operationId"), "operationId"),
            start_time=parse_iso_datetime(body.get("startTime"), "startTime"),
            end_time=parse_iso_datetime(body.get("endTime"), "endTime"),
        )
        return jsonify({"valid": result.valid, "reasons": list(result.reasons), "warnings": list(result.warnings)})

    @app.route("/scheduling/optimize-staffing/<int:operation_id>", methods=["GET"], endpoint="scheduling_optimize_staffing")
    def optimize_staffing(operation_id: int):
        plan = service.optimize_staffing(caller=current_caller(), operation_id=operation_id, category=category_arg())
        return jsonify(plan_json(plan))

    @app.route("/scheduling/check-availability", methods=["POST"], endpoint="scheduling_check_availability")
    def check_availability():
        caller = current_caller()
        body = json_body()
        reports = service.check_availability(
            caller=caller,
            user_ids=require_int_list(body.get("userIds"), "userIds"),
            start_time=parse_iso_datetime(body.get("startTime"), "startTime"),
            end_time=parse_iso_datetime(body.get("endTime"), "endTime"),
        )
        return jsonify(
            {
                str(r.availability.employee.employee_id): {
                    **availability_json(r.availability),
                    "warnings": list(r.warnings),
                }
                for r in reports
            }
        )
