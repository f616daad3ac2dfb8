from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_datetime
from ..common.validators import require_positive_int
from ..common.web import current_caller, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.assignment_service

    @app.route("/assignments", methods=["POST"], endpoint="assignments_create")
    def create_assignment():
        caller = current_caller()
        body = json_body()
        assignment_id = service.create(
            caller=caller,
            employee_id=require_positive_int(body.get("employeeId", body.get("userId")), "employeeId"),
            operation_id=require_positive_int(body.get("operationId"), "operationId"),
            start_time=parse_iso_datetime(body.get("startTime"), "startTime"),
            end_time=parse_iso_datetime(body.get("endTime"), "endTime"),
            function=body.get("function") or "",
            cost=body.get("cost"),
            notes=body.get("notes"),
        )
        return jsonify({"id": assignment_id}), 201

    @app.route(
        "/assignments/<int:assignment_id>/replacement",
        methods=["POST"],
        endpoint="assignments_create_replacement",
    )
    def create_replacement(assignment_id: int):
        caller = current_caller()
        body = json_body()
        new_id = service.create_replacement(
            caller=caller,
            original_assignment_id=assignment_id,
            replacement_employee_id=require_positive_int(body.get("replacementUserId"), "replacementUserId"),
            reason=body.get("reason") or "",
        )
        return jsonify({"id": new_id, "replaces": assignment_id}), 201
