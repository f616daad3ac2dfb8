from __future__ import annotations

from typing import Any

from flask import request, session

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..users.model import Caller


def current_caller() -> Caller:
    """Build the caller from the session written by the external auth layer."""

    if "user_id" not in session:
        raise AuthenticationError("Debe iniciar sesión")
    try:
        role = Role(session.get("role"))
    except ValueError:
        raise AuthenticationError("Rol de sesión inválido")

    station_id = session.get("station_id")
    return Caller(
        user_id=int(session["user_id"]),
        role=role,
        station_id=int(station_id) if station_id is not None else None,
    )


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("El cuerpo de la petición debe ser un objeto JSON")
    return data
