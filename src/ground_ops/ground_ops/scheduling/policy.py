from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from ..core.exceptions import ConfigurationError


@dataclass(frozen=True)
class ScoringWeights:
    skill_match_weight: float
    certification_bonus: float
    workload_penalty: float


@dataclass(frozen=True)
class StaffingPolicy:
    """Staffing configuration injected into the scheduling core.

    Every value is required; a missing or invalid value fails fast with
    ``ConfigurationError`` instead of falling back to a guessed default.
    """

    staffing_ratio: float
    weights: ScoringWeights
    default_operation_hours: float

    def __post_init__(self) -> None:
        _require_positive("STAFFING_RATIO", self.staffing_ratio)
        _require_positive("DEFAULT_OPERATION_HOURS", self.default_operation_hours)
        _require_non_negative("SKILL_MATCH_WEIGHT", self.weights.skill_match_weight)
        _require_non_negative("CERTIFICATION_BONUS", self.weights.certification_bonus)
        _require_non_negative("WORKLOAD_PENALTY", self.weights.workload_penalty)

    @classmethod
    def from_settings(cls, settings: Any) -> "StaffingPolicy":
        """Build the policy from a settings module (see ``config/``)."""

        return cls(
            staffing_ratio=_read_number(settings, "STAFFING_RATIO"),
            weights=ScoringWeights(
                skill_match_weight=_read_number(settings, "SKILL_MATCH_WEIGHT"),
                certification_bonus=_read_number(settings, "CERTIFICATION_BONUS"),
                workload_penalty=_read_number(settings, "WORKLOAD_PENALTY"),
            ),
            default_operation_hours=_read_number(settings, "DEFAULT_OPERATION_HOURS"),
        )


def _read_number(settings: Any, name: str) -> float:
    raw = getattr(settings, name, None)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ConfigurationError(f"Falta la configuración {name}")
    if isinstance(raw, bool):
        raise ConfigurationError(f"Configuración {name} inválida: {raw!r}")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Configuración {name} inválida: {raw!r}")
    if not math.isfinite(value):
        raise ConfigurationError(f"Configuración {name} inválida: {raw!r}")
    return value


def _require_positive(name: str, value: float) -> None:
    if not isinstance(value, (int, float)) or isinstance(value, bool) or not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"Configuración {name} debe ser mayor que 0")


def _require_non_negative(name: str, value: float) -> None:
    if not isinstance(value, (int, float)) or isinstance(value, bool) or not math.isfinite(value) or value < 0:
        raise ConfigurationError(f"Configuración {name} no puede ser negativa")
