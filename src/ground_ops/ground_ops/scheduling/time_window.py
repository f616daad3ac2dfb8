from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..common.datetime_utils import hours_between
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class TimeWindow:
    """Half-open interval ``[start, end)``.

    Construction does not enforce ``start < end``; the assignment validator reports
    malformed windows as a reason instead. Use ``TimeWindow.of`` where a malformed
    window must fail immediately.
    """

    start: datetime
    end: datetime

    @classmethod
    def of(cls, start: datetime, end: datetime) -> "TimeWindow":
        window = cls(start, end)
        if not window.is_well_formed:
            raise ValidationError("La hora de inicio debe ser anterior a la hora de fin")
        return window

    @classmethod
    def starting_at(cls, start: datetime, *, hours: float) -> "TimeWindow":
        return cls.of(start, start + timedelta(hours=hours))

    @property
    def is_well_formed(self) -> bool:
        return self.start < self.end

    @property
    def hours(self) -> float:
        return max(hours_between(self.start, self.end), 0.0)


def overlaps(a: TimeWindow, b: TimeWindow) -> bool:
    """True iff the two half-open windows share at least one instant.

    Zero-length and inverted windows never overlap anything, themselves included.
    """
    if not a.is_well_formed or not b.is_well_formed:
        return False
    return a.start < b.end and b.start < a.end
