from __future__ import annotations

from typing import Optional, Protocol

from .model import Station


class StationRepository(Protocol):
    def get_by_id(self, station_id: int) -> Optional[Station]:
        raise NotImplementedError
