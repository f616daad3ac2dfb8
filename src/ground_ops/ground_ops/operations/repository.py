from __future__ import annotations

from typing import Optional, Protocol

from .model import Operation


class OperationRepository(Protocol):
    def get_by_id(self, operation_id: int) -> Optional[Operation]:
        raise NotImplementedError
