"""State container for the history view and request sequencing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class HistoryViewState:
    """Entries currently on screen plus the newest request issued.

    Workers may finish out of order; a response is applied only when its
    sequence number is still the latest one.
    """

    entries: list[dict[str, Any]] = field(default_factory=list)
    query: str = ""
    latest_request: int = 0

    def next_request(self) -> int:
        self.latest_request += 1
        return self.latest_request

    def is_current(self, request_id: int) -> bool:
        return request_id == self.latest_request
