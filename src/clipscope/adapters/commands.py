"""Request/response plumbing between frontends and the history store.

Each method mirrors one frontend command and never raises for expected
failures: typed ``ClipHistoryError`` exceptions become a ``CommandResult``
with an attached message that the UI shows verbatim.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from clipscope.core.errors import ClipHistoryError
from clipscope.core.store import HistoryStore

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandError:
    kind: str
    message: str


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    data: Any = None
    error: Optional[CommandError] = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"ok": self.ok, "data": self.data}
        if self.error is not None:
            payload["error"] = {"kind": self.error.kind, "message": self.error.message}
        return payload


def _call(name: str, operation: Callable[[], Any]) -> CommandResult:
    try:
        return CommandResult(ok=True, data=operation())
    except ClipHistoryError as exc:
        LOGGER.warning("%s failed: %s", name, exc.message)
        return CommandResult(ok=False, error=CommandError(kind=type(exc).__name__, message=exc.message))


class HistoryCommands:
    """Frontend-facing commands backed by a HistoryStore."""

    def __init__(self, store: HistoryStore) -> None:
        self._store = store

    def check_available(self) -> CommandResult:
        return CommandResult(ok=True, data=self._store.is_available())

    def get_history(self) -> CommandResult:
        return _call(
            "get_history",
            lambda: [entry.to_dict() for entry in self._store.list_entries()],
        )

    def search_history(self, query: str) -> CommandResult:
        if not query.strip():
            return self.get_history()
        return _call(
            "search_history",
            lambda: [entry.to_dict() for entry in self._store.search(query)],
        )

    def get_entry_content(self, entry_id: str) -> CommandResult:
        return _call("get_entry_content", lambda: self._store.get_full_content(entry_id))

    def copy_entry(self, entry_id: str) -> CommandResult:
        return _call("copy_entry", lambda: self._store.copy_entry(entry_id))

    def delete_entry(self, entry_id: str) -> CommandResult:
        return _call("delete_entry", lambda: self._store.delete_entry(entry_id))
