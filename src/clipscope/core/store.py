"""History store facade.

This module is integration-agnostic. It only relies on ports for process
execution and clipboard writing, so tests can drive it with fakes and the
frontends never touch subprocess details.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from clipscope.core.config import StoreConfig
from clipscope.core.errors import EntryNotFound, ToolExecutionFailed
from clipscope.core.models import Entry, ProcessResult
from clipscope.core.parser import parse_history
from clipscope.core.ports import ClipboardWriterPort, ProcessInvokerPort
from clipscope.core.search import rank_entries

LOGGER = logging.getLogger(__name__)


class HistoryStore:
    """Orchestrates listing, search, fetch, copy, and delete against cliphist.

    No state is kept between calls: every operation re-reads the store, so
    ids returned by one listing are only trusted after re-resolving them.
    """

    def __init__(
        self,
        invoker: ProcessInvokerPort,
        clipboard: ClipboardWriterPort,
        config: Optional[StoreConfig] = None,
    ) -> None:
        self._invoker = invoker
        self._clipboard = clipboard
        self._config = config or StoreConfig()

    @property
    def binary(self) -> str:
        return self._config.binary

    def is_available(self) -> bool:
        """Return True when the store binary resolves; never raises."""

        try:
            return self._invoker.which(self.binary) is not None
        except Exception:
            LOGGER.debug("Availability probe for %s failed", self.binary, exc_info=True)
            return False

    def list_entries(self) -> List[Entry]:
        """Return the current history, newest first."""

        result = self._run("list")
        entries = parse_history(result.stdout_text, self._config.preview_chars)
        LOGGER.debug("Listed %s history entries", len(entries))
        return entries

    def search(self, query: str) -> List[Entry]:
        """Return entries matching ``query``, best matches first."""

        entries = self.list_entries()
        ranked = rank_entries(entries, query)
        LOGGER.debug("Search matched %s of %s entries", len(ranked), len(entries))
        return ranked

    def get_full_content(self, entry_id: str) -> str:
        """Return the untruncated content of an entry as text."""

        entry = self._resolve(entry_id)
        return self._decode(entry).decode("utf-8", errors="replace")

    def copy_entry(self, entry_id: str) -> None:
        """Fetch an entry's full payload and place it on the system clipboard."""

        entry = self._resolve(entry_id)
        # Raw bytes go straight to the writer so images are not re-encoded.
        payload = self._decode(entry)
        self._clipboard.write(payload, entry.content_type, entry.mime_type)
        LOGGER.info("Copied entry %s (%s, %s bytes)", entry.id, entry.content_type, len(payload))

    def delete_entry(self, entry_id: str) -> None:
        """Remove an entry from the store."""

        entry = self._resolve(entry_id)
        # cliphist delete reads whole list lines from stdin and keys off the id prefix.
        self._run("delete", stdin=entry.raw_line + "\n")
        LOGGER.info("Deleted entry %s", entry.id)

    def _resolve(self, entry_id: str) -> Entry:
        """Find ``entry_id`` in a fresh listing or raise EntryNotFound."""

        wanted = str(entry_id).strip()
        if wanted:
            for entry in self.list_entries():
                if entry.id == wanted:
                    return entry
        raise EntryNotFound(str(entry_id))

    def _decode(self, entry: Entry) -> bytes:
        try:
            return self._run("decode", entry.id).stdout
        except ToolExecutionFailed as exc:
            # The entry vanished between listing and decoding.
            if "not found" in exc.stderr.lower():
                raise EntryNotFound(entry.id) from exc
            raise

    def _run(self, *args: str, stdin: Optional[str] = None) -> ProcessResult:
        return self._invoker.run(
            self.binary,
            list(args),
            stdin,
            timeout=self._config.timeout_seconds,
        )
