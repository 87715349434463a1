"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to subprocess or UI specific types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

CONTENT_TEXT = "text"
CONTENT_IMAGE = "image"
CONTENT_BINARY = "binary"


@dataclass(frozen=True)
class Entry:
    """One clipboard history record as listed by the store."""

    id: str
    preview: str
    content_type: str = CONTENT_TEXT
    mime_type: Optional[str] = None
    # Source line from the dump; only the store facade uses it to address deletes.
    raw_line: str = field(default="", repr=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Serializable shape handed to UI callers."""

        return {
            "id": self.id,
            "preview": self.preview,
            "content_type": self.content_type,
            "mime_type": self.mime_type,
        }


@dataclass(frozen=True)
class ProcessResult:
    """Captured outcome of a single external command."""

    stdout: bytes
    stderr: bytes
    exit_code: int

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")
