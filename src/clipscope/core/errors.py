"""Error taxonomy shared by the core and its adapters.

Every failure that can reach a caller derives from ``ClipHistoryError`` and
carries a human-readable ``message`` that UIs display verbatim.
"""

from __future__ import annotations

from typing import Optional


class ClipHistoryError(Exception):
    """Base class for failures surfaced to callers."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ToolNotFound(ClipHistoryError):
    """An external binary could not be located."""

    def __init__(self, tool: str) -> None:
        super().__init__(f"'{tool}' was not found on PATH. Make sure {tool} is installed.")
        self.tool = tool


class ToolExecutionFailed(ClipHistoryError):
    """An external binary exited with a non-zero status."""

    def __init__(self, tool: str, exit_code: int, stderr: str) -> None:
        detail = stderr.strip() or "no error output"
        super().__init__(f"{tool} command failed (exit {exit_code}): {detail}")
        self.tool = tool
        self.exit_code = exit_code
        self.stderr = stderr


class ToolTimedOut(ClipHistoryError):
    """An external binary did not finish within the bounded wait."""

    def __init__(self, tool: str, timeout: Optional[float]) -> None:
        super().__init__(f"{tool} did not finish within {timeout:g}s" if timeout is not None else f"{tool} timed out")
        self.tool = tool
        self.timeout = timeout


class EntryNotFound(ClipHistoryError):
    """The requested entry id is no longer present in the history store."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(f"Clipboard entry {entry_id!r} no longer exists in history")
        self.entry_id = entry_id


class ClipboardToolUnavailable(ClipHistoryError):
    """No usable clipboard writer exists for the current session."""

    def __init__(self, detail: str = "") -> None:
        message = "No clipboard tool available. Install wl-clipboard (Wayland) or xclip (X11)."
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.detail = detail


class ParseSkip(Exception):
    """A dump line could not be parsed; raised and absorbed inside the parser."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
