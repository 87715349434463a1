"""Ports (interfaces) used by the history store facade.

Ports define the minimal contracts for process execution and clipboard
writing so that tests can substitute deterministic fakes for real tools.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, Union

from clipscope.core.models import ProcessResult

StdinPayload = Union[str, bytes]


class ProcessInvokerPort(Protocol):
    """Runs one external command per call."""

    def which(self, command: str) -> Optional[str]:
        ...

    def run(
        self,
        command: str,
        args: Sequence[str] = (),
        stdin: Optional[StdinPayload] = None,
        *,
        timeout: Optional[float] = None,
        capture: bool = True,
    ) -> ProcessResult:
        ...


class ClipboardWriterPort(Protocol):
    """Places content on the active system clipboard."""

    def write(self, content: StdinPayload, content_type: str, mime_type: Optional[str] = None) -> None:
        ...
