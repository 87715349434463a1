from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

import pytest

from clipscope.adapters.clipboard_writer import ClipboardWriter
from clipscope.core.config import ClipboardConfig
from clipscope.core.errors import ToolExecutionFailed, ToolNotFound, ToolTimedOut
from clipscope.core.models import ProcessResult
from clipscope.core.store import HistoryStore


@dataclass
class Call:
    command: str
    args: list[str]
    stdin: "str | bytes | None"
    timeout: Optional[float]
    capture: bool


@dataclass
class FakeRecord:
    entry_id: str
    listed: str
    payload: bytes


class FakeInvoker:
    """In-memory stand-in for cliphist and the clipboard tools."""

    def __init__(self, tools: Iterable[str] = ("cliphist",)) -> None:
        self.tools = set(tools)
        self.store_binaries = {"cliphist"}
        self.records: list[FakeRecord] = []
        self.calls: list[Call] = []
        self.which_calls: list[str] = []
        self.raw_list: Optional[str] = None
        self.list_error: Optional[Exception] = None
        self.vanish_on_decode: set[str] = set()
        self.failing_tools: set[str] = set()
        self.hanging_tools: set[str] = set()

    def add(self, entry_id: str, listed: str, payload: "bytes | None" = None) -> None:
        self.records.append(
            FakeRecord(entry_id, listed, payload if payload is not None else listed.encode("utf-8"))
        )

    def which(self, command: str) -> Optional[str]:
        self.which_calls.append(command)
        return f"/usr/bin/{command}" if command in self.tools else None

    def run(
        self,
        command: str,
        args: Sequence[str] = (),
        stdin: "str | bytes | None" = None,
        *,
        timeout: Optional[float] = None,
        capture: bool = True,
    ) -> ProcessResult:
        self.calls.append(Call(command, list(args), stdin, timeout, capture))
        if command not in self.tools:
            raise ToolNotFound(command)
        if command in self.failing_tools:
            raise ToolExecutionFailed(command, 1, "cannot open display")
        if command in self.hanging_tools:
            raise ToolTimedOut(command, timeout)
        if command in self.store_binaries:
            return self._cliphist(list(args), stdin)
        return ProcessResult(stdout=b"", stderr=b"", exit_code=0)

    def commands_run(self, command: str) -> list[Call]:
        return [call for call in self.calls if call.command == command]

    def _cliphist(self, args: list[str], stdin: "str | bytes | None") -> ProcessResult:
        action = args[0]
        if action == "list":
            if self.list_error is not None:
                raise self.list_error
            if self.raw_list is not None:
                dump = self.raw_list
            else:
                dump = "".join(f"{record.entry_id}\t{record.listed}\n" for record in self.records)
            return ProcessResult(stdout=dump.encode("utf-8"), stderr=b"", exit_code=0)
        if action == "decode":
            entry_id = args[1]
            for record in self.records:
                if record.entry_id == entry_id and entry_id not in self.vanish_on_decode:
                    return ProcessResult(stdout=record.payload, stderr=b"", exit_code=0)
            raise ToolExecutionFailed("cliphist", 1, "error: id not found\n")
        if action == "delete":
            text = stdin.decode("utf-8") if isinstance(stdin, bytes) else (stdin or "")
            doomed = {line.split("\t", 1)[0] for line in text.split("\n") if line}
            self.records = [record for record in self.records if record.entry_id not in doomed]
            return ProcessResult(stdout=b"", stderr=b"", exit_code=0)
        raise ToolExecutionFailed("cliphist", 1, f"unknown command {action}")


@dataclass
class FakeClipboard:
    writes: list[tuple["str | bytes", str, Optional[str]]] = field(default_factory=list)

    def write(self, content: "str | bytes", content_type: str, mime_type: Optional[str] = None) -> None:
        self.writes.append((content, content_type, mime_type))


@pytest.fixture
def invoker() -> FakeInvoker:
    fake = FakeInvoker(tools=("cliphist", "wl-copy"))
    fake.add("3", "call mom")
    fake.add("2", "buy eggs")
    fake.add("1", "buy milk")
    return fake


@pytest.fixture
def clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def store(invoker: FakeInvoker, clipboard: FakeClipboard) -> HistoryStore:
    return HistoryStore(invoker, clipboard)


@pytest.fixture
def wayland_writer(invoker: FakeInvoker) -> ClipboardWriter:
    return ClipboardWriter(invoker, environ=lambda: {"WAYLAND_DISPLAY": "wayland-0"})


@pytest.fixture
def make_writer():
    """Build a ClipboardWriter over a fresh FakeInvoker for a given session."""

    def _make(tools, env, preferred="auto"):
        fake = FakeInvoker(tools=tools)
        writer = ClipboardWriter(fake, ClipboardConfig(preferred=preferred), environ=lambda: env)
        return fake, writer

    return _make
