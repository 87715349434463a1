"""System clipboard adapter.

Chooses between the Wayland tool (wl-copy) and the X11 tools (xclip, then
xsel) from the session environment. The probe runs once and is cached with
a snapshot of the session variables, so it is only repeated when those
variables change or ``refresh()`` is called.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Tuple

from clipscope.core.config import ClipboardConfig
from clipscope.core.errors import ClipboardToolUnavailable, ToolExecutionFailed, ToolNotFound
from clipscope.core.models import CONTENT_TEXT
from clipscope.core.ports import ProcessInvokerPort, StdinPayload

LOGGER = logging.getLogger(__name__)

SESSION_VARIABLES = ("WAYLAND_DISPLAY", "DISPLAY", "XDG_SESSION_TYPE")

FAMILY_WAYLAND = "wayland"
FAMILY_X11 = "x11"


@dataclass(frozen=True)
class ClipboardTool:
    """A resolved clipboard command and how it accepts typed payloads."""

    family: str
    command: str
    base_args: Tuple[str, ...]
    type_flag: Optional[str]

    def args_for(self, mime_type: Optional[str]) -> List[str]:
        args = list(self.base_args)
        if mime_type and self.type_flag:
            args.extend([self.type_flag, mime_type])
        return args


WL_COPY = ClipboardTool(FAMILY_WAYLAND, "wl-copy", (), "--type")
XCLIP = ClipboardTool(FAMILY_X11, "xclip", ("-selection", "clipboard"), "-t")
XSEL = ClipboardTool(FAMILY_X11, "xsel", ("--clipboard", "--input"), None)


def _is_wayland(env: Mapping[str, str]) -> bool:
    return bool(env.get("WAYLAND_DISPLAY")) or env.get("XDG_SESSION_TYPE", "").lower() == "wayland"


def _is_x11(env: Mapping[str, str]) -> bool:
    return bool(env.get("DISPLAY"))


def candidate_tools(env: Mapping[str, str], preferred: str = "auto") -> List[ClipboardTool]:
    """Return clipboard tools ordered by preference for this session."""

    if preferred == FAMILY_WAYLAND:
        return [WL_COPY]
    if preferred == FAMILY_X11:
        return [XCLIP, XSEL]

    candidates: List[ClipboardTool] = []
    if _is_wayland(env):
        candidates.append(WL_COPY)
    # XWayland sessions also expose DISPLAY, so X11 tools stay as a fallback.
    if _is_x11(env):
        candidates.extend([XCLIP, XSEL])
    return candidates


class ClipboardWriter:
    """Writes content to the clipboard through the session's clipboard tool."""

    def __init__(
        self,
        invoker: ProcessInvokerPort,
        config: Optional[ClipboardConfig] = None,
        environ: Optional[Callable[[], Mapping[str, str]]] = None,
    ) -> None:
        self._invoker = invoker
        self._config = config or ClipboardConfig()
        self._environ = environ or (lambda: os.environ)
        self._snapshot: Optional[Tuple[Optional[str], ...]] = None
        self._tools: List[ClipboardTool] = []

    def refresh(self) -> None:
        """Forget the cached probe so the next write re-detects the session."""

        self._snapshot = None
        self._tools = []

    def available_tools(self) -> List[ClipboardTool]:
        """Return usable tools for the current session, probing if needed."""

        env = self._environ()
        snapshot = tuple(env.get(name) for name in SESSION_VARIABLES)
        if snapshot != self._snapshot:
            self._tools = [
                tool
                for tool in candidate_tools(env, self._config.preferred)
                if self._invoker.which(tool.command)
            ]
            self._snapshot = snapshot
            LOGGER.debug(
                "Clipboard probe selected: %s",
                ", ".join(tool.command for tool in self._tools) or "none",
            )
        return list(self._tools)

    def usable_tools(self, content_type: str = CONTENT_TEXT) -> List[ClipboardTool]:
        """Return tools able to carry ``content_type``, in preference order."""

        available = self.available_tools()
        tools = available
        if content_type != CONTENT_TEXT:
            # xsel only speaks text; typed payloads need a tool with a type flag.
            tools = [tool for tool in available if tool.type_flag]
        if not tools:
            detail = "no available tool accepts binary content" if available else ""
            raise ClipboardToolUnavailable(detail)
        return tools

    def write(self, content: StdinPayload, content_type: str, mime_type: Optional[str] = None) -> None:
        """Pipe ``content`` to the first clipboard tool that accepts it.

        Text is UTF-8 encoded without newline translation; bytes are passed
        through untouched. A tool that fails or has vanished hands over to
        the next candidate (wl-copy to xclip under XWayland). Timeouts are
        not retried and propagate as ToolTimedOut.
        """

        payload = content.encode("utf-8") if isinstance(content, str) else content
        failures: List[str] = []
        for tool in self.usable_tools(content_type):
            args = tool.args_for(mime_type if content_type != CONTENT_TEXT else None)
            try:
                self._invoker.run(
                    tool.command,
                    args,
                    payload,
                    timeout=self._config.timeout_seconds,
                    capture=False,
                )
            except ToolNotFound as exc:
                # The cached probe is stale; the next write re-detects.
                self.refresh()
                failures.append(exc.message)
                continue
            except ToolExecutionFailed as exc:
                LOGGER.warning("Clipboard tool %s failed, trying next", tool.command)
                failures.append(exc.message)
                continue
            LOGGER.debug("Wrote %s bytes to clipboard via %s", len(payload), tool.command)
            return
        raise ClipboardToolUnavailable("; ".join(failures))
