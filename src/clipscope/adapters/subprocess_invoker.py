"""Process invocation adapter backed by ``subprocess``.

Each call spawns exactly one child process with a bounded wait. The child is
owned by ``subprocess.run``, which kills and reaps it on timeout so no handle
outlives the call.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Optional, Sequence

from clipscope.core.errors import ToolExecutionFailed, ToolNotFound, ToolTimedOut
from clipscope.core.models import ProcessResult
from clipscope.core.ports import StdinPayload

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


class SubprocessInvoker:
    """Runs external tools and maps failures onto the core error taxonomy."""

    def __init__(self, default_timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._default_timeout = default_timeout

    def which(self, command: str) -> Optional[str]:
        return shutil.which(command)

    def run(
        self,
        command: str,
        args: Sequence[str] = (),
        stdin: Optional[StdinPayload] = None,
        *,
        timeout: Optional[float] = None,
        capture: bool = True,
    ) -> ProcessResult:
        """Run ``command`` once and return its captured output.

        ``capture=False`` discards stdout/stderr. Tools that fork a background
        owner (wl-copy) keep inherited pipes open, so capturing would block
        until the clipboard changes hands.
        """

        executable = self.which(command)
        if executable is None:
            raise ToolNotFound(command)

        wait = self._default_timeout if timeout is None else timeout
        payload = stdin.encode("utf-8") if isinstance(stdin, str) else stdin
        output = subprocess.PIPE if capture else subprocess.DEVNULL

        try:
            completed = subprocess.run(
                [executable, *args],
                input=payload,
                stdin=None if payload is not None else subprocess.DEVNULL,
                stdout=output,
                stderr=output,
                timeout=wait,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            LOGGER.warning("%s timed out after %ss", command, wait)
            raise ToolTimedOut(command, wait) from exc
        except (FileNotFoundError, PermissionError) as exc:
            raise ToolNotFound(command) from exc

        result = ProcessResult(
            stdout=completed.stdout or b"",
            stderr=completed.stderr or b"",
            exit_code=completed.returncode,
        )
        LOGGER.debug("%s %s exited with %s", command, args[0] if args else "", result.exit_code)
        if result.exit_code != 0:
            raise ToolExecutionFailed(command, result.exit_code, result.stderr_text)
        return result
