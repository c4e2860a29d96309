"""Subprocess inspection backend.

Runs allow-listed programs directly (no shell) with asyncio and captures
their output.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from webterm.executor.base import (
    SubprocessIOError,
    SubprocessNonZeroExit,
    SubprocessNotFound,
    SystemInspector,
)

logger = logging.getLogger(__name__)


class SubprocessInspector(SystemInspector):
    """Runs inspection programs as child processes."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    async def run(self, program: str, args: list[str], cwd: Path) -> str:
        """Spawn ``program`` in ``cwd`` and wait for it to exit."""
        self.check_allowed(program)
        try:
            process = await asyncio.create_subprocess_exec(
                program,
                *args,
                cwd=str(cwd),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await process.communicate()
        except FileNotFoundError as e:
            # A vanished working directory also surfaces as ENOENT
            if not cwd.is_dir():
                raise SubprocessIOError(
                    f"working directory {cwd} no longer exists", program=program
                ) from e
            raise SubprocessNotFound(
                f"Command '{program}' not found", program=program
            ) from e
        except OSError as e:
            raise SubprocessIOError(str(e), program=program) from e

        logger.debug("%s %s exited with %d", program, args, process.returncode)
        if process.returncode != 0:
            err = stderr.decode(self._encoding, errors="replace")
            raise SubprocessNonZeroExit(
                f"{program} exited with status {process.returncode}",
                program=program,
                returncode=process.returncode,
                stderr=err,
            )
        return stdout.decode(self._encoding, errors="replace")
