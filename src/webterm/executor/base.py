"""Abstract base class for system inspection backends.

The shell only ever runs a couple of read-only programs (``ls`` and
``whoami``). All backends conform to this interface so the dispatcher
can run against the real subprocess backend in production and a canned
backend in tests without changing any other code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

ALLOWED_PROGRAMS = frozenset({"ls", "whoami"})


class SystemInspector(ABC):
    """Abstract interface for running allow-listed inspection programs.

    Implementations run ``program`` with ``cwd`` as its working directory
    and return its standard output. Failures are reported through the
    ExecutionError hierarchy, never as return values.

    Example usage::

        inspector = SubprocessInspector()
        listing = await inspector.list_directory(Path("/srv/sandbox"), ["-a"])
        user = await inspector.current_user(Path("/srv/sandbox"))
    """

    @abstractmethod
    async def run(self, program: str, args: list[str], cwd: Path) -> str:
        """Run an allow-listed program and return its decoded stdout.

        Args:
            program: Program name, one of ALLOWED_PROGRAMS.
            args: Arguments appended after the program name. Any that name
                  paths must already have passed sandbox validation.
            cwd: Working directory for the program.

        Raises:
            SubprocessNotFound: If the program binary is missing.
            SubprocessNonZeroExit: If the program exits with a non-zero status.
            SubprocessIOError: If the program is not allowed or cannot be run.
        """
        ...

    async def list_directory(self, cwd: Path, args: list[str]) -> str:
        """List directory contents with ``ls``."""
        return await self.run("ls", args, cwd)

    async def current_user(self, cwd: Path) -> str:
        """Report the effective user name with ``whoami``."""
        return await self.run("whoami", [], cwd)

    def check_allowed(self, program: str) -> None:
        """Raise SubprocessIOError unless ``program`` is allow-listed."""
        if program not in ALLOWED_PROGRAMS:
            raise SubprocessIOError(
                f"program '{program}' is not allowed", program=program
            )


class ExecutionError(Exception):
    """Raised when an inspection program cannot produce output."""

    def __init__(self, message: str, program: str = "") -> None:
        super().__init__(message)
        self.program = program


class SubprocessNotFound(ExecutionError):
    """Raised when the program binary is not installed."""


class SubprocessIOError(ExecutionError):
    """Raised when spawning or talking to the program fails."""


class SubprocessNonZeroExit(ExecutionError):
    """Raised when the program exits unsuccessfully."""

    def __init__(
        self,
        message: str,
        program: str = "",
        returncode: int = 1,
        stderr: str = "",
    ) -> None:
        super().__init__(message, program=program)
        self.returncode = returncode
        self.stderr = stderr
