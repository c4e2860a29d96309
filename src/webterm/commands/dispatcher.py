"""Builtin command dispatch.

Maps a parsed Command to a handler and returns a CommandResult. The
dispatcher holds no per-session state: the caller passes the current
directory in and applies any directory change from the result.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Awaitable, Callable

from webterm.commands.sandbox import SandboxError, SandboxResolver
from webterm.domain.models import Command, CommandResult
from webterm.executor.base import (
    ExecutionError,
    SubprocessNonZeroExit,
    SubprocessNotFound,
    SystemInspector,
)

logger = logging.getLogger(__name__)

LINE_END = "\r\n"

DENIED_VERBS = frozenset({"sudo", "su", "passwd"})

PERMISSION_DENIED = (
    "Error: Permission denied. Privilege escalation is not available in this terminal."
    + LINE_END
)

HELP_TEXT = (
    "\r\nAvailable Commands (handled by backend):\r\n"
    "\x1b[32m  help\x1b[0m        - Show list of available commands\r\n"
    "\x1b[32m  echo <text>\x1b[0m - Echoes the text you provide\r\n"
    "\x1b[32m  about\x1b[0m       - About this backend\r\n"
    "\x1b[32m  pwd\x1b[0m         - Prints working directory\r\n"
    "\x1b[32m  ls\x1b[0m          - List directory contents\r\n"
    "\x1b[32m  cd <path>\x1b[0m   - Change current directory\r\n"
    "\x1b[32m  whoami\x1b[0m      - Print the user name associated with the current effective user ID\r\n"
    "\x1b[32m  clear\x1b[0m       - Clear the screen\r\n"
)

ABOUT_TEXT = (
    "This is the Python FastAPI backend for your Web terminal.\r\n"
    "It handles commands sent via WebSocket.\r\n"
)

# Erase display, then move the cursor home
CLEAR_SCREEN = "\x1b[2J\x1b[H"

Handler = Callable[[Command, Path], Awaitable[CommandResult]]


class CommandDispatcher:
    """Routes commands to builtin handlers.

    Args:
        resolver: Sandbox resolver used for every path argument.
        inspector: Backend for the commands that run external programs.
    """

    def __init__(self, resolver: SandboxResolver, inspector: SystemInspector) -> None:
        self._resolver = resolver
        self._inspector = inspector
        self._handlers: dict[str, Handler] = {
            "": self._noop,
            "help": self._help,
            "echo": self._echo,
            "pwd": self._pwd,
            "cd": self._cd,
            "ls": self._ls,
            "whoami": self._whoami,
            "about": self._about,
            "clear": self._clear,
        }

    @property
    def resolver(self) -> SandboxResolver:
        return self._resolver

    async def dispatch(self, command: Command, cwd: Path) -> CommandResult:
        """Run ``command`` with ``cwd`` as the session's current directory."""
        if command.verb in DENIED_VERBS:
            logger.warning("Denied privileged command: %s", command.verb)
            return CommandResult(output=PERMISSION_DENIED)

        handler = self._handlers.get(command.verb)
        if handler is None:
            return CommandResult(output=f"Unknown command: {command.line}{LINE_END}")
        return await handler(command, cwd)

    # ------------------------------------------------------------------
    # Builtins
    # ------------------------------------------------------------------

    async def _noop(self, command: Command, cwd: Path) -> CommandResult:
        return CommandResult()

    async def _help(self, command: Command, cwd: Path) -> CommandResult:
        return CommandResult(output=HELP_TEXT)

    async def _about(self, command: Command, cwd: Path) -> CommandResult:
        return CommandResult(output=ABOUT_TEXT)

    async def _clear(self, command: Command, cwd: Path) -> CommandResult:
        return CommandResult(output=CLEAR_SCREEN)

    async def _echo(self, command: Command, cwd: Path) -> CommandResult:
        return CommandResult(output=" ".join(command.args) + LINE_END)

    async def _pwd(self, command: Command, cwd: Path) -> CommandResult:
        return CommandResult(output=f"{cwd}{LINE_END}")

    async def _cd(self, command: Command, cwd: Path) -> CommandResult:
        candidate = command.args[0] if command.args else None
        try:
            target = self._resolver.resolve(candidate, cwd)
        except SandboxError as e:
            return CommandResult(output=f"Error: {e}.{LINE_END}")
        return CommandResult(new_directory=target)

    async def _ls(self, command: Command, cwd: Path) -> CommandResult:
        operands_only = False
        for arg in command.args:
            if not operands_only and arg == "--":
                operands_only = True
                continue
            # Flags go to ls unchecked, so -RL can follow links out of the root
            if not operands_only and arg.startswith("-") and arg != "-":
                continue
            try:
                self._resolver.resolve(arg, cwd, require_directory=False)
            except SandboxError as e:
                return CommandResult(output=f"Error: {e}.{LINE_END}")
        try:
            output = await self._inspector.list_directory(cwd, list(command.args))
        except ExecutionError as e:
            return CommandResult(output=_execution_error_text("ls", e))
        return CommandResult(output=output)

    async def _whoami(self, command: Command, cwd: Path) -> CommandResult:
        try:
            output = await self._inspector.current_user(cwd)
        except ExecutionError as e:
            return CommandResult(output=_execution_error_text("whoami", e))
        return CommandResult(output=output)


def _execution_error_text(verb: str, error: ExecutionError) -> str:
    """Render an execution failure the way the client expects to see it."""
    if isinstance(error, SubprocessNonZeroExit):
        return f"Error executing {verb}: {error.stderr.rstrip()}{LINE_END}"
    if isinstance(error, SubprocessNotFound):
        return (
            f"Error: Command '{verb}' not found. Is it installed and in your PATH?"
            f"{LINE_END}"
        )
    return f"Failed to execute {verb} command: {error}{LINE_END}"
