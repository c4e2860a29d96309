"""Shared test fixtures for the webterm test suite.

Provides common fixtures used across unit tests: a populated sandbox
directory, a canned inspector that never spawns processes, and ready
wired dispatcher/session objects.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from webterm.commands.dispatcher import CommandDispatcher
from webterm.commands.sandbox import SandboxResolver
from webterm.endpoint.session import ShellSession
from webterm.executor.base import SystemInspector


class CannedInspector(SystemInspector):
    """SystemInspector returning fixed output and recording every call."""

    def __init__(
        self,
        outputs: dict[str, str] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.outputs = outputs or {"ls": "docs\nnotes.txt\nprojects\n", "whoami": "tester\n"}
        self.error = error
        self.calls: list[tuple[str, list[str], Path]] = []

    async def run(self, program: str, args: list[str], cwd: Path) -> str:
        self.check_allowed(program)
        self.calls.append((program, list(args), cwd))
        if self.error is not None:
            raise self.error
        return self.outputs[program]


# ---------------------------------------------------------------------------
# Filesystem Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sandbox_root(tmp_path: Path) -> Path:
    """A sandbox directory with a few entries and an escaping symlink.

    Layout::

        outside/secret.txt
        sandbox/
            docs/
            projects/app/
            notes.txt
            escape -> ../outside
            inner -> projects
    """
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "secret.txt").write_text("top secret")

    root = tmp_path / "sandbox"
    (root / "docs").mkdir(parents=True)
    (root / "projects" / "app").mkdir(parents=True)
    (root / "notes.txt").write_text("hello")
    (root / "escape").symlink_to(outside, target_is_directory=True)
    (root / "inner").symlink_to(root / "projects", target_is_directory=True)
    return root.resolve()


# ---------------------------------------------------------------------------
# Component Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def resolver(sandbox_root: Path) -> SandboxResolver:
    return SandboxResolver(sandbox_root)


@pytest.fixture
def inspector() -> CannedInspector:
    return CannedInspector()


@pytest.fixture
def dispatcher(resolver: SandboxResolver, inspector: CannedInspector) -> CommandDispatcher:
    return CommandDispatcher(resolver, inspector)


@pytest.fixture
def session(dispatcher: CommandDispatcher) -> ShellSession:
    """An opened session at the sandbox root."""
    s = ShellSession(peer="127.0.0.1:50000", dispatcher=dispatcher)
    s.open()
    return s


@pytest.fixture
def clean_logger():
    """The ``webterm`` logger, with its handlers and level restored afterwards."""
    logger = logging.getLogger("webterm")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)
