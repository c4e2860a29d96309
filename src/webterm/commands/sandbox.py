"""Sandbox path resolution.

Every path a session can see is funnelled through SandboxResolver,
which canonicalizes it and refuses anything that lands outside the
configured root. Containment is checked twice: lexically before the
filesystem is touched, and again after symlinks are resolved.
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

logger = logging.getLogger(__name__)


class SandboxError(Exception):
    """Base class for rejected sandbox paths."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class SandboxViolation(SandboxError):
    """Raised when a path resolves outside the sandbox root."""


class PathInvalid(SandboxError):
    """Raised when a path does not exist or is not a directory."""


class SandboxResolver:
    """Resolves user-supplied paths against a fixed sandbox root.

    The root itself is canonicalized once at construction so that later
    comparisons are made between fully resolved paths.

    Example usage::

        resolver = SandboxResolver("/srv/sandbox")
        target = resolver.resolve("projects/../docs", cwd=resolver.root)
    """

    def __init__(self, root: Path | str) -> None:
        self._root = Path(os.path.realpath(root))

    @property
    def root(self) -> Path:
        return self._root

    def contains(self, path: Path) -> bool:
        """Whether ``path`` is the root or lies below it, compared by components."""
        return path == self._root or self._root in path.parents

    def resolve(
        self,
        candidate: str | None,
        cwd: Path,
        require_directory: bool = True,
    ) -> Path:
        """Resolve ``candidate`` relative to ``cwd`` inside the sandbox.

        Args:
            candidate: Path as typed by the user. None or empty means the
                       sandbox root.
            cwd: The session's current directory, already inside the root.
            require_directory: Reject paths that are not directories.

        Returns:
            The canonical absolute path.

        Raises:
            SandboxViolation: If the path lies outside the root.
            PathInvalid: If the path does not exist, or is not a
                         directory when one is required.
        """
        if not candidate:
            return self._root
        if "\x00" in candidate:
            raise PathInvalid(
                f"Path '{candidate}' is invalid or does not exist", path=candidate
            )

        target = Path(candidate)
        if target.is_absolute():
            # Reject before any filesystem access so existence of outside
            # paths is never revealed.
            if not self.contains(target):
                raise SandboxViolation(
                    f"Path '{candidate}' is outside the sandbox", path=candidate
                )
        else:
            target = cwd / target

        canonical = Path(os.path.realpath(target))
        if not self.contains(canonical):
            logger.warning("Rejected path %s resolving to %s", candidate, canonical)
            raise SandboxViolation(
                f"Path '{candidate}' is outside the sandbox", path=candidate
            )

        # Stat the joined path, not the canonical one, so every component
        # (including those before a "..") must exist and be a directory.
        try:
            status = os.stat(target)
        except OSError as e:
            raise PathInvalid(
                f"Path '{candidate}' is invalid or does not exist", path=candidate
            ) from e
        if require_directory and not stat.S_ISDIR(status.st_mode):
            raise PathInvalid(f"'{candidate}' is not a directory", path=candidate)
        return canonical
