"""System inspection module for webterm.

Runs the handful of read-only external programs the shell exposes
through a pluggable backend.

Public API:
    SystemInspector -- Abstract base class
    SubprocessInspector -- Backend that spawns real processes
"""

from webterm.executor.base import (
    ALLOWED_PROGRAMS,
    ExecutionError,
    SubprocessIOError,
    SubprocessNonZeroExit,
    SubprocessNotFound,
    SystemInspector,
)

__all__ = [
    "ALLOWED_PROGRAMS",
    "ExecutionError",
    "SubprocessIOError",
    "SubprocessNonZeroExit",
    "SubprocessNotFound",
    "SystemInspector",
    "SubprocessInspector",
]


def __getattr__(name: str) -> type:
    """Lazy import for the concrete backend."""
    if name == "SubprocessInspector":
        from webterm.executor.subprocess_backend import SubprocessInspector
        return SubprocessInspector
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
