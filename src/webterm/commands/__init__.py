"""Command handling for webterm.

Parses client lines, resolves paths inside the sandbox, dispatches the
builtin commands and cleans their output for the browser terminal.
"""

from webterm.commands.dispatcher import CommandDispatcher
from webterm.commands.parser import ParseError, parse_command
from webterm.commands.sandbox import (
    PathInvalid,
    SandboxError,
    SandboxResolver,
    SandboxViolation,
)
from webterm.commands.sanitizer import sanitize_output

__all__ = [
    "CommandDispatcher",
    "ParseError",
    "PathInvalid",
    "SandboxError",
    "SandboxResolver",
    "SandboxViolation",
    "parse_command",
    "sanitize_output",
]
