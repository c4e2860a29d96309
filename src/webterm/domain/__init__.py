"""Domain models for webterm.

This package contains the value objects passed between the parser,
dispatcher and session. All models use Pydantic v2 for validation and
serialization.
"""

from webterm.domain.models import (
    Command,
    CommandResult,
    ShellResponse,
    encode_response,
)

__all__ = [
    "Command",
    "CommandResult",
    "ShellResponse",
    "encode_response",
]
