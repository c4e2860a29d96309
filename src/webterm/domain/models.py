"""Core domain models for the webterm system.

These models represent the data flowing through one turn of a shell
session: the parsed command, the result of dispatching it, and the
response framed for the WebSocket client.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Command Models
# ---------------------------------------------------------------------------


class Command(BaseModel):
    """A command line split into a verb and its arguments.

    The verb is the lower-cased first word. An empty verb means the line
    held no words at all and the turn is a no-op.
    """

    model_config = ConfigDict(frozen=True)

    verb: str = Field(default="", description="Lower-cased first word of the line")
    args: list[str] = Field(default_factory=list, description="Remaining words, in order")
    line: str = Field(default="", description="The trimmed line as the client sent it")

    @property
    def is_empty(self) -> bool:
        return not self.verb


class CommandResult(BaseModel):
    """Outcome of dispatching a single command."""

    model_config = ConfigDict(frozen=True)

    output: str = Field(default="", description="Text to show the client, possibly empty")
    new_directory: Path | None = Field(
        default=None, description="Directory to switch to, if the command changed it"
    )


# ---------------------------------------------------------------------------
# Wire Models
# ---------------------------------------------------------------------------


class ShellResponse(BaseModel):
    """One server-to-client message.

    Serialized as ``{"output": ..., "cwd_update": ...}`` with absent
    fields omitted entirely rather than sent as null.
    """

    model_config = ConfigDict(frozen=True)

    output: str | None = Field(default=None, description="Sanitized output text")
    cwd_update: str | None = Field(
        default=None, description="New current directory, present only when it changed"
    )

    @property
    def is_empty(self) -> bool:
        return self.output is None and self.cwd_update is None


def encode_response(response: ShellResponse) -> str | None:
    """Serialize a response for the transport.

    Returns None for a response with neither field set; such turns are
    not sent to the client at all.
    """
    if response.is_empty:
        return None
    return response.model_dump_json(exclude_none=True)
