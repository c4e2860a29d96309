"""Per-connection shell session.

Owns the current working directory for one WebSocket connection and
drives its receive/process/reply loop. Every command-level failure is
answered in place; only transport failures end the session.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import WebSocket, WebSocketDisconnect

from webterm.commands.dispatcher import LINE_END, CommandDispatcher
from webterm.commands.parser import ParseError, parse_command
from webterm.commands.sanitizer import sanitize_output
from webterm.domain.models import CommandResult, ShellResponse, encode_response

logger = logging.getLogger(__name__)

DEFAULT_WELCOME = "Welcome to the Python Web Terminal Backend!"

PARSE_ERROR_TEXT = (
    "Error: Invalid command format (unclosed quotes or invalid escapes)." + LINE_END
)


class ShellSession:
    """State and turn processing for one connected client.

    The session starts at the sandbox root. Its current directory only
    changes when the dispatcher reports a new directory, which the
    resolver has already confined to the sandbox.
    """

    def __init__(
        self,
        peer: str,
        dispatcher: CommandDispatcher,
        welcome_message: str = DEFAULT_WELCOME,
    ) -> None:
        self._peer = peer
        self._dispatcher = dispatcher
        self._welcome_message = welcome_message
        self._cwd: Path = dispatcher.resolver.root
        self._is_open = False

    @property
    def peer(self) -> str:
        return self._peer

    @property
    def current_directory(self) -> Path:
        return self._cwd

    @property
    def is_open(self) -> bool:
        return self._is_open

    def open(self) -> ShellResponse:
        """Mark the session open and build the welcome response."""
        self._is_open = True
        logger.info("Session opened for %s at %s", self._peer, self._cwd)
        return ShellResponse(
            output=sanitize_output(self._welcome_message + LINE_END),
            cwd_update=str(self._cwd),
        )

    def close(self) -> None:
        if self._is_open:
            self._is_open = False
            logger.info("Session closed for %s", self._peer)

    async def handle_line(self, raw: str) -> ShellResponse:
        """Process one command line and build the reply for it."""
        try:
            command = parse_command(raw)
        except ParseError as e:
            logger.debug("Parse error from %s in %r: %s", self._peer, e.line, e)
            return ShellResponse(output=PARSE_ERROR_TEXT)

        try:
            result = await self._dispatcher.dispatch(command, self._cwd)
        except Exception as e:
            logger.exception("Command %r failed for %s", command.verb, self._peer)
            result = CommandResult(output=f"Internal error: {e}{LINE_END}")

        cwd_update = None
        if result.new_directory is not None and result.new_directory != self._cwd:
            self._cwd = result.new_directory
            cwd_update = str(self._cwd)

        output = sanitize_output(result.output)
        return ShellResponse(output=output or None, cwd_update=cwd_update)


async def run_session(websocket: WebSocket, session: ShellSession) -> None:
    """Drive ``session`` over an accepted WebSocket until it closes.

    Text frames are handled one at a time; the next frame is not read
    until the reply to the current one has been sent. Binary frames are
    ignored.
    """
    try:
        await _send(websocket, session.open())
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                logger.info(
                    "Connection closed by %s (code=%s)", session.peer, message.get("code")
                )
                break

            text = message.get("text")
            if text is None:
                logger.debug("Ignoring non-text frame from %s", session.peer)
                continue

            logger.info("Received message from %s: %s", session.peer, text)
            response = await session.handle_line(text)
            await _send(websocket, response)
    except WebSocketDisconnect as e:
        logger.info("Connection closed by %s (code=%s)", session.peer, e.code)
    except (RuntimeError, OSError) as e:
        logger.error("WebSocket error for %s: %s", session.peer, e)
    finally:
        session.close()


async def _send(websocket: WebSocket, response: ShellResponse) -> None:
    payload = encode_response(response)
    if payload is not None:
        await websocket.send_text(payload)
