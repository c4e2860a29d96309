"""FastAPI server for the web terminal.

Accepts WebSocket connections on ``/ws`` and runs one shell session per
connection. Also serves a small HTTP surface and, when it has been
built, the browser frontend.

    GET /ws         -> WebSocket, command lines in, JSON responses out
    GET /api/hello  -> plain text greeting
    GET /health     -> {"status": "ok", "sandbox_root": "..."}
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI, Request, WebSocket
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from webterm.commands.dispatcher import CommandDispatcher
from webterm.commands.sandbox import SandboxResolver
from webterm.endpoint.session import DEFAULT_WELCOME, ShellSession, run_session
from webterm.executor.base import SystemInspector
from webterm.executor.subprocess_backend import SubprocessInspector

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    status: str = "ok"
    sandbox_root: str = ""


def create_app(
    sandbox_root: Path | str | None = None,
    create_root: bool = False,
    static_dir: Path | str | None = None,
    welcome_message: str = DEFAULT_WELCOME,
    inspector: SystemInspector | None = None,
) -> FastAPI:
    """Create the web terminal application.

    Args:
        sandbox_root: Directory sessions are confined to. Defaults to the
                      process working directory.
        create_root: Create ``sandbox_root`` if it does not exist.
        static_dir: Built frontend to serve at ``/``. Skipped when missing.
        welcome_message: Greeting sent to every new connection.
        inspector: Optional pre-configured SystemInspector (for testing).

    Raises:
        ValueError: If the sandbox root is not an existing directory.
    """
    root = Path(sandbox_root) if sandbox_root is not None else Path.cwd()
    if create_root:
        root.mkdir(parents=True, exist_ok=True)
    if not root.is_dir():
        raise ValueError(f"Sandbox root {root} is not an existing directory")

    resolver = SandboxResolver(root)
    dispatcher = CommandDispatcher(resolver, inspector or SubprocessInspector())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Web terminal started (sandbox root=%s)", resolver.root)
        yield
        logger.info("Web terminal stopped")

    app = FastAPI(
        title="webterm",
        description="Sandboxed pseudo-shell over WebSocket",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.resolver = resolver
    app.state.dispatcher = dispatcher
    app.state.welcome_message = welcome_message

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
        if exc.status_code == 404:
            logger.warning("404 Not Found: %s", request.url.path)
            return PlainTextResponse("Not Found", status_code=404)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    @app.get("/health")
    async def health_check() -> HealthResponse:
        return HealthResponse(sandbox_root=str(app.state.resolver.root))

    @app.get("/api/hello", response_class=PlainTextResponse)
    async def hello_world() -> str:
        return "Hello, World from Python Backend API!"

    @app.websocket("/ws")
    async def websocket_terminal(websocket: WebSocket) -> None:
        client = websocket.client
        peer = f"{client.host}:{client.port}" if client else "unknown"
        logger.info("New WebSocket connection from: %s", peer)
        await websocket.accept()
        session = ShellSession(
            peer=peer,
            dispatcher=app.state.dispatcher,
            welcome_message=app.state.welcome_message,
        )
        await run_session(websocket, session)
        logger.info("%s WebSocket connection closed.", peer)

    # Mounted last so the routes above take precedence over static files
    if static_dir is not None:
        static_path = Path(static_dir)
        if static_path.is_dir():
            logger.debug("Serving static files from: %s", static_path)
            app.mount("/", StaticFiles(directory=static_path, html=True), name="static")
        else:
            logger.info("Static directory %s not found, frontend not served", static_path)

    return app


def main() -> None:
    """Entry point for running the server standalone."""
    app = create_app()
    uvicorn.run(app, host="0.0.0.0", port=3000)


if __name__ == "__main__":
    main()
