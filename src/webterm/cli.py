"""Command-line interface for webterm.

Provides the main entry point for starting the WebSocket server and for
running a single command line through the shell locally.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import shlex
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="webterm",
        description="Sandboxed remote pseudo-shell over WebSocket",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/webterm.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Start the WebSocket server")
    serve_parser.add_argument("--host", type=str, default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")
    serve_parser.add_argument(
        "--root", type=Path, default=None,
        help="Sandbox root directory (default: current directory)",
    )

    exec_parser = subparsers.add_parser(
        "exec", help="Run one command line through the shell and print the result",
    )
    exec_parser.add_argument("line", type=str, help="Command line, quoted as one argument")
    exec_parser.add_argument(
        "--root", type=Path, default=None,
        help="Sandbox root directory (default: current directory)",
    )
    exec_parser.add_argument(
        "--cwd", type=str, default=None,
        help="Starting directory inside the sandbox (default: the root)",
    )

    return parser.parse_args(argv)


async def _exec_line(settings, args) -> int:
    """Run a single line through a fresh session and print the response."""
    from webterm.commands.dispatcher import CommandDispatcher
    from webterm.commands.sandbox import SandboxError, SandboxResolver
    from webterm.endpoint.session import ShellSession
    from webterm.executor.subprocess_backend import SubprocessInspector

    resolver = SandboxResolver(settings.sandbox.resolved_root())
    dispatcher = CommandDispatcher(resolver, SubprocessInspector())
    session = ShellSession(peer="cli", dispatcher=dispatcher)

    if args.cwd:
        try:
            start = resolver.resolve(args.cwd, resolver.root)
        except SandboxError as e:
            print(f"Error: {e}.")
            return 1
        await session.handle_line(f"cd {shlex.quote(str(start))}")

    response = await session.handle_line(args.line)
    if response.output:
        print(response.output.replace("\r\n", "\n"), end="")
    if response.cwd_update:
        print(f"[cwd] {response.cwd_update}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the webterm CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return 0

    from webterm.config.settings import load_settings
    from webterm.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"
    if getattr(args, "root", None) is not None:
        settings.sandbox.root = str(args.root)

    setup_logging(settings.logging)

    if args.command == "serve":
        from webterm.endpoint.server import create_app
        import uvicorn

        srv = settings.server
        app = create_app(
            sandbox_root=settings.sandbox.resolved_root(),
            create_root=settings.sandbox.create_root,
            static_dir=srv.static_dir,
            welcome_message=settings.sandbox.welcome_message,
        )
        logger.info("Starting server on %s:%d", args.host or srv.host, args.port or srv.port)
        uvicorn.run(
            app,
            host=args.host or srv.host,
            port=args.port or srv.port,
        )

    elif args.command == "exec":
        return asyncio.run(_exec_line(settings, args))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
