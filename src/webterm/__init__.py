"""webterm -- Sandboxed remote pseudo-shell over WebSocket.

This package implements a small command shell exposed over a WebSocket.
Each connection gets its own session with a current working directory
that is confined to a fixed sandbox root. Command lines arrive as text
frames; replies go back as JSON objects carrying output and directory
updates for a browser terminal.
"""

__version__ = "0.1.0"
