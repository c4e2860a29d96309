"""WebSocket endpoint module for webterm.

Provides the FastAPI server that accepts terminal connections and the
per-connection shell session that answers their command lines.
"""
