"""Start the WSGI server, moving to the next port when one is taken."""

from __future__ import annotations

import errno
import logging
import socket

from flask import Flask
from werkzeug.serving import BaseWSGIServer, make_server

logger = logging.getLogger(__name__)


class PortUnavailable(RuntimeError):
    """Raised when no port in the retry window could be bound."""


def find_free_tcp_port(host: str, start_port: int, max_tries: int = 100) -> int:
    """Find an available TCP port starting from start_port."""
    if not (0 <= start_port <= 65535):
        raise ValueError(f"Port must be 0..65535, got {start_port}")
    if max_tries < 1:
        raise ValueError(f"max_tries must be at least 1, got {max_tries}")

    for port in range(start_port, min(65536, start_port + max_tries)):
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((host, port))
            return port
        except OSError as e:
            if e.errno in (errno.EADDRINUSE, errno.EACCES):
                logger.debug("Port %d unavailable: %s", port, e.strerror)
                continue
            raise
        finally:
            sock.close()

    raise PortUnavailable(
        f"Failed to start server after {max_tries} attempts. "
        f"Last port tried: {min(65535, start_port + max_tries - 1)}."
    )


def bind_server(
    app: Flask,
    host: str,
    port: int,
    max_attempts: int = 100,
) -> BaseWSGIServer:
    """Bind a threaded server on the first free port from ``port`` upward."""
    actual_port = find_free_tcp_port(host, port, max_attempts)
    if actual_port != port:
        logger.info("Port %d busy, using %d", port, actual_port)
    return make_server(host, actual_port, app, threaded=True)


def serve(app: Flask, host: str, port: int, max_attempts: int = 100) -> None:
    """Run until interrupted."""
    server = bind_server(app, host, port, max_attempts)
    logger.info(
        "Image Converter server running on http://%s:%d", host, server.server_port
    )
    try:
        server.serve_forever()
    finally:
        server.server_close()
        service = app.config.get("mcp_service")
        if service is not None:
            service.shutdown()
