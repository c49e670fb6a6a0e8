"""Production server.

Starts a pounce server with multiple workers and structured lifecycle
logging. Pounce workers are threads sharing the one App (and its
StateStore); each runs its own event loop, so a request parked on
``/timeout`` never holds up requests on other connections.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mocktarget.app import App


def run_production_server(
    app: App,
    host: str = "0.0.0.0",
    port: int = 3000,
    workers: int = 1,
    *,
    lifecycle_logging: bool = True,
    log_format: str = "text",
    log_level: str = "info",
    max_connections: int = 1000,
    backlog: int = 2048,
    keep_alive_timeout: float = 5.0,
    request_timeout: float = 30.0,
) -> None:
    """Run the mock server in production mode.

    Args:
        app: App instance.
        host: Bind address (default: 0.0.0.0 for all interfaces).
        port: Bind port (default: 3000).
        workers: Worker count (0 = auto-detect from CPU count).

        lifecycle_logging: Enable structured lifecycle event logging.
        log_format: Log format ("json" or "text").
        log_level: Log level (debug, info, warning, error, critical).

        max_connections: Maximum concurrent connections.
        backlog: TCP listen backlog.
        keep_alive_timeout: Keep-alive connection timeout (seconds).
        request_timeout: Timeout for reading a request (seconds).
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        lifecycle_logging=lifecycle_logging,
        log_format=log_format,
        log_level=log_level,
        max_connections=max_connections,
        backlog=backlog,
        keep_alive_timeout=keep_alive_timeout,
        request_timeout=request_timeout,
        # The app serves its own /health payload
        health_check_path=None,
    )

    server = Server(config, app)
    server.run()
