"""Built-in middleware: server identification header and access log.

Both are installed automatically by ``App`` when enabled in
``ServerConfig``; they can also be added by hand with
``app.add_middleware()``.
"""

import logging
import time

from mocktarget.http.request import Request
from mocktarget.http.response import Response
from mocktarget.middleware.protocol import Next

access_logger = logging.getLogger("mocktarget.access")


class PoweredByMiddleware:
    """Stamp every JSON response with an ``X-Powered-By`` header.

    Monitors doing header checks can then tell the mock server apart
    from whatever sits in front of it. Non-JSON responses (``/ping``,
    ``/html-status``) are left untouched.

    Usage::

        app.add_middleware(PoweredByMiddleware("my-mock"))
    """

    __slots__ = ("server_name",)

    def __init__(self, server_name: str) -> None:
        self.server_name = server_name

    async def __call__(self, request: Request, next: Next) -> Response:
        response = await next(request)
        if response.is_json and response.header("X-Powered-By") is None:
            response = response.with_header("X-Powered-By", self.server_name)
        return response


class AccessLogMiddleware:
    """Log one line per request: client, method, path, status, duration.

    Requests that never complete (``/timeout``) are never logged; the
    line is written when the response is ready.
    """

    __slots__ = ("logger",)

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or access_logger

    async def __call__(self, request: Request, next: Next) -> Response:
        start = time.monotonic()
        response = await next(request)
        elapsed_ms = (time.monotonic() - start) * 1000
        self.logger.info(
            '%s "%s %s" %d %.1fms',
            request.client_host,
            request.method,
            request.url,
            response.status,
            elapsed_ms,
        )
        return response
