"""Middleware: Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    AccessLogMiddleware -- One log line per completed request
    PoweredByMiddleware -- X-Powered-By header on JSON responses
"""

from mocktarget.middleware.builtin import AccessLogMiddleware, PoweredByMiddleware
from mocktarget.middleware.protocol import Middleware, Next

__all__ = [
    "AccessLogMiddleware",
    "Middleware",
    "Next",
    "PoweredByMiddleware",
]
