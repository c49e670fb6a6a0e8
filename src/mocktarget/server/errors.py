"""Error handling pipeline for mocktarget requests.

Maps HTTPError exceptions and unexpected failures to appropriate
Response objects, using registered error handlers or plain defaults.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from kida import Environment

from mocktarget.errors import HTTPError
from mocktarget.http.request import Request
from mocktarget.http.response import TEXT_CONTENT_TYPE, Response
from mocktarget.server.negotiation import negotiate

logger = logging.getLogger("mocktarget.server")


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
    kida_env: Environment | None,
) -> Response:
    """Invoke a registered error handler with introspected arguments.

    Error handlers may accept zero, one (request), or two (request, exc) args.
    Supports both sync and async error handlers.
    """
    sig = inspect.signature(handler)
    params = list(sig.parameters.values())

    if len(params) >= 2:
        result = handler(request, exc)
    elif len(params) == 1:
        result = handler(request)
    else:
        result = handler()

    if inspect.isawaitable(result):
        result = await result

    return negotiate(result, kida_env=kida_env)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    kida_env: Environment | None,
) -> Response:
    """Map an HTTPError to a Response using registered error handlers."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    # Try exact exception type, then status code
    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        response = await call_error_handler(handler, request, exc, kida_env)
        # Preserve the HTTP status from the exception unless the handler
        # explicitly chose its own
        if response.status == 200:
            response = response.with_status(exc.status)
    else:
        response = Response(
            body=exc.detail or f"Error {exc.status}",
            status=exc.status,
            content_type=TEXT_CONTENT_TYPE,
        )

    for name, value in exc.headers:
        if response.header(name) is None:
            response = response.with_header(name, value)
    return response


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    kida_env: Environment | None,
    debug: bool,
) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(500) or error_handlers.get(type(exc))
    if handler is not None:
        return (await call_error_handler(handler, request, exc, kida_env)).with_status(500)

    body = "Internal Server Error"
    if debug:
        body = f"{body}: {type(exc).__name__}: {exc}"
    return Response(body=body, status=500, content_type=TEXT_CONTENT_TYPE)
