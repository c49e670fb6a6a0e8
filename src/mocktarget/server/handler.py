"""ASGI handler: translates ASGI scope/messages to mocktarget types.

The only component that touches raw ASGI requests directly. Converts
scope dicts to typed Request objects, dispatches through middleware and
routing, and sends the Response back through ASGI send().
"""

import inspect
from collections.abc import Callable
from typing import Any

from kida import Environment

from mocktarget._internal.asgi import Scope, Send
from mocktarget._internal.invoke import invoke
from mocktarget.errors import HTTPError
from mocktarget.http.request import Request
from mocktarget.http.response import Response
from mocktarget.middleware.protocol import Next
from mocktarget.routing.route import RouteMatch
from mocktarget.routing.router import Router
from mocktarget.server.errors import handle_http_error, handle_internal_error
from mocktarget.server.negotiation import negotiate
from mocktarget.server.sender import send_response


async def handle_request(
    scope: Scope,
    send: Send,
    *,
    router: Router,
    middleware: tuple[Callable[..., Any], ...],
    error_handlers: dict[int | type, Callable[..., Any]],
    providers: dict[type, Callable[..., Any]] | None = None,
    kida_env: Environment | None = None,
    debug: bool = False,
) -> None:
    """Process a single HTTP request through the full pipeline.

    Routing and handler errors are turned into responses inside the
    middleware chain, so middleware sees (and may decorate) error
    responses such as the 404 payload just like any other.
    """
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    async def dispatch(req: Request) -> Response:
        try:
            match = router.match(req.method, req.path)
            return await _invoke_handler(match, req, providers=providers, kida_env=kida_env)
        except HTTPError as exc:
            return await handle_http_error(exc, req, error_handlers, kida_env)

    # Wrap middleware around the dispatch
    handler: Next = dispatch
    for mw in reversed(middleware):

        async def make_next(req: Request, _mw: Any = mw, _next: Next = handler) -> Response:
            return await _mw(req, _next)

        handler = make_next

    try:
        response = await handler(request)
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, kida_env)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, kida_env, debug)

    await send_response(response, send, method=request.method)


async def _invoke_handler(
    match: RouteMatch,
    request: Request,
    *,
    providers: dict[type, Callable[..., Any]] | None = None,
    kida_env: Environment | None = None,
) -> Response:
    """Call the matched route handler, converting path params and return value."""
    handler = match.route.handler
    request = request.with_path_params(match.path_params)

    kwargs = build_handler_kwargs(handler, request, match.path_params, providers)

    # Call the handler (sync or async, invoke() handles both)
    result = await invoke(handler, **kwargs)

    return negotiate(result, kida_env=kida_env)


def build_handler_kwargs(
    handler: Callable[..., Any],
    request: Request,
    path_params: dict[str, str],
    providers: dict[type, Callable[..., Any]] | None = None,
) -> dict[str, Any]:
    """Inspect handler signature and build kwargs from request + path params.

    Resolution order:
    1. ``request`` parameter (by name or ``Request`` annotation)
    2. Path parameters (by name, as raw strings)
    3. Service providers (by type annotation via ``app.provide()``)

    Parameters that match nothing are left to their defaults.
    """
    sig = inspect.signature(handler, eval_str=True)
    kwargs: dict[str, Any] = {}

    for name, param in sig.parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
        elif name in path_params:
            kwargs[name] = path_params[name]
        elif (
            providers
            and param.annotation is not inspect.Parameter.empty
            and param.annotation in providers
        ):
            kwargs[name] = providers[param.annotation]()

    return kwargs
