"""The mock endpoints and the factory that serves them.

``REGISTRY`` is the full endpoint table, grouped by behavior. ``create_app()``
registers it on a fresh ``App`` together with the JSON 404/405 payloads
and the startup banner::

    from mocktarget.endpoints import create_app

    app = create_app()
    app.run()
"""

import logging
import random

from mocktarget.app import App
from mocktarget.config import ServerConfig
from mocktarget.endpoints import content, failures, latency, static, status
from mocktarget.endpoints._registry import Endpoint, isoformat
from mocktarget.endpoints.directory import (
    directory,
    method_not_allowed_payload,
    not_found_payload,
)
from mocktarget.errors import MethodNotAllowed, NotFound
from mocktarget.http.request import Request
from mocktarget.state import Clock, StateStore

logger = logging.getLogger("mocktarget.server")

REGISTRY: tuple[Endpoint, ...] = (
    *static.ENDPOINTS,
    *failures.ENDPOINTS,
    *latency.ENDPOINTS,
    *content.ENDPOINTS,
    *status.ENDPOINTS,
    Endpoint("/", directory, "This directory of endpoints"),
)


def create_app(
    config: ServerConfig | None = None,
    *,
    state: StateStore | None = None,
    clock: Clock | None = None,
    rng: random.Random | None = None,
) -> App:
    """Build an App serving every endpoint in ``REGISTRY``.

    With no *config*, settings come from the environment
    (``ServerConfig.from_env()``). *state*, *clock* and *rng* replace the
    app's own instances; tests pass a frozen clock and a fixed random source.
    """
    if config is None:
        config = ServerConfig.from_env()
    app = App(config, state=state, clock=clock, rng=rng)

    for endpoint in REGISTRY:
        app.add_route(endpoint.path, endpoint.handler, description=endpoint.description)

    @app.error(NotFound)
    def not_found(request: Request):
        return not_found_payload(request.path, app.concrete_paths, app.clock), 404

    @app.error(MethodNotAllowed)
    def method_not_allowed(request: Request, exc: MethodNotAllowed):
        return method_not_allowed_payload(request.method, request.path, exc, app.clock), 405

    @app.on_startup
    def announce() -> None:
        base = f"http://localhost:{app.config.port}"
        logger.info("Uptime Kuma mock server listening on %s", base)
        logger.info("Visit %s/ for available endpoints", base)
        for path in app.concrete_paths:
            logger.info("  -> %s%s", base, path)

    return app


__all__ = ["REGISTRY", "Endpoint", "create_app", "isoformat"]
