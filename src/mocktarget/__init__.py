"""mocktarget: a mock HTTP server of misbehaving monitoring targets.

Endpoints that are always up, always down, flaky, slow, rate-limited,
and so on, for exercising an uptime monitor such as Uptime Kuma.

Basic usage::

    from mocktarget import create_app

    app = create_app()
    app.run()

Or from the shell::

    mocktarget run --port 3000
"""

__version__ = "1.0.0"
__all__ = [
    "App",
    "Clock",
    "ConfigurationError",
    "EndpointState",
    "HTTPError",
    "MethodNotAllowed",
    "MockTargetError",
    "NotFound",
    "Request",
    "Response",
    "ServerConfig",
    "StateStore",
    "Template",
    "create_app",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import mocktarget`` fast while providing a clean top-level API.
    """
    if name == "App":
        from mocktarget.app import App

        return App

    if name == "create_app":
        from mocktarget.endpoints import create_app

        return create_app

    if name == "ServerConfig":
        from mocktarget.config import ServerConfig

        return ServerConfig

    if name == "Request":
        from mocktarget.http.request import Request

        return Request

    if name == "Response":
        from mocktarget.http.response import Response

        return Response

    if name == "Template":
        from mocktarget.templating import Template

        return Template

    if name in ("Clock", "EndpointState", "StateStore"):
        from mocktarget import state as _state

        return getattr(_state, name)

    if name in (
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "MockTargetError",
        "NotFound",
    ):
        from mocktarget import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
