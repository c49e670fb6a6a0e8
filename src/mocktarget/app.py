"""mocktarget application class.

Mutable during setup (route registration, providers, middleware).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

import random
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from kida import Environment

from mocktarget._internal.asgi import Receive, Scope, Send
from mocktarget._internal.invoke import invoke
from mocktarget._internal.types import ErrorHandler, Handler, Hook
from mocktarget.config import ServerConfig
from mocktarget.middleware.protocol import Middleware
from mocktarget.routing.route import Route
from mocktarget.routing.router import Router
from mocktarget.server.handler import handle_request
from mocktarget.state import Clock, StateStore
from mocktarget.templating import create_environment


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    path: str
    handler: Handler
    methods: list[str] | None
    name: str | None
    description: str


class App:
    """The mock server application.

    Owns the endpoint ``StateStore``, the ``Clock`` and the shared random
    source, and hands them to handlers by type annotation::

        app = App()

        @app.route("/flapping", description="Alternates between up and down")
        def flapping(store: StateStore):
            state = store.get_or_create("/flapping")
            ...

    Thread safety:
        The setup phase is single-threaded. The freeze transition uses a
        Lock + double-check so exactly one thread compiles the app, even
        when several pounce worker threads take their first request at once.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_kida_env",
        "_middleware",
        "_middleware_list",
        "_pending_routes",
        "_providers",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "clock",
        "config",
        "rng",
        "state",
    )

    def __init__(
        self,
        config: ServerConfig | None = None,
        *,
        state: StateStore | None = None,
        clock: Clock | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config: ServerConfig = config or ServerConfig()
        if clock is None:
            clock = state.clock if state is not None else Clock()
        self.clock: Clock = clock
        self.state: StateStore = state if state is not None else StateStore(clock)
        self.rng: random.Random = rng if rng is not None else random.Random(self.config.seed)

        self._pending_routes: list[_PendingRoute] = []
        self._middleware_list: list[Middleware] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._startup_hooks: list[Hook] = []
        self._shutdown_hooks: list[Hook] = []
        self._providers: dict[type, Callable[..., Any]] = {
            ServerConfig: lambda: self.config,
            StateStore: lambda: self.state,
            Clock: lambda: self.clock,
            random.Random: lambda: self.rng,
            Router: lambda: self._router,
        }
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state: set during _freeze()
        self._router: Router | None = None
        self._middleware: tuple[Callable[..., Any], ...] = ()
        self._kida_env: Environment | None = None

    # -- Route registration --

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
        description: str = "",
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: URL path. A trailing ``{param}`` segment turns the route
                into a prefix route that claims every path below it.
            methods: HTTP methods. Defaults to ``["GET"]``.
            name: Optional route name.
            description: One-line summary for the endpoint directory.
        """

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            self._pending_routes.append(_PendingRoute(path, func, methods, name, description))
            return func

        return decorator

    def add_route(
        self,
        path: str,
        handler: Handler,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
        description: str = "",
    ) -> None:
        """Register a route handler without decorator syntax."""
        self.route(path, methods=methods, name=name, description=description)(handler)

    # -- Service injection --

    def provide(self, annotation: type, factory: Callable[..., Any]) -> None:
        """Register a provider factory for dependency injection.

        When a handler parameter's type annotation matches *annotation*,
        the factory is called (with no arguments) and the result injected.
        ``ServerConfig``, ``StateStore``, ``Clock``, ``random.Random`` and
        the compiled ``Router`` are provided out of the box; registering one of them replaces it.
        """
        self._check_not_frozen()
        self._providers[annotation] = factory

    # -- Error handlers --

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler via decorator."""

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- Middleware --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware to the pipeline."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    # -- Lifecycle hooks --

    def on_startup(self, func: Hook) -> Hook:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        before the server begins accepting HTTP requests.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Hook) -> Hook:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Introspection --

    @property
    def routes(self) -> list[Route]:
        """Compiled routes in registration order (freezes the app)."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router.routes

    @property
    def concrete_paths(self) -> list[str]:
        """Registered paths without parameters (freezes the app)."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router.concrete_paths

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app with pounce.

        ``config.debug`` selects the single-worker dev server with reload.
        Otherwise the production server runs ``config.workers`` workers with
        the logging and connection limits from the config.
        """
        self._ensure_frozen()
        cfg = self.config
        bind_host = host or cfg.host
        bind_port = port or cfg.port

        if cfg.debug:
            from mocktarget.server.dev import run_dev_server

            run_dev_server(self, bind_host, bind_port, reload=True, log_level=cfg.log_level)
            return

        from mocktarget.server.production import run_production_server

        limits = {
            "max_connections": cfg.max_connections,
            "backlog": cfg.backlog,
            "keep_alive_timeout": cfg.keep_alive_timeout,
            "request_timeout": cfg.request_timeout,
        }
        run_production_server(
            self,
            host=bind_host,
            port=bind_port,
            workers=cfg.workers,
            lifecycle_logging=cfg.lifecycle_logging,
            log_format=cfg.log_format,
            log_level=cfg.log_level,
            **limits,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point: lifespan events here, HTTP to the pipeline."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._router is not None
        await handle_request(
            scope,
            send,
            router=self._router,
            middleware=self._middleware,
            error_handlers=self._error_handlers,
            providers=self._providers,
            kida_env=self._kida_env,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Compile the app, then answer startup and shutdown from the server.

        A failing startup hook is reported as ``lifespan.startup.failed``
        with the exception text, and the loop ends there.
        """
        self._ensure_frozen()

        while True:
            event = (await receive())["type"]
            if event == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif event == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        """Run startup hooks in registration order."""
        for hook in self._startup_hooks:
            await invoke(hook)

    async def shutdown(self) -> None:
        """Run shutdown hooks in registration order."""
        for hook in self._shutdown_hooks:
            await invoke(hook)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Compile once. Racing first requests wait on the lock, then see ``_frozen``."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        # 1. Compile route table
        router = Router()
        for pending in self._pending_routes:
            methods = frozenset(m.upper() for m in (pending.methods or ["GET"]))
            router.add(
                Route(
                    path=pending.path,
                    handler=pending.handler,
                    methods=methods,
                    name=pending.name,
                    description=pending.description,
                )
            )
        router.compile()
        self._router = router

        # 2. Capture middleware as immutable tuple. Built-ins wrap the user
        #    list: the access log outermost so it records the final status,
        #    then the X-Powered-By stamp so error payloads carry it too.
        from mocktarget.middleware.builtin import AccessLogMiddleware, PoweredByMiddleware

        middleware_list: list[Callable[..., Any]] = []
        if self.config.access_log:
            middleware_list.append(AccessLogMiddleware())
        if self.config.server_name:
            middleware_list.append(PoweredByMiddleware(self.config.server_name))
        middleware_list.extend(self._middleware_list)
        self._middleware = tuple(middleware_list)

        # 3. kida environment for HTML endpoints
        self._kida_env = create_environment()

        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "App is frozen: register routes, hooks and providers before serving."
            raise RuntimeError(msg)
