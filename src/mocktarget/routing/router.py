"""Compiled router with exact-path lookup and prefix delegation.

Two tiers, checked in order:

1. Exact match on the full request path (dict lookup).
2. Parameterized routes such as ``/status/{code}``. Each one owns the
   static prefix in front of its parameter (``/status/``) and claims every
   request path that starts with it, whatever the suffix. The suffix is
   handed to the handler as the path parameter; the handler decides what
   to make of it.

Longer prefixes win over shorter ones.
"""

from dataclasses import dataclass

from mocktarget.errors import ConfigurationError, MethodNotAllowed, NotFound
from mocktarget.routing.route import PathSegment, Route, RouteMatch


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/health"         -> [PathSegment("health")]
        "/docker/healthy" -> [PathSegment("docker"), PathSegment("healthy")]
        "/status/{code}"  -> [PathSegment("status"), PathSegment("{code}", is_param=True, ...)]

    Raises:
        ConfigurationError: If the path uses ``<param>`` or ``:param``
            placeholders instead of ``{param}``.
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if (part.startswith("<") and part.endswith(">")) or part.startswith(":"):
            msg = (
                f"Route path {path!r} uses an unsupported placeholder {part!r}. "
                "Use {param} syntax, e.g. /status/{code}."
            )
            raise ConfigurationError(msg)
        if part.startswith("{") and part.endswith("}"):
            segments.append(PathSegment(value=part, is_param=True, param_name=part[1:-1]))
        else:
            segments.append(PathSegment(value=part))
    return segments


@dataclass(slots=True)
class _PrefixEdge:
    """A parameterized route family keyed by its static prefix."""

    prefix: str
    param_name: str
    routes_by_method: dict[str, Route]


class Router:
    """Compiled router.

    Usage::

        router = Router()
        router.add(Route("/health", handler, frozenset({"GET"})))
        router.add(Route("/status/{code}", handler, frozenset({"GET"})))
        router.compile()
        match = router.match("GET", "/status/503")
        match.path_params  # {"code": "503"}
    """

    __slots__ = ("_compiled", "_exact", "_order", "_prefixed")

    def __init__(self) -> None:
        self._exact: dict[str, dict[str, Route]] = {}
        self._prefixed: list[_PrefixEdge] = []
        self._order: list[Route] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        if not route.path.startswith("/"):
            msg = f"Route path must start with '/': {route.path!r}"
            raise ConfigurationError(msg)

        segments = parse_path(route.path)
        param_positions = [i for i, seg in enumerate(segments) if seg.is_param]

        if not param_positions:
            by_method = self._exact.setdefault(route.path, {})
            for method in route.methods:
                by_method[method] = route
        else:
            if param_positions != [len(segments) - 1]:
                msg = (
                    f"Route path {route.path!r}: only a single trailing parameter "
                    "is supported."
                )
                raise ConfigurationError(msg)
            static = "/".join(seg.value for seg in segments[:-1])
            prefix = f"/{static}/" if static else "/"
            edge = self._find_edge(prefix)
            if edge is None:
                edge = _PrefixEdge(
                    prefix=prefix,
                    param_name=segments[-1].param_name or "param",
                    routes_by_method={},
                )
                self._prefixed.append(edge)
            for method in route.methods:
                edge.routes_by_method[method] = route

        self._order.append(route)

    def _find_edge(self, prefix: str) -> _PrefixEdge | None:
        for edge in self._prefixed:
            if edge.prefix == prefix:
                return edge
        return None

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in registration order."""
        return list(self._order)

    @property
    def concrete_paths(self) -> list[str]:
        """Paths of routes without parameters, in registration order.

        Parameterized templates like ``/status/{code}`` are left out;
        a path registered for several methods appears once.
        """
        seen: set[str] = set()
        paths: list[str] = []
        for route in self._order:
            if route.is_parameterized or route.path in seen:
                continue
            seen.add(route.path)
            paths.append(route.path)
        return paths

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._prefixed.sort(key=lambda edge: len(edge.prefix), reverse=True)
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request path and method against compiled routes.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        by_method = self._exact.get(path)
        params: dict[str, str] = {}

        if by_method is None:
            for edge in self._prefixed:
                if path.startswith(edge.prefix):
                    by_method = edge.routes_by_method
                    params = {edge.param_name: path[len(edge.prefix) :]}
                    break

        if by_method is None:
            raise NotFound(f"No route matches {method} {path!r}")

        route = by_method.get(method)
        if route is None:
            raise MethodNotAllowed(frozenset(by_method))
        return RouteMatch(route=route, path_params=params)
