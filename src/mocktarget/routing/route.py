"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/health``  (is_param=False)
    Param:   ``/{code}``  (is_param=True, param_name="code")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created during app setup, compiled into the router at freeze time.
    ``description`` is the human-readable line shown in the endpoint
    directory and ``mocktarget routes``.
    """

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None
    description: str = ""

    @property
    def is_parameterized(self) -> bool:
        """True if the path contains a ``{param}`` placeholder."""
        return "{" in self.path


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
