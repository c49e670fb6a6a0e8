"""Immutable HTTP request.

Every mock endpoint is a GET that ignores its body, so a request is just
the frozen metadata from the ASGI scope.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from mocktarget.http.headers import Headers
from mocktarget.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Built once per request by ``from_asgi()``; routing adds the captured
    path parameters through ``with_path_params()``.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    path_params: dict[str, str]
    client: tuple[str, int] | None

    @property
    def url(self) -> str:
        """Request path plus query string."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    @property
    def client_host(self) -> str:
        """Peer address for logging, ``"-"`` when the server didn't report one."""
        if self.client is None:
            return "-"
        return self.client[0]

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Return a copy carrying the router's captured parameters."""
        return replace(self, path_params=path_params)

    @classmethod
    def from_asgi(
        cls,
        scope: dict[str, Any],
        path_params: dict[str, str] | None = None,
    ) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            path_params=path_params or {},
            client=tuple(client) if client else None,
        )
