"""The endpoint directory at ``/`` and the JSON error payloads."""

from mocktarget.endpoints._registry import isoformat
from mocktarget.errors import MethodNotAllowed
from mocktarget.routing.router import Router
from mocktarget.state import Clock

SERVER_TITLE = "Uptime Kuma Mock Server"
SERVER_DESCRIPTION = "Test endpoints for various monitoring scenarios"
USAGE = "Configure Uptime Kuma monitors to point to these endpoints"


def directory(router: Router):
    """List every registered route with its description, ``/`` included."""
    return {
        "name": SERVER_TITLE,
        "description": SERVER_DESCRIPTION,
        "endpoints": {route.path: route.description for route in router.routes},
        "usage": USAGE,
    }


def not_found_payload(path: str, available: list[str], clock: Clock) -> dict:
    return {
        "status": "not_found",
        "message": f"Endpoint {path} not found",
        "availableEndpoints": available,
        "timestamp": isoformat(clock.now()),
    }


def method_not_allowed_payload(
    method: str, path: str, exc: MethodNotAllowed, clock: Clock
) -> dict:
    allowed = dict(exc.headers).get("Allow", "")
    return {
        "status": "method_not_allowed",
        "message": f"Method {method} not allowed for {path}",
        "allowedMethods": [m for m in allowed.split(", ") if m],
        "timestamp": isoformat(clock.now()),
    }
