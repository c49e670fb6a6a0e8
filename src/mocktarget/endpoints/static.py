"""Endpoints with fixed behavior: the same status on every call."""

import time
from datetime import timedelta

from mocktarget.config import ServerConfig
from mocktarget.endpoints._registry import Endpoint, isoformat
from mocktarget.http.response import TEXT_CONTENT_TYPE, Response
from mocktarget.state import Clock

HEALTH_VERSION = "1.0.0"
MAINTENANCE_WINDOW = timedelta(hours=1)

_started = time.monotonic()


def always_up(clock: Clock):
    return {
        "status": "ok",
        "message": "This endpoint is always available",
        "timestamp": isoformat(clock.now()),
    }


def always_down(clock: Clock):
    return {
        "status": "error",
        "message": "This endpoint is always down",
        "timestamp": isoformat(clock.now()),
    }, 500


def maintenance(clock: Clock):
    now = clock.now()
    return {
        "status": "maintenance",
        "message": "Service is under maintenance",
        "expectedBackAt": isoformat(now + MAINTENANCE_WINDOW),
        "timestamp": isoformat(now),
    }, 503


def health(clock: Clock):
    """Detailed health payload; ``uptime`` is seconds since the process started."""
    return {
        "status": "healthy",
        "version": HEALTH_VERSION,
        "uptime": round(time.monotonic() - _started, 3),
        "timestamp": isoformat(clock.now()),
        "checks": {
            "database": "connected",
            "cache": "connected",
            "queue": "connected",
        },
    }


def tcp_check(clock: Clock, config: ServerConfig):
    return {
        "status": "ok",
        "message": "TCP connection would succeed",
        "port": config.port,
        "timestamp": isoformat(clock.now()),
    }


def ping() -> Response:
    return Response(body="pong", content_type=TEXT_CONTENT_TYPE)


def docker_healthy(clock: Clock):
    return {
        "status": "healthy",
        "container": "app-container",
        "state": "running",
        "health": {
            "status": "healthy",
            "failingStreak": 0,
        },
        "timestamp": isoformat(clock.now()),
    }


def docker_unhealthy(clock: Clock):
    return {
        "status": "unhealthy",
        "container": "db-container",
        "state": "running",
        "health": {
            "status": "unhealthy",
            "failingStreak": 5,
            "log": "Connection refused",
        },
        "timestamp": isoformat(clock.now()),
    }, 500


ENDPOINTS: tuple[Endpoint, ...] = (
    Endpoint("/always-up", always_up, "Always returns 200 OK"),
    Endpoint("/always-down", always_down, "Always returns 500 error"),
    Endpoint("/maintenance", maintenance, "Returns 503 maintenance mode"),
    Endpoint("/health", health, "Detailed health check response"),
    Endpoint("/tcp-check", tcp_check, "TCP port check simulation"),
    Endpoint("/ping", ping, "Simple ping/pong"),
    Endpoint("/docker/healthy", docker_healthy, "Healthy container status"),
    Endpoint("/docker/unhealthy", docker_unhealthy, "Unhealthy container status"),
)
