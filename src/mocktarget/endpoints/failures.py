"""Endpoints that fail on purpose: by chance, by count, or by the clock.

The counted ones (``/intermittent``, ``/flapping``, ``/rate-limited``)
keep their memory in the app's ``StateStore``. Each call to
``get_or_create()`` counts as one request and hands back a private copy,
so the checks below see this request's own post-increment count.
"""

import logging
import random

from mocktarget.endpoints._registry import Endpoint, isoformat
from mocktarget.state import Clock, StateStore

logger = logging.getLogger("mocktarget.state")

RANDOM_FAILURE_RATE = 0.2
FREQUENT_FAILURE_RATE = 0.5

INTERMITTENT_EVERY = 3

RATE_LIMIT = 10
RATE_WINDOW_SECONDS = 60

# (start, end) minute-of-hour ranges, end exclusive
DOWNTIME_WINDOWS = ((0, 5), (30, 35))

# Probability that each sub-service is down on a given call
OUTAGE_RATES: dict[str, float] = {
    "api": 0.1,
    "database": 0.3,
    "cache": 0.2,
    "cdn": 0.0,
    "auth": 0.15,
}


def _chance_failure(rate: float, message: str, rng: random.Random, clock: Clock):
    if rng.random() < rate:
        return {
            "status": "error",
            "message": message,
            "timestamp": isoformat(clock.now()),
        }, 500
    return {
        "status": "ok",
        "message": "Request succeeded",
        "timestamp": isoformat(clock.now()),
    }


def random_failures(rng: random.Random, clock: Clock):
    return _chance_failure(RANDOM_FAILURE_RATE, "Random failure occurred", rng, clock)


def frequent_failures(rng: random.Random, clock: Clock):
    return _chance_failure(FREQUENT_FAILURE_RATE, "Frequent failure occurred", rng, clock)


def intermittent(store: StateStore, clock: Clock):
    state = store.get_or_create("/intermittent")
    if state.request_count % INTERMITTENT_EVERY == 0:
        return {
            "status": "error",
            "message": "Every 3rd request fails",
            "requestNumber": state.request_count,
            "timestamp": isoformat(clock.now()),
        }, 500
    return {
        "status": "ok",
        "message": "Request succeeded",
        "requestNumber": state.request_count,
        "timestamp": isoformat(clock.now()),
    }


def flapping(store: StateStore, clock: Clock):
    """Strict alternation: the first call is down, the second up, and so on."""
    state = store.get_or_create("/flapping")
    is_down = (state.request_count - 1) % 2 == 0
    store.set_down("/flapping", is_down)
    if is_down:
        return {
            "status": "error",
            "message": "Service is flapping (currently down)",
            "requestNumber": state.request_count,
            "timestamp": isoformat(clock.now()),
        }, 500
    return {
        "status": "ok",
        "message": "Service is flapping (currently up)",
        "requestNumber": state.request_count,
        "timestamp": isoformat(clock.now()),
    }


def is_scheduled_downtime(minute: int) -> bool:
    """True when *minute* (of the hour) falls in a maintenance window."""
    return any(start <= minute < end for start, end in DOWNTIME_WINDOWS)


def scheduled_down(clock: Clock):
    now = clock.now()
    if is_scheduled_downtime(now.minute):
        return {
            "status": "scheduled_downtime",
            "message": "Scheduled maintenance window",
            "nextUptime": "In a few minutes",
            "timestamp": isoformat(now),
        }, 503
    return {
        "status": "ok",
        "message": "Service is operational",
        "timestamp": isoformat(now),
    }


def rate_limited(store: StateStore, clock: Clock):
    """Allow ``RATE_LIMIT`` requests per window, then answer 429.

    A request arriving more than ``RATE_WINDOW_SECONDS`` after the one
    before it opens a new window.
    """
    state = store.get_or_create("/rate-limited", window=RATE_WINDOW_SECONDS)
    gap = state.seconds_since_previous()
    if gap is not None and gap > RATE_WINDOW_SECONDS:
        logger.debug("rate limit window reset after %.1fs idle", gap)

    if state.request_count > RATE_LIMIT:
        body = {
            "status": "rate_limited",
            "message": "Too many requests",
            "retryAfter": RATE_WINDOW_SECONDS,
            "timestamp": isoformat(clock.now()),
        }
        return body, 429, {"Retry-After": str(RATE_WINDOW_SECONDS)}
    return {
        "status": "ok",
        "message": "Request succeeded",
        "remainingRequests": RATE_LIMIT - state.request_count,
        "timestamp": isoformat(clock.now()),
    }


def sample_services(rng: random.Random) -> dict[str, bool]:
    """Draw an up/down flag for every sub-service, in ``OUTAGE_RATES`` order."""
    services: dict[str, bool] = {}
    for name, rate in OUTAGE_RATES.items():
        # cdn never fails and never consumes a draw
        services[name] = True if rate == 0 else rng.random() > rate
    return services


def summarize_outage(services: dict[str, bool]) -> tuple[str, str, int]:
    """Aggregate sub-service flags into (status, message, HTTP status).

    Only a complete outage is a 500; any surviving service keeps the
    endpoint at 200.
    """
    if all(services.values()):
        return "ok", "All services operational", 200
    if not any(services.values()):
        return "error", "Complete outage", 500
    return "partial", "Partial outage detected", 200


def partial_outage(rng: random.Random, clock: Clock):
    services = sample_services(rng)
    status, message, http_status = summarize_outage(services)
    body = {
        "status": status,
        "message": message,
        "services": services,
        "timestamp": isoformat(clock.now()),
    }
    return body, http_status


ENDPOINTS: tuple[Endpoint, ...] = (
    Endpoint("/random-failures", random_failures, "20% chance of failure"),
    Endpoint("/frequent-failures", frequent_failures, "50% chance of failure"),
    Endpoint("/intermittent", intermittent, "Fails every 3rd request"),
    Endpoint("/flapping", flapping, "Alternates between up and down"),
    Endpoint("/scheduled-down", scheduled_down, "Down during minutes 0-5 and 30-35"),
    Endpoint("/partial-outage", partial_outage, "Random partial service outage"),
    Endpoint("/rate-limited", rate_limited, "Returns 429 after 10 req/min"),
)
