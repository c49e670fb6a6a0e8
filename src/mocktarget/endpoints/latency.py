"""Endpoints that take their time answering.

Every wait goes through ``anyio.sleep`` so only the request's own task
is suspended; other connections keep being served. Delays are scaled by
``ServerConfig.time_scale`` (tests run with 0).
"""

import random

import anyio

from mocktarget.config import ServerConfig
from mocktarget.endpoints._registry import Endpoint, isoformat
from mocktarget.state import Clock, StateStore

SLOW_RANGE_MS = (2000, 5000)
VERY_SLOW_RANGE_MS = (10000, 15000)

LEAK_STEP_MS = 100
LEAK_CAP_MS = 10000


async def simulate_delay(delay_ms: float, config: ServerConfig) -> None:
    await anyio.sleep(delay_ms / 1000 * config.time_scale)


def leak_delay_ms(request_count: int) -> int:
    """Delay for the Nth call: nothing on the first, +100ms per call after, capped."""
    return min((request_count - 1) * LEAK_STEP_MS, LEAK_CAP_MS)


async def _delayed(
    bounds: tuple[int, int],
    message: str,
    rng: random.Random,
    clock: Clock,
    config: ServerConfig,
):
    low, high = bounds
    delay = low + rng.random() * (high - low)
    await simulate_delay(delay, config)
    return {
        "status": "ok",
        "message": message,
        "responseTime": f"{round(delay)}ms",
        "timestamp": isoformat(clock.now()),
    }


async def slow_response(rng: random.Random, clock: Clock, config: ServerConfig):
    return await _delayed(SLOW_RANGE_MS, "Slow response completed", rng, clock, config)


async def very_slow(rng: random.Random, clock: Clock, config: ServerConfig):
    return await _delayed(VERY_SLOW_RANGE_MS, "Very slow response completed", rng, clock, config)


async def timeout():
    """Never answers. The client is expected to give up and hang up."""
    await anyio.sleep_forever()


async def memory_leak(store: StateStore, clock: Clock, config: ServerConfig):
    count = store.get_or_create("/memory-leak").request_count
    delay = leak_delay_ms(count)
    await simulate_delay(delay, config)
    return {
        "status": "ok",
        "message": "Response with simulated memory pressure",
        "simulatedDelay": f"{delay}ms",
        "requestCount": count,
        "timestamp": isoformat(clock.now()),
    }


ENDPOINTS: tuple[Endpoint, ...] = (
    Endpoint("/slow-response", slow_response, "2-5 second delay"),
    Endpoint("/very-slow", very_slow, "10-15 second delay (may timeout)"),
    Endpoint("/timeout", timeout, "Never responds (tests timeout handling)"),
    Endpoint("/memory-leak", memory_leak, "Gets slower with each request"),
)
