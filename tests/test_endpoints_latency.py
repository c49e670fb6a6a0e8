"""Tests for the slow endpoints: simulated delays and the endless request."""

import asyncio

import pytest

from mocktarget.app import App
from mocktarget.config import ServerConfig
from mocktarget.endpoints import create_app
from mocktarget.endpoints.latency import leak_delay_ms
from mocktarget.testing import FixedRandom, FrozenClock, TestClient


class TestDelayedResponses:
    async def test_slow_response_range(self, app: App, rng: FixedRandom) -> None:
        rng.script(0.0, 0.999)
        async with TestClient(app) as client:
            fastest = (await client.get("/slow-response")).json()
            slowest = (await client.get("/slow-response")).json()

        assert fastest["responseTime"] == "2000ms"
        assert slowest["responseTime"] == "4997ms"
        assert fastest["message"] == "Slow response completed"

    async def test_very_slow_range(self, app: App, rng: FixedRandom) -> None:
        rng.script(0.5)
        async with TestClient(app) as client:
            body = (await client.get("/very-slow")).json()

        assert body["responseTime"] == "12500ms"
        assert body["message"] == "Very slow response completed"

    async def test_delay_is_really_awaited(self, clock: FrozenClock) -> None:
        # 2000ms scaled down to 20ms
        app = create_app(
            ServerConfig(time_scale=0.01, access_log=False),
            clock=clock,
            rng=FixedRandom(values=[0.0]),
        )
        async with TestClient(app) as client:
            with pytest.raises(TimeoutError):
                await asyncio.wait_for(client.get("/slow-response"), timeout=0.005)


class TestMemoryLeak:
    @pytest.mark.parametrize(
        ("n", "expected"),
        [(1, 0), (2, 100), (11, 1000), (101, 10000), (500, 10000)],
    )
    def test_delay_formula(self, n: int, expected: int) -> None:
        assert leak_delay_ms(n) == expected

    async def test_delay_grows_per_request(self, app: App) -> None:
        async with TestClient(app) as client:
            bodies = [(await client.get("/memory-leak")).json() for _ in range(3)]

        assert [b["simulatedDelay"] for b in bodies] == ["0ms", "100ms", "200ms"]
        assert [b["requestCount"] for b in bodies] == [1, 2, 3]

    async def test_overlapping_requests_report_their_own_count(self, app: App) -> None:
        async with TestClient(app) as client:
            responses = await asyncio.gather(*(client.get("/memory-leak") for _ in range(4)))

        bodies = [r.json() for r in responses]
        assert sorted(b["requestCount"] for b in bodies) == [1, 2, 3, 4]
        for body in bodies:
            assert body["simulatedDelay"] == f"{leak_delay_ms(body['requestCount'])}ms"


class TestTimeout:
    async def test_never_responds(self, app: App) -> None:
        async with TestClient(app) as client:
            with pytest.raises(TimeoutError):
                await asyncio.wait_for(client.get("/timeout"), timeout=0.05)

    async def test_does_not_block_other_requests(self, app: App) -> None:
        async with TestClient(app) as client:
            pending = asyncio.create_task(client.get("/timeout"))
            await asyncio.sleep(0)

            response = await asyncio.wait_for(client.get("/always-up"), timeout=1.0)
            assert response.status == 200
            assert not pending.done()

            pending.cancel()
            with pytest.raises(asyncio.CancelledError):
                await pending
