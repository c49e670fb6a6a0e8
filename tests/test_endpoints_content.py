"""Tests for the payload-oriented endpoints."""

import pytest

from mocktarget.app import App
from mocktarget.testing import FixedRandom, TestClient


class TestDegraded:
    async def test_metric_bounds(self, app: App, rng: FixedRandom) -> None:
        rng.script(0.0, 0.0, 0.0)
        async with TestClient(app) as client:
            low = (await client.get("/degraded")).json()
        rng.script(0.999, 0.999, 0.999)
        async with TestClient(app) as client:
            high = (await client.get("/degraded")).json()

        assert low["status"] == "degraded"
        assert low["metrics"] == {"responseTime": 500, "cpuUsage": 70, "memoryUsage": 80}
        assert high["metrics"] == {"responseTime": 1499, "cpuUsage": 95, "memoryUsage": 95}


class TestKeywordCheck:
    @pytest.mark.parametrize(
        ("draw", "keyword"),
        [(0.0, "OPERATIONAL"), (0.4, "ALL_SYSTEMS_GO"), (0.9, "STATUS_OK")],
    )
    async def test_keyword_choice(
        self, app: App, rng: FixedRandom, draw: float, keyword: str
    ) -> None:
        rng.script(draw)
        async with TestClient(app) as client:
            body = (await client.get("/keyword-check")).json()

        assert body["status"] == "OPERATIONAL"
        assert body["keyword"] == keyword


class TestHtmlStatus:
    async def test_up(self, app: App, rng: FixedRandom) -> None:
        rng.script(0.5)
        async with TestClient(app) as client:
            response = await client.get("/html-status")

        assert response.status == 200
        assert response.content_type.startswith("text/html")
        assert "<!-- STATUS: UP -->" in response.text
        assert '<div class="status up">' in response.text
        assert "<strong>Operational</strong>" in response.text
        assert "2024-05-01T12:10:00.000Z" in response.text
        assert response.header("x-powered-by") is None

    async def test_down(self, app: App, rng: FixedRandom) -> None:
        rng.script(0.1)
        async with TestClient(app) as client:
            response = await client.get("/html-status")

        assert response.status == 200
        assert "<!-- STATUS: DOWN -->" in response.text
        assert "<strong>Outage</strong>" in response.text


class TestCertCheck:
    async def test_warning_below_seven_days(self, app: App, rng: FixedRandom) -> None:
        rng.script(6.9 / 90)
        async with TestClient(app) as client:
            body = (await client.get("/cert-check")).json()

        assert body["status"] == "warning"
        assert body["certificate"]["daysUntilExpiry"] == 6

    async def test_ok_otherwise(self, app: App, rng: FixedRandom) -> None:
        rng.script(0.5)
        async with TestClient(app) as client:
            body = (await client.get("/cert-check")).json()

        cert = body["certificate"]
        assert body["status"] == "ok"
        assert cert["daysUntilExpiry"] == 45
        assert cert["subject"] == "*.example.com"
        assert cert["issuer"] == "Let's Encrypt"
        assert cert["validFrom"] == "2024-04-01T12:10:00.000Z"
        assert cert["validUntil"] == "2024-06-15T12:10:00.000Z"
