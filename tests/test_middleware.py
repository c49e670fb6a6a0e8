"""Tests for mocktarget.middleware: X-Powered-By stamping and access log."""

import logging

import pytest

from mocktarget.app import App
from mocktarget.config import ServerConfig
from mocktarget.http.request import Request
from mocktarget.http.response import TEXT_CONTENT_TYPE, Response
from mocktarget.middleware import AccessLogMiddleware, Next, PoweredByMiddleware
from mocktarget.testing import TestClient


def _app(**config: object) -> App:
    app = App(ServerConfig(**config))
    app.add_route("/json", lambda: {"status": "ok"})
    app.add_route("/text", lambda: Response("pong", content_type=TEXT_CONTENT_TYPE))
    return app


class TestPoweredBy:
    @pytest.mark.asyncio
    async def test_json_responses_are_stamped(self) -> None:
        async with TestClient(_app(access_log=False)) as client:
            response = await client.get("/json")

        assert response.header("x-powered-by") == "uptime-kuma-themes-mock-server"

    @pytest.mark.asyncio
    async def test_plain_text_is_not_stamped(self) -> None:
        async with TestClient(_app(access_log=False)) as client:
            response = await client.get("/text")

        assert response.header("x-powered-by") is None

    @pytest.mark.asyncio
    async def test_custom_name(self) -> None:
        async with TestClient(_app(access_log=False, server_name="acme")) as client:
            response = await client.get("/json")

        assert response.header("x-powered-by") == "acme"

    @pytest.mark.asyncio
    async def test_disabled_with_empty_name(self) -> None:
        async with TestClient(_app(access_log=False, server_name="")) as client:
            response = await client.get("/json")

        assert response.header("x-powered-by") is None

    @pytest.mark.asyncio
    async def test_disabled_from_environment(self) -> None:
        config = ServerConfig.from_env({"MOCK_SERVER_NAME": ""}, access_log=False)
        app = App(config)
        app.add_route("/json", lambda: {"status": "ok"})

        async with TestClient(app) as client:
            response = await client.get("/json")

        assert response.header("x-powered-by") is None

    @pytest.mark.asyncio
    async def test_existing_header_kept(self) -> None:
        mw = PoweredByMiddleware("mock")

        async def handler(request: Request) -> Response:
            return Response("{}", content_type="application/json").with_header(
                "X-Powered-By", "upstream"
            )

        response = await mw(None, handler)  # type: ignore[arg-type]

        assert response.header("X-Powered-By") == "upstream"
        assert len(response.headers) == 1


class TestAccessLog:
    @pytest.mark.asyncio
    async def test_logs_one_line_per_request(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="mocktarget.access")

        async with TestClient(_app()) as client:
            await client.get("/json?verbose=1")

        records = [r for r in caplog.records if r.name == "mocktarget.access"]
        assert len(records) == 1
        message = records[0].getMessage()
        assert '"GET /json?verbose=1" 200' in message
        assert message.startswith("127.0.0.1 ")

    @pytest.mark.asyncio
    async def test_logs_error_status(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="mocktarget.access")

        async with TestClient(_app()) as client:
            await client.get("/missing")

        records = [r for r in caplog.records if r.name == "mocktarget.access"]
        assert '"GET /missing" 404' in records[0].getMessage()

    @pytest.mark.asyncio
    async def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("tests.access")
        caplog.set_level(logging.INFO, logger="tests.access")
        mw = AccessLogMiddleware(logger)
        app = App(ServerConfig(access_log=False))
        app.add_route("/json", lambda: {"ok": True})
        app.add_middleware(mw)

        async with TestClient(app) as client:
            await client.get("/json")

        assert [r.name for r in caplog.records] == ["tests.access"]


class TestUserMiddleware:
    @pytest.mark.asyncio
    async def test_runs_inside_builtins(self) -> None:
        app = _app(access_log=False)

        async def tag(request: Request, next: Next) -> Response:
            response = await next(request)
            return response.with_header("X-Tag", "inner")

        app.add_middleware(tag)

        async with TestClient(app) as client:
            response = await client.get("/json")

        assert response.header("x-tag") == "inner"
        assert response.header("x-powered-by") is not None
