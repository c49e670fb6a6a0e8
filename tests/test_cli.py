"""Tests for mocktarget.cli: ``mocktarget run`` and ``mocktarget routes``."""

import sys
import types
from unittest.mock import MagicMock, patch

import pytest

from mocktarget.app import App
from mocktarget.cli import main
from mocktarget.cli._resolve import resolve_app
from mocktarget.config import ServerConfig


@pytest.fixture
def fake_app(monkeypatch: pytest.MonkeyPatch) -> App:
    """Register a fake module holding a debug-mode App."""
    app = App(config=ServerConfig(host="127.0.0.1", port=8000, debug=True))
    app.add_route("/ping", lambda: "pong", description="Simple ping/pong")
    mod = types.ModuleType("_cli_test_app")
    mod.app = app  # type: ignore[attr-defined]
    mod.not_an_app = 42  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_cli_test_app", mod)
    return app


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "PORT",
        "HOST",
        "MOCK_DEBUG",
        "MOCK_WORKERS",
        "MOCK_TIME_SCALE",
        "MOCK_SEED",
        "MOCK_SERVER_NAME",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)


class TestMain:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "mocktarget" in capsys.readouterr().out


class TestResolve:
    def test_attribute(self, fake_app: App) -> None:
        assert resolve_app("_cli_test_app:app") is fake_app

    def test_bare_module_means_app(self, fake_app: App) -> None:
        assert resolve_app("_cli_test_app") is fake_app

    def test_factory_is_called(self, clean_env: None) -> None:
        app = resolve_app("mocktarget.endpoints:create_app")
        assert isinstance(app, App)
        assert app.config.port == 3000

    def test_not_an_app(self, fake_app: App) -> None:
        with pytest.raises(TypeError, match="int"):
            resolve_app("_cli_test_app:not_an_app")

    def test_factory_error_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "not-a-port")
        with pytest.raises(TypeError, match="PORT"):
            resolve_app("mocktarget.endpoints:create_app")


class TestRun:
    @patch("mocktarget.server.dev.run_dev_server")
    def test_debug_app_runs_dev_server(self, mock_server: MagicMock, fake_app: App) -> None:
        main(["run", "_cli_test_app:app"])

        args, kwargs = mock_server.call_args
        assert args == (fake_app, "127.0.0.1", 8000)
        assert kwargs["reload"] is True
        assert kwargs["app_path"] == "_cli_test_app:app"

    @patch("mocktarget.server.dev.run_dev_server")
    def test_host_and_port_override(self, mock_server: MagicMock, fake_app: App) -> None:
        main(["run", "_cli_test_app:app", "--host", "0.0.0.0", "--port", "3000"])

        args = mock_server.call_args[0]
        assert args[1] == "0.0.0.0"
        assert args[2] == 3000

    @patch("mocktarget.server.production.run_production_server")
    def test_production_flag(self, mock_server: MagicMock, fake_app: App) -> None:
        main(["run", "_cli_test_app:app", "--production", "--workers", "4"])

        kwargs = mock_server.call_args[1]
        assert mock_server.call_args[0][0] is fake_app
        assert kwargs["workers"] == 4
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 8000

    @patch("mocktarget.server.production.run_production_server")
    def test_default_app_is_production(self, mock_server: MagicMock, clean_env: None) -> None:
        main(["run"])

        kwargs = mock_server.call_args[1]
        assert kwargs["port"] == 3000
        assert kwargs["workers"] == 1

    def test_invalid_import_string(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", "nonexistent_module_xyz:app"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestRoutes:
    def test_lists_routes(self, fake_app: App, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_cli_test_app:app"])

        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["METHOD", "PATH", "DESCRIPTION"]
        assert lines[2].split(maxsplit=2) == ["GET", "/ping", "Simple ping/pong"]

    def test_default_app(self, clean_env: None, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes"])

        out = capsys.readouterr().out
        assert "/status/{code}" in out
        assert "/docker/unhealthy" in out
        assert "Fails every 3rd request" in out

    def test_empty_app(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        mod = types.ModuleType("_cli_empty_app")
        mod.app = App()  # type: ignore[attr-defined]
        monkeypatch.setitem(sys.modules, "_cli_empty_app", mod)

        main(["routes", "_cli_empty_app"])

        assert capsys.readouterr().out.strip() == "No routes registered."
