"""Tests for mocktarget.server.negotiation: return value to Response."""

import json

import pytest

from mocktarget.errors import ConfigurationError
from mocktarget.http.response import JSON_CONTENT_TYPE, TEXT_CONTENT_TYPE, Response
from mocktarget.server.negotiation import json_body, negotiate
from mocktarget.templating import Template, create_environment


class TestNegotiate:
    def test_response_passthrough(self) -> None:
        response = Response("pong", content_type=TEXT_CONTENT_TYPE)
        assert negotiate(response) is response

    def test_dict_is_indented_json(self) -> None:
        response = negotiate({"status": "ok", "n": 1})

        assert response.status == 200
        assert response.content_type == JSON_CONTENT_TYPE
        assert response.text == '{\n  "status": "ok",\n  "n": 1\n}'

    def test_list_is_json(self) -> None:
        assert negotiate(["/a", "/b"]).json() == ["/a", "/b"]

    def test_str_is_html(self) -> None:
        response = negotiate("<p>hi</p>")
        assert response.content_type.startswith("text/html")

    def test_bytes(self) -> None:
        assert negotiate(b"\x00").content_type == "application/octet-stream"

    def test_tuple_sets_status(self) -> None:
        response = negotiate(({"status": "error"}, 500))
        assert response.status == 500
        assert response.json() == {"status": "error"}

    def test_tuple_sets_status_and_headers(self) -> None:
        response = negotiate(({"status": "rate_limited"}, 429, {"Retry-After": "60"}))
        assert response.status == 429
        assert response.header("retry-after") == "60"

    def test_template_renders(self) -> None:
        template = Template(
            "html_status.html",
            title="Mock Server",
            css_class="up",
            marker="UP",
            label="Operational",
            updated="now",
        )
        response = negotiate(template, kida_env=create_environment())
        assert "<!-- STATUS: UP -->" in response.text

    def test_template_without_environment(self) -> None:
        with pytest.raises(ConfigurationError):
            negotiate(Template("html_status.html"))

    def test_unsupported_type(self) -> None:
        with pytest.raises(TypeError, match="int"):
            negotiate(42)


class TestJsonBody:
    def test_round_trips(self) -> None:
        payload = {"services": {"api": True, "cdn": True}}
        assert json.loads(json_body(payload)) == payload
