"""Content negotiation: maps return values to Response objects.

Inspects the return value from an endpoint handler and produces the
appropriate Response. isinstance-based dispatch, no magic, fully
predictable.
"""

import json as json_module
from typing import Any

from kida import Environment

from mocktarget.errors import ConfigurationError
from mocktarget.http.response import (
    HTML_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    Response,
)
from mocktarget.templating import Template, render_template

JSON_INDENT = 2


def json_body(value: Any) -> str:
    """Serialize *value* the way every JSON endpoint does (2-space indent)."""
    return json_module.dumps(value, indent=JSON_INDENT, default=str)


def negotiate(value: Any, *, kida_env: Environment | None = None) -> Response:
    """Convert an endpoint handler's return value to a Response.

    Dispatch order:

    1. ``Response``            -> pass through
    2. ``Template``            -> render via kida -> text/html
    3. ``str``                 -> 200, text/html
    4. ``bytes``               -> 200, application/octet-stream
    5. ``dict`` / ``list``     -> 200, application/json
    6. ``(value, int)``        -> negotiate value, override status
    7. ``(value, int, dict)``  -> negotiate value, override status + headers
    """
    match value:
        case Response():
            return value
        case Template():
            if kida_env is None:
                msg = "Template return type requires a kida environment."
                raise ConfigurationError(msg)
            return Response(body=render_template(kida_env, value), content_type=HTML_CONTENT_TYPE)
        case str():
            return Response(body=value, content_type=HTML_CONTENT_TYPE)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(body=json_body(value), content_type=JSON_CONTENT_TYPE)
        case (inner, int() as status):
            return negotiate(inner, kida_env=kida_env).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner, kida_env=kida_env).with_status(status).with_headers(headers)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                f"Return str, dict, list, bytes, Template, or Response."
            )
            raise TypeError(msg)
