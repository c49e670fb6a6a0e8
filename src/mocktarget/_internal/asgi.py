"""Raw ASGI type aliases (ASGI 3.0).

Only ``server/handler.py``, ``server/sender.py`` and the test client
touch these directly. Everything else works with Request/Response.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any, TypeAlias

Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]
