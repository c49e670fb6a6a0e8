"""Invoke helpers: call sync or async handlers uniformly.

Endpoint handlers can be ``def`` or ``async def``. Anything that calls
a registered handler or lifecycle hook goes through this helper so the
sync/async check lives in exactly one place.

Usage::

    from mocktarget._internal.invoke import invoke

    result = await invoke(handler, *args, **kwargs)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's a coroutine.

    Works with both sync and async callables::

        # sync: returns immediately
        def always_up(clock: Clock):
            return {"status": "ok"}

        # async: returns coroutine, awaited automatically
        async def slow_response(rng: random.Random):
            await anyio.sleep(rng.uniform(2, 5))
            return {"status": "ok"}
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
