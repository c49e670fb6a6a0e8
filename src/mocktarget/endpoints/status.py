"""``/status/{code}``: answer with whatever status the caller asks for."""

import re

from mocktarget.endpoints._registry import Endpoint, isoformat
from mocktarget.state import Clock

DEFAULT_STATUS = 200
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_status_code(raw: str) -> int:
    """Read a status code from the last path segment of *raw*.

    Leading digits are used and anything after them is ignored, so
    ``"503abc"`` reads as 503. Empty, non-numeric, or outside 100-599
    falls back to 200. Never raises.
    """
    segment = raw.rsplit("/", 1)[-1]
    m = _LEADING_INT.match(segment)
    if m is None:
        return DEFAULT_STATUS
    code = int(m.group(1))
    return code if 100 <= code < 600 else DEFAULT_STATUS


def status_code(code: str, clock: Clock):
    valid = parse_status_code(code)
    return {
        "status": "ok" if valid < 400 else "error",
        "requestedCode": valid,
        "timestamp": isoformat(clock.now()),
    }, valid


ENDPOINTS: tuple[Endpoint, ...] = (
    Endpoint("/status/{code}", status_code, "Returns specified HTTP status code"),
)
