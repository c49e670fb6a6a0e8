"""Endpoint table entries and the helpers every endpoint shares."""

from dataclasses import dataclass
from datetime import UTC, datetime

from mocktarget._internal.types import Handler


@dataclass(frozen=True, slots=True)
class Endpoint:
    """One mock endpoint: where it lives, what answers, and what it simulates."""

    path: str
    handler: Handler
    description: str


def isoformat(dt: datetime) -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. ``2024-05-01T12:00:00.000Z``."""
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
