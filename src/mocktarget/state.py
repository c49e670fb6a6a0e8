"""Per-endpoint state store.

A handful of endpoints need memory across requests (intermittent
failures, flapping, rate limiting, the slowing "memory leak"). Each of
them owns one ``EndpointState`` record, keyed by endpoint name, held in a
``StateStore`` that belongs to the App.

Every ``get_or_create()`` call counts as a request: the record is created
on first use, then ``request_count`` is incremented and the request
timestamps are refreshed. Handlers receive a copy of the record taken
under the lock, and write back through the store.

Thread safety:
    Under free-threading several workers may hit the same endpoint at
    once. The increment, the timestamp refresh, the window reset and the
    copy handed back all happen under one lock, so every caller observes
    a distinct ``request_count`` and the modulo-based alternation stays
    strict.
"""

import threading
import time
from dataclasses import dataclass, replace
from datetime import UTC, datetime


class Clock:
    """Wall-clock source shared by the state store and the handlers.

    Tests swap in a subclass with a settable time.
    """

    __slots__ = ()

    def time(self) -> float:
        """Seconds since the epoch."""
        return time.time()

    def now(self) -> datetime:
        """Current time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.time(), UTC)


@dataclass(slots=True)
class EndpointState:
    """Mutable counters for one endpoint.

    ``previous_request_time`` is the ``last_request_time`` the record had
    before the current request refreshed it; ``None`` on the first request.
    """

    request_count: int = 0
    last_request_time: float = 0.0
    previous_request_time: float | None = None
    is_down: bool = False
    down_until: float | None = None

    def seconds_since_previous(self) -> float | None:
        """Gap between this request and the one before it."""
        if self.previous_request_time is None:
            return None
        return self.last_request_time - self.previous_request_time


class StateStore:
    """Keyed registry of ``EndpointState`` records.

    Usage::

        store = StateStore()
        state = store.get_or_create("/intermittent")
        state.request_count  # 1
    """

    __slots__ = ("_clock", "_lock", "_states")

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or Clock()
        self._states: dict[str, EndpointState] = {}
        self._lock = threading.Lock()

    @property
    def clock(self) -> Clock:
        return self._clock

    def get_or_create(self, name: str, *, window: float | None = None) -> EndpointState:
        """Count a request against *name* and return a copy of its record.

        Creates a zeroed record on first use. On every call, increments
        ``request_count`` and moves ``last_request_time`` to now. With a
        *window*, a request arriving more than *window* seconds after the
        previous one restarts the count at 1.

        The copy is taken under the same lock as the increment, so its
        ``request_count`` is this caller's own. Use ``set_down()`` to write
        back to the live record.
        """
        now = self._clock.time()
        with self._lock:
            state = self._states.get(name)
            if state is None:
                state = EndpointState(last_request_time=now)
                self._states[name] = state
            else:
                state.previous_request_time = state.last_request_time
                state.last_request_time = now
            state.request_count += 1
            gap = state.seconds_since_previous()
            if window is not None and gap is not None and gap > window:
                state.request_count = 1
            return replace(state)

    def set_down(self, name: str, is_down: bool, *, until: float | None = None) -> None:
        """Record whether *name* currently reports itself as down."""
        with self._lock:
            state = self._states.setdefault(name, EndpointState())
            state.is_down = is_down
            state.down_until = until

    def get(self, name: str) -> EndpointState | None:
        """Return the record for *name* without counting a request."""
        return self._states.get(name)

    def reset(self, name: str | None = None) -> None:
        """Forget one endpoint's record, or all of them."""
        with self._lock:
            if name is None:
                self._states.clear()
            else:
                self._states.pop(name, None)

    def snapshot(self) -> dict[str, EndpointState]:
        """Copies of every record, safe to inspect while requests run."""
        with self._lock:
            return {name: replace(state) for name, state in self._states.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._states

    def __len__(self) -> int:
        return len(self._states)
