"""Route event log — what a registration pass found and mounted.

``register_routes(..., event_log=log)`` appends one ``RouteDiscovered`` per
record once discovery finishes, then one ``RouteRegistered`` per record as
it is mounted (or walked, in a dry run).  Afterwards the log answers the
questions tooling asks about a pass::

    log.routes()                        # [(url, file), ...] in mount order
    log.query(url="/pets/:pet")         # events for one router path
    log.summary()["load_ms_by_base_path"]

The log is bounded by default so a long-running process that mounts
repeatedly cannot grow without limit; pass ``max_events=None`` to keep
everything.  A lock guards every method.
"""

import threading
from collections import deque
from collections.abc import Iterable
from typing import Any

from burrow.observability.events import RouteDiscovered, RouteEvent, RouteRegistered


class EventLog:
    """Ordered, optionally bounded store of route events.

    Args:
        max_events: Oldest events are dropped beyond this many.  None keeps
            every event.

    """

    __slots__ = ("_events", "_lock")

    def __init__(self, max_events: int | None = 10_000) -> None:
        self._events: deque[RouteEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: RouteEvent) -> None:
        with self._lock:
            self._events.append(event)

    def append_many(self, events: Iterable[RouteEvent]) -> None:
        with self._lock:
            self._events.extend(events)

    def query(
        self,
        *,
        event_type: type | None = None,
        path: str | None = None,
        url: str | None = None,
        base_path: str | None = None,
        since_ns: int = 0,
        limit: int | None = None,
    ) -> list[RouteEvent]:
        """Return matching events, newest first.

        Args:
            event_type: ``RouteDiscovered`` or ``RouteRegistered``.
            path: Exact absolute route-file path.
            url: Exact router path.  Only ``RouteRegistered`` carries one.
            base_path: Normalized base path the file was found under.
            since_ns: Drop events stamped before this monotonic time.
            limit: Stop after this many matches.

        """
        with self._lock:
            events = list(self._events)

        results: list[RouteEvent] = []
        for event in reversed(events):
            if limit is not None and len(results) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if path is not None and event.path != path:
                continue
            if url is not None and getattr(event, "url", None) != url:
                continue
            if base_path is not None and event.base_path != base_path:
                continue
            if event.timestamp_ns < since_ns:
                continue
            results.append(event)
        return results

    def routes(self) -> list[tuple[str, str]]:
        """``(url, file)`` pairs of registered routes, in mount order."""
        with self._lock:
            return [
                (e.url, e.path) for e in self._events if isinstance(e, RouteRegistered)
            ]

    def recent(self, n: int = 20) -> list[RouteEvent]:
        """Return the *n* newest events, oldest first."""
        if n <= 0:
            return []
        with self._lock:
            events = list(self._events)
        return events[-n:]

    def clear(self) -> int:
        """Drop every event and return how many there were."""
        with self._lock:
            count = len(self._events)
            self._events.clear()
            return count

    def summary(self, *, since_ns: int = 0) -> dict[str, Any]:
        """Counts and load timings for events stamped at or after *since_ns*.

        ``load_ms_by_base_path`` sums ``RouteRegistered.load_ms`` per base
        path; ``slowest`` is the ``(file, load_ms)`` of the slowest mount, or
        None when nothing was registered.
        """
        with self._lock:
            events = [e for e in self._events if e.timestamp_ns >= since_ns]

        registered = [e for e in events if isinstance(e, RouteRegistered)]
        load_ms: dict[str, float] = {}
        for event in registered:
            load_ms[event.base_path] = load_ms.get(event.base_path, 0.0) + event.load_ms
        slowest = max(registered, key=lambda e: e.load_ms, default=None)

        return {
            "discovered": sum(isinstance(e, RouteDiscovered) for e in events),
            "registered": sum(not e.dry for e in registered),
            "walked": sum(e.dry for e in registered),
            "load_ms_by_base_path": load_ms,
            "slowest": (slowest.path, slowest.load_ms) if slowest else None,
        }

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
