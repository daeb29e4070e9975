"""Route discovery and registration events.

All events are frozen dataclasses with:
- ``path``: Absolute path of the route file the event concerns
- ``timestamp_ns``: Monotonic nanosecond timestamp

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouteDiscovered:
    """The traversal engine found a route file.

    Attributes:
        path: Absolute path to the route file.
        base_path: Normalized base path the file was found under.
        relative_path: File path relative to *base_path*.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    base_path: str
    relative_path: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RouteRegistered:
    """A route file was loaded and mounted (or walked, in a dry run).

    Attributes:
        path: Absolute path to the route file.
        base_path: Normalized base path the file was found under.
        url: Router path synthesized for the file.
        dry: True if the file was walked without being loaded.
        load_ms: Time spent on hooks, loading, and mounting.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    base_path: str
    url: str
    dry: bool
    load_ms: float
    timestamp_ns: int


type RouteEvent = RouteDiscovered | RouteRegistered


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
