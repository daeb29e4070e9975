"""Observability for route discovery and registration.

Quick Start:
    >>> from burrow.observability import EventLog, RouteRegistered
    >>> log = EventLog()
    >>> # register_routes(app, ["routes"], event_log=log)
    >>> # log.query(event_type=RouteRegistered)

"""

from burrow.observability.events import (
    RouteDiscovered,
    RouteEvent,
    RouteRegistered,
    now_ns,
)
from burrow.observability.log import EventLog

__all__ = [
    "EventLog",
    "RouteDiscovered",
    "RouteEvent",
    "RouteRegistered",
    "now_ns",
]
