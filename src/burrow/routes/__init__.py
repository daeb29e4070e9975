"""File-system route discovery and registration.

Walks base directories for route modules, derives each module's URL from its
relative path, and mounts the modules on a chirp app in traversal order.

Public API::

    from burrow.routes import discover_routes, register_routes

    records = discover_routes(["src/routes"])
    register_routes(app, ["src/routes"])
"""

from burrow.routes.loader import ModuleLoader, RegistryLoader, RouteLoader
from burrow.routes.registration import register_routes, router_for
from burrow.routes.router import RouteEntry, Router, to_chirp_path
from burrow.routes.traversal import RouteRecord, discover_routes, normalize_base_path
from burrow.routes.url import (
    RouteContext,
    current_route,
    generate_url,
    route_context,
    synthesize_url,
)

__all__ = [
    "ModuleLoader",
    "RegistryLoader",
    "RouteContext",
    "RouteEntry",
    "RouteLoader",
    "RouteRecord",
    "Router",
    "current_route",
    "discover_routes",
    "generate_url",
    "normalize_base_path",
    "register_routes",
    "route_context",
    "router_for",
    "synthesize_url",
    "to_chirp_path",
]
