"""Registration orchestrator — discover route files and mount them on an app.

Discovery runs to completion first; registration then walks the records in
traversal order, strictly one at a time::

    for record in records:
        with route_context(...):          # generate_url() now answers
            before_register(path=...)
            module = loader.load(record)  # module reads its own URL
            router_for(module).mount(app)
            after_register(path=...)

Any failure aborts the pass.  Routes mounted before the failure stay
mounted; the caller decides whether that partial state is acceptable.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Iterable
from types import ModuleType, SimpleNamespace
from typing import TYPE_CHECKING

from burrow._errors import RouteImportError
from burrow._types import PatternLike, RegisterHook, RoutePath
from burrow.observability.events import RouteDiscovered, RouteRegistered, now_ns
from burrow.routes.loader import ModuleLoader, RouteLoader
from burrow.routes.patterns import (
    DEFAULT_EXTENSIONS,
    DEFAULT_IGNORE_PATTERN,
    DEFAULT_SLUG_PATTERN,
    compile_slug_pattern,
)
from burrow.routes.router import Router
from burrow.routes.traversal import RouteRecord, discover_routes
from burrow.routes.url import RouteContext, route_context

if TYPE_CHECKING:
    from chirp import App

    from burrow.observability.log import EventLog

logger = logging.getLogger("burrow.routes")

# Default name of the module attribute holding the Router
DEFAULT_EXPORT_NAME = "router"

# Handler function names recognised when a module exports no Router
_METHOD_NAMES: tuple[str, ...] = ("get", "post", "put", "delete", "patch")

# Catch-all handler name (maps to GET)
_HANDLER_NAME = "handler"


def register_routes(
    app: App,
    paths: Iterable[str | os.PathLike[str]],
    *,
    slug_pattern: PatternLike = DEFAULT_SLUG_PATTERN,
    ignore_pattern: PatternLike = DEFAULT_IGNORE_PATTERN,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    export_name: str = DEFAULT_EXPORT_NAME,
    dry: bool = False,
    before_register: RegisterHook | None = None,
    after_register: RegisterHook | None = None,
    loader: RouteLoader | None = None,
    sort_entries: bool = True,
    event_log: EventLog | None = None,
) -> tuple[RouteRecord, ...]:
    """Discover route files under *paths* and mount each one on *app*.

    Args:
        app: Host application exposing chirp's ``route()`` decorator.
        paths: Base paths (files or directories) to scan.
        slug_pattern: Regex with one capture group marking parameter
            segments, e.g. ``[pet]``.
        ignore_pattern: Regex searched against entry names to skip.
        extensions: Accepted route-file suffixes.
        export_name: Module attribute holding the route module's Router.
        dry: Walk and call hooks without loading or mounting anything.
        before_register: Called as ``before_register(path=...)`` with the
            absolute file path before each module is loaded.
        after_register: Called as ``after_register(path=...)`` after each
            module is mounted.
        loader: Strategy for loading modules (default :class:`ModuleLoader`).
        sort_entries: Visit sibling entries in ascending name order.
        event_log: Optional log receiving discovery/registration events.

    Returns:
        The processed records, in registration order.

    Raises:
        PathError: A base path or traversed entry is missing or unreadable.
        UnsupportedEntryError: An entry is neither a file nor a directory.
        RouteImportError: A module failed to load or export a usable router.
        ConfigError: The slug or ignore pattern is invalid.

    """
    slug = compile_slug_pattern(slug_pattern)
    accepted = tuple(extensions)
    loader = loader if loader is not None else ModuleLoader()

    records = discover_routes(
        paths,
        ignore_pattern=ignore_pattern,
        extensions=accepted,
        sort_entries=sort_entries,
    )

    if event_log is not None:
        event_log.append_many([
            RouteDiscovered(
                path=key,
                base_path=record.base_path,
                relative_path=record.relative_path,
                timestamp_ns=now_ns(),
            )
            for key, record in records.items()
        ])

    for key, record in records.items():
        ctx = RouteContext(record=record, slug_pattern=slug, extensions=accepted)
        t0 = time.perf_counter()

        with route_context(ctx):
            if before_register is not None:
                before_register(path=key)

            if not dry:
                module = loader.load(record)
                router = router_for(module, ctx.url, export_name=export_name, source=key)
                _mount(router, app, key)

            if after_register is not None:
                after_register(path=key)

        load_ms = (time.perf_counter() - t0) * 1000
        logger.debug(
            "%s %s -> %s", "Walked" if dry else "Registered", key, ctx.url,
        )
        if event_log is not None:
            event_log.append(RouteRegistered(
                path=key,
                base_path=record.base_path,
                url=ctx.url,
                dry=dry,
                load_ms=load_ms,
                timestamp_ns=now_ns(),
            ))

    logger.info(
        "%s %d route file%s",
        "Walked" if dry else "Registered",
        len(records),
        "" if len(records) == 1 else "s",
    )
    return tuple(records.values())


def router_for(
    module: object,
    url: RoutePath,
    *,
    export_name: str = DEFAULT_EXPORT_NAME,
    source: str = "<unknown>",
) -> Router:
    """Return the Router a loaded route module provides.

    Uses the module's *export_name* attribute when present.  Otherwise a
    Router is built at *url* from handler functions named after HTTP methods
    (``get``, ``post``, ...) or a catch-all ``handler`` (GET).

    Raises:
        RouteImportError: The module is not module-like, exports something
            other than a Router, or provides no handlers at all.

    """
    if not _is_module_like(module):
        msg = f"Route module {source} did not load as a module (got {type(module).__name__})"
        raise RouteImportError(msg, path=source)

    exported = getattr(module, export_name, None)
    if exported is not None:
        if not isinstance(exported, Router):
            msg = (
                f"Route module {source}: {export_name!r} must be a burrow Router, "
                f"got {type(exported).__name__}"
            )
            raise RouteImportError(msg, path=source)
        return exported

    router = _router_from_handlers(module, url)
    if router is None:
        msg = (
            f"Route module {source} has no {export_name!r} export and no "
            f"handler functions ({', '.join(_METHOD_NAMES)}, {_HANDLER_NAME})"
        )
        raise RouteImportError(msg, path=source)
    return router


def _is_module_like(obj: object) -> bool:
    """True for real modules and ``SimpleNamespace`` stand-ins."""
    return isinstance(obj, ModuleType | SimpleNamespace)


def _router_from_handlers(module: object, url: RoutePath) -> Router | None:
    """Build a Router from ``get``/``post``/... functions, or None if absent."""
    router = Router()
    for method_name in _METHOD_NAMES:
        func = getattr(module, method_name, None)
        if func is not None and callable(func):
            router.route(url, methods=[method_name])(func)

    # Catch-all ``handler`` maps to GET unless an explicit ``get`` exists
    handler = getattr(module, _HANDLER_NAME, None)
    if handler is not None and callable(handler):
        if not any(e.methods == ("GET",) for e in router.entries):
            router.route(url, methods=["GET"])(handler)

    if not len(router):
        return None
    return router


def _mount(router: Router, app: App, source: str) -> None:
    try:
        router.mount(app)
    except Exception as exc:
        msg = f"Route module {source} was rejected by the host router: {exc}"
        raise RouteImportError(msg, path=source) from exc
