"""Wire discovered routes into a chirp App from project configuration.

``mount_routes`` is the one-call entry point for applications::

    from chirp import App
    import burrow

    app = App()
    burrow.mount_routes(app, "my-project/")
    app.run()
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import TYPE_CHECKING

from burrow.config_loader import load_config
from burrow.observability.events import now_ns
from burrow.observability.log import EventLog
from burrow.routes.registration import logger, register_routes

if TYPE_CHECKING:
    from chirp import App

    from burrow._types import RegisterHook
    from burrow.routes.loader import RouteLoader
    from burrow.routes.traversal import RouteRecord


def mount_routes(
    app: App,
    root: str | Path = ".",
    *,
    before_register: RegisterHook | None = None,
    after_register: RegisterHook | None = None,
    loader: RouteLoader | None = None,
    event_log: EventLog | None = None,
    **overrides: object,
) -> tuple[RouteRecord, ...]:
    """Load burrow config for *root* and register its route files on *app*.

    Args:
        app: Host chirp application (not yet frozen).
        root: Project root holding burrow.yaml / burrow.toml.
        before_register: Hook called as ``before_register(path=...)``.
        after_register: Hook called as ``after_register(path=...)``.
        loader: Module loading strategy (default: import from disk).
        event_log: Log receiving route events.  A private log is used when
            omitted; either way its summary feeds the INFO line.
        **overrides: Override BurrowConfig fields.

    """
    config = load_config(Path(root), **overrides)
    log = event_log if event_log is not None else EventLog()
    since = now_ns()
    t0 = time.perf_counter()

    records = register_routes(
        app,
        config.base_paths,
        slug_pattern=config.slug_pattern,
        ignore_pattern=config.ignore_pattern,
        extensions=config.extensions,
        export_name=config.export_name,
        dry=config.dry,
        before_register=before_register,
        after_register=after_register,
        loader=loader,
        sort_entries=config.sort_entries,
        event_log=log,
    )

    slowest = log.summary(since_ns=since)["slowest"]
    logger.info(
        "Mounted routes from %s in %.0fms%s",
        ", ".join(config.paths),
        (time.perf_counter() - t0) * 1000,
        f" (slowest: {slowest[0]}, {slowest[1]:.0f}ms)" if slowest else "",
    )
    return records
