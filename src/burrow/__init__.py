"""Burrow — file-system route discovery for chirp apps.

Lay route modules out in a directory tree and burrow registers them, in
traversal order, with a chirp ``App``.  File paths become URLs, and
bracketed segments become path parameters::

    routes/
      index.py            ->  /
      pets.py             ->  /pets
      pets/
        [pet].py          ->  /pets/:pet   (mounted as /pets/{pet})
      _helpers.py         ->  ignored

Quick start::

    from chirp import App
    import burrow

    app = App()
    burrow.register_routes(app, ["routes"])
    app.run()

A route module exports a ``Router`` and asks burrow for its own URL while it
is being imported::

    from burrow import Router, generate_url

    router = Router()

    @router.get(generate_url())
    async def show_pet(request): ...

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "BurrowConfig",
    "EventLog",
    "RouteRecord",
    "Router",
    "__version__",
    "current_route",
    "discover_routes",
    "generate_url",
    "mount_routes",
    "register_routes",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import burrow`` fast while providing a clean top-level API.
    """
    if name == "BurrowConfig":
        from burrow.config import BurrowConfig

        return BurrowConfig

    if name == "EventLog":
        from burrow.observability.log import EventLog

        return EventLog

    if name in ("RouteRecord", "discover_routes"):
        from burrow.routes import traversal

        return getattr(traversal, name)

    if name == "Router":
        from burrow.routes.router import Router

        return Router

    if name in ("current_route", "generate_url"):
        from burrow.routes import url

        return getattr(url, name)

    if name == "register_routes":
        from burrow.routes.registration import register_routes

        return register_routes

    if name == "mount_routes":
        from burrow.app import mount_routes

        return mount_routes

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
