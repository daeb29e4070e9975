"""Router — the object a route module exports.

A ``Router`` collects handlers while its module is imported and registers
them on a chirp ``App`` when burrow mounts it::

    router = Router()

    @router.get(generate_url())
    async def list_pets(request): ...

    @router.post(generate_url())
    async def create_pet(request): ...

Paths may use express-style ``:param`` segments (what ``generate_url()``
produces) or chirp's native ``{param}`` syntax; ``:param`` is translated
when mounting.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from burrow._types import HandlerFunc, RoutePath

if TYPE_CHECKING:
    from chirp import App

# A whole ":name" or ":name:type" segment; chirp params cannot share a segment
_COLON_SEGMENT_RE = re.compile(r":([^:.]+)(?::(str|int|float|path))?")


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A handler collected by a :class:`Router`.

    Attributes:
        path: Route path as written by the module.
        handler: Callable invoked by chirp for matching requests.
        methods: Upper-case HTTP methods the handler responds to.
        name: Optional route name for URL generation.

    """

    path: RoutePath
    handler: HandlerFunc
    methods: tuple[str, ...]
    name: str | None = None


def to_chirp_path(path: RoutePath) -> RoutePath:
    """Translate ``:param`` segments into chirp's ``{param}`` syntax.

    ``/pets/:pet``      -> ``/pets/{pet}``
    ``/pets/:pet-id``   -> ``/pets/{pet-id}``
    ``/items/:id:int``  -> ``/items/{id:int}``
    ``/pets/{pet}``     -> unchanged

    Only segments starting with ``:`` are parameters, so literals such as
    ``/time/12:30`` pass through.

    Raises:
        ValueError: A ``:param`` shares its segment with other text, as in
            ``/files/:name.json`` or ``/:a-:b``.  chirp only matches
            parameters that span a whole segment.

    """
    segments = path.split("/")
    for i, segment in enumerate(segments):
        if not segment.startswith(":"):
            continue
        match = _COLON_SEGMENT_RE.fullmatch(segment)
        if match is None:
            msg = (
                f"Path parameter {segment!r} in {path!r} must span a whole "
                "segment to be routable by chirp"
            )
            raise ValueError(msg)
        name, param_type = match.groups()
        segments[i] = "{" + name + (f":{param_type}" if param_type else "") + "}"
    return "/".join(segments)


class Router:
    """Collects route handlers for later registration on a chirp app."""

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: list[RouteEntry] = []

    def route(
        self,
        path: RoutePath,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ):
        """Register a handler for *path* via decorator.

        Args:
            path: Route path, ``:param`` or ``{param}`` style.
            methods: HTTP methods. Defaults to ``["GET"]``.
            name: Optional route name for URL generation.

        """
        resolved = tuple(m.upper() for m in (methods or ["GET"]))

        def decorator(func: HandlerFunc) -> HandlerFunc:
            if not callable(func):
                msg = f"Route handler for {path!r} must be callable, got {type(func).__name__}"
                raise TypeError(msg)
            self._entries.append(RouteEntry(path, func, resolved, name))
            return func

        return decorator

    def get(self, path: RoutePath, *, name: str | None = None):
        return self.route(path, methods=["GET"], name=name)

    def post(self, path: RoutePath, *, name: str | None = None):
        return self.route(path, methods=["POST"], name=name)

    def put(self, path: RoutePath, *, name: str | None = None):
        return self.route(path, methods=["PUT"], name=name)

    def delete(self, path: RoutePath, *, name: str | None = None):
        return self.route(path, methods=["DELETE"], name=name)

    def patch(self, path: RoutePath, *, name: str | None = None):
        return self.route(path, methods=["PATCH"], name=name)

    @property
    def entries(self) -> tuple[RouteEntry, ...]:
        """Collected handlers in registration order."""
        return tuple(self._entries)

    def mount(self, app: App) -> int:
        """Register every collected handler on *app* and return the count.

        Exceptions raised by ``app.route`` (for example a frozen app)
        propagate unchanged, as does the ``ValueError`` from
        :func:`to_chirp_path` for a path chirp cannot route.
        """
        for entry in self._entries:
            app.route(
                to_chirp_path(entry.path),
                methods=list(entry.methods),
                name=entry.name,
            )(entry.handler)
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Router({len(self._entries)} routes)"
