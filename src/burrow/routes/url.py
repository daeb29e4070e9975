"""URL synthesis and the route context read by route modules.

A route module can ask for its own URL while it is being imported::

    # routes/pets/[pet].py
    from burrow import Router, generate_url

    router = Router()

    @router.get(generate_url())      # "/pets/:pet"
    async def show(request): ...

The registration orchestrator sets the context immediately before loading
each module and resets it afterwards.  The slot is a ``ContextVar``, so a
value set for one load is never visible to code running in another context.
"""

import re
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from burrow._errors import RouteContextError
from burrow._types import PatternLike, RelativePath, RoutePath
from burrow.routes.patterns import (
    DEFAULT_EXTENSIONS,
    DEFAULT_SLUG_PATTERN,
    compile_slug_pattern,
)
from burrow.routes.traversal import RouteRecord


@dataclass(frozen=True, slots=True)
class RouteContext:
    """The route currently being loaded.

    Attributes:
        record: The discovered route file.
        slug_pattern: Compiled slug pattern in effect for this pass.
        extensions: Accepted route-file extensions for this pass.

    """

    record: RouteRecord
    slug_pattern: re.Pattern[str]
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS

    @property
    def url(self) -> RoutePath:
        """Router path synthesized from the record's relative path."""
        return synthesize_url(
            self.record.relative_path, self.slug_pattern, self.extensions,
        )


_current: ContextVar[RouteContext | None] = ContextVar("burrow_route", default=None)


def synthesize_url(
    relative_path: RelativePath,
    slug_pattern: PatternLike = DEFAULT_SLUG_PATTERN,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> RoutePath:
    """Turn a route file's relative path into a router path.

    Each step works on the whole string and feeds the next:

    1. slug matches become ``:<group>`` placeholders
    2. a trailing ``/index<ext>`` is stripped
    3. a remaining trailing ``<ext>`` is stripped
    4. the result is rooted at ``/`` without a trailing slash

    ``/pets/[pet].py``       -> ``/pets/:pet``
    ``/pets/[pet]/index.py`` -> ``/pets/:pet``
    ``/``                    -> ``/``

    """
    slug = compile_slug_pattern(slug_pattern)
    suffix = "|".join(re.escape(ext) for ext in extensions)

    url = slug.sub(lambda m: ":" + m.group(1), relative_path)
    if suffix:
        url = re.sub(rf"/index(?:{suffix})$", "", url)
        url = re.sub(rf"(?:{suffix})$", "", url)
    if len(url) > 1:
        url = url.rstrip("/")
    if not url.startswith("/"):
        url = "/" + url
    return url


def current_route() -> RouteContext:
    """Return the route being loaded.

    Raises:
        RouteContextError: If called outside a route module load.

    """
    ctx = _current.get()
    if ctx is None:
        msg = (
            "No route is being loaded. generate_url() and current_route() "
            "only work while burrow imports a route module."
        )
        raise RouteContextError(msg)
    return ctx


def generate_url() -> RoutePath:
    """Return the router path of the route module being loaded."""
    return current_route().url


@contextmanager
def route_context(ctx: RouteContext) -> Iterator[RouteContext]:
    """Make *ctx* the current route for the duration of the block."""
    token = _current.set(ctx)
    try:
        yield ctx
    finally:
        _current.reset(token)
