"""Shared test fixtures for burrow."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def routes_dir(tmp_path: Path) -> Path:
    """Create an empty routes/ directory for testing."""
    d = tmp_path / "routes"
    d.mkdir()
    return d


def write_route(routes_dir: Path, name: str, content: str = "") -> Path:
    """Write a route module (creating parent dirs) and return its path."""
    p = routes_dir / name
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content)
    return p


# Route module that reads its own URL and exports a Router
ROUTER_MODULE = (
    "from burrow import Router, generate_url\n"
    "\n"
    "router = Router()\n"
    "URL = generate_url()\n"
    "\n"
    "@router.get(URL)\n"
    "def handler(request):\n"
    "    return URL\n"
)


@dataclass
class RecordedRoute:
    path: str
    methods: list[str] | None
    name: str | None
    handler: Callable[..., Any]


@dataclass
class RecordingApp:
    """Stand-in for a chirp App that records ``route()`` registrations."""

    routes: list[RecordedRoute] = field(default_factory=list)
    frozen: bool = False

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            if self.frozen:
                msg = "Cannot modify the app after it has started serving requests."
                raise RuntimeError(msg)
            self.routes.append(RecordedRoute(path, methods, name, func))
            return func

        return decorator

    @property
    def paths(self) -> list[str]:
        return [r.path for r in self.routes]


@pytest.fixture
def app() -> RecordingApp:
    return RecordingApp()


@pytest.fixture
def pets_tree(routes_dir: Path) -> Path:
    """routes/pets.py + routes/pets/[pet].py, both exporting a Router."""
    write_route(routes_dir, "pets.py", ROUTER_MODULE)
    write_route(routes_dir, "pets/[pet].py", ROUTER_MODULE)
    return routes_dir
