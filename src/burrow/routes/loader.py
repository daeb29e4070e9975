"""Route loaders — turn a discovered record into a loaded module.

The orchestrator only talks to the :class:`RouteLoader` protocol, so the
import strategy can be swapped without touching traversal:

- :class:`ModuleLoader` imports the file from disk (default).
- :class:`RegistryLoader` resolves records through a static mapping, for
  deployments that ship a compiled manifest of route modules.
"""

import hashlib
import importlib.util
import sys
from collections.abc import Callable, Mapping
from types import ModuleType
from typing import Protocol

from burrow._errors import RouteImportError
from burrow._types import RelativePath
from burrow.routes.traversal import RouteRecord

# Package prefix for modules imported by ModuleLoader
MODULE_PREFIX = "burrow_routes"


class RouteLoader(Protocol):
    """Loads the module behind a route record."""

    def load(self, record: RouteRecord) -> object:
        """Return the loaded module (or module-like object) for *record*.

        Raises:
            RouteImportError: If the module cannot be loaded.

        """
        ...


class ModuleLoader:
    """Import route files with ``importlib`` without touching ``sys.path``."""

    __slots__ = ()

    def load(self, record: RouteRecord) -> ModuleType:
        py_file = record.full_path
        module_name = module_name_for(record)

        spec = importlib.util.spec_from_file_location(module_name, py_file)
        if spec is None or spec.loader is None:
            msg = f"Unable to import {py_file}: no loader for this file type"
            raise RouteImportError(msg, path=str(py_file))

        module = importlib.util.module_from_spec(spec)
        # Registered so the module can import itself by name during execution
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            sys.modules.pop(module_name, None)
            msg = f"Unable to import {py_file}: {exc}"
            raise RouteImportError(msg, path=str(py_file)) from exc

        return module


class RegistryLoader:
    """Resolve route records through a static registry.

    Args:
        registry: Maps relative paths (``/pets/[pet].py``) to zero-argument
            callables returning the module, e.g.
            ``lambda: importlib.import_module("app.routes.pets")``.  A
            ``types.SimpleNamespace`` is accepted in place of a module.  The
            callable runs while the route context is set.

    """

    __slots__ = ("_registry",)

    def __init__(self, registry: Mapping[RelativePath, Callable[[], object]]) -> None:
        self._registry = dict(registry)

    def load(self, record: RouteRecord) -> object:
        factory = self._registry.get(record.relative_path)
        if factory is None:
            msg = f"No registry entry for {record.relative_path!r} ({record.full_path})"
            raise RouteImportError(msg, path=str(record.full_path))
        try:
            return factory()
        except Exception as exc:
            msg = f"Unable to import {record.full_path}: {exc}"
            raise RouteImportError(msg, path=str(record.full_path)) from exc


def module_name_for(record: RouteRecord) -> str:
    """Build a unique dotted module name for a route file.

    ``/abs/routes/pets/[pet].py`` -> ``burrow_routes._pet__3f2a9c1d0b7e``

    The digest keeps files with the same stem under different directories
    (or base paths) from replacing each other in ``sys.modules``.
    """
    stem = "".join(c if c.isalnum() else "_" for c in record.full_path.stem)
    digest = hashlib.sha256(str(record.full_path).encode()).hexdigest()[:12]
    return f"{MODULE_PREFIX}.{stem}_{digest}"
