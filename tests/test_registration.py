"""Tests for burrow.routes.registration — discovery plus mounting."""

import types
from pathlib import Path

import pytest

from burrow._errors import PathError, RouteContextError, RouteImportError
from burrow.observability import EventLog, RouteDiscovered, RouteRegistered
from burrow.routes.loader import RegistryLoader
from burrow.routes.registration import register_routes, router_for
from burrow.routes.router import Router
from burrow.routes.url import current_route, generate_url

from .conftest import ROUTER_MODULE, RecordingApp, write_route


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


class TestRegisterRoutes:

    def test_pets_scenario(self, app: RecordingApp, pets_tree: Path) -> None:
        records = register_routes(app, [pets_tree])
        assert len(records) == 2
        assert sorted(app.paths) == ["/pets", "/pets/{pet}"]

    def test_module_sees_its_own_url(self, app: RecordingApp, pets_tree: Path) -> None:
        register_routes(app, [pets_tree])
        urls = {r.path: r.handler(None) for r in app.routes}
        assert urls == {"/pets": "/pets", "/pets/{pet}": "/pets/:pet"}

    def test_folder_based_routes(self, app: RecordingApp, routes_dir: Path) -> None:
        write_route(routes_dir, "pets/index.py", ROUTER_MODULE)
        write_route(routes_dir, "pets/[pet]/index.py", ROUTER_MODULE)
        register_routes(app, [routes_dir])
        assert sorted(app.paths) == ["/pets", "/pets/{pet}"]

    def test_single_file_base_path(self, app: RecordingApp, tmp_path: Path) -> None:
        router_file = write_route(tmp_path, "router.py", ROUTER_MODULE)
        records = register_routes(app, [router_file])
        assert [r.relative_path for r in records] == ["/"]
        assert app.paths == ["/"]

    def test_registration_follows_traversal_order(
        self, app: RecordingApp, routes_dir: Path,
    ) -> None:
        for name in ("b.py", "a.py", "c/d.py"):
            write_route(routes_dir, name, ROUTER_MODULE)
        register_routes(app, [routes_dir])
        assert app.paths == ["/a", "/b", "/c/d"]

    def test_missing_base_path_registers_nothing(
        self, app: RecordingApp, pets_tree: Path, tmp_path: Path,
    ) -> None:
        with pytest.raises(PathError):
            register_routes(app, [pets_tree, tmp_path / "missing"])
        assert app.routes == []

    def test_custom_slug_pattern(self, app: RecordingApp, routes_dir: Path) -> None:
        write_route(routes_dir, "pets/{pet}.py", ROUTER_MODULE)
        register_routes(app, [routes_dir], slug_pattern=r"\{(\w+)\}")
        assert app.paths == ["/pets/{pet}"]

    def test_hyphenated_slug(self, app: RecordingApp, routes_dir: Path) -> None:
        write_route(routes_dir, "pets/[pet-id].py", ROUTER_MODULE)
        register_routes(app, [routes_dir])
        assert app.paths == ["/pets/{pet-id}"]
        assert app.routes[0].handler(None) == "/pets/:pet-id"

    def test_slug_sharing_a_segment_rejected(
        self, app: RecordingApp, routes_dir: Path,
    ) -> None:
        write_route(routes_dir, "files/[name].json.py", ROUTER_MODULE)
        with pytest.raises(RouteImportError, match="must span a whole segment"):
            register_routes(app, [routes_dir])
        assert app.routes == []

    def test_custom_export_name(self, app: RecordingApp, routes_dir: Path) -> None:
        write_route(routes_dir, "pets.py", ROUTER_MODULE.replace("router", "pets_router"))
        register_routes(app, [routes_dir], export_name="pets_router")
        assert app.paths == ["/pets"]

    def test_context_cleared_after_pass(self, app: RecordingApp, pets_tree: Path) -> None:
        register_routes(app, [pets_tree])
        with pytest.raises(RouteContextError):
            generate_url()

    def test_returns_records_in_order(self, app: RecordingApp, pets_tree: Path) -> None:
        records = register_routes(app, [pets_tree])
        assert [r.relative_path for r in records] == ["/pets/[pet].py", "/pets.py"]


# ---------------------------------------------------------------------------
# Hooks and dry runs
# ---------------------------------------------------------------------------


class TestHooks:

    def test_hooks_called_around_each_file(
        self, app: RecordingApp, pets_tree: Path,
    ) -> None:
        calls: list[tuple[str, str, int]] = []

        def before(path: str) -> None:
            calls.append(("before", path, len(app.routes)))

        def after(path: str) -> None:
            calls.append(("after", path, len(app.routes)))

        register_routes(app, [pets_tree], before_register=before, after_register=after)

        pet = str(pets_tree / "pets" / "[pet].py")
        pets = str(pets_tree / "pets.py")
        assert calls == [
            ("before", pet, 0),
            ("after", pet, 1),
            ("before", pets, 1),
            ("after", pets, 2),
        ]

    def test_hooks_see_route_context(self, app: RecordingApp, pets_tree: Path) -> None:
        seen: list[str] = []
        register_routes(
            app, [pets_tree], before_register=lambda path: seen.append(current_route().url),
        )
        assert seen == ["/pets/:pet", "/pets"]

    def test_dry_run_skips_loading(self, app: RecordingApp, routes_dir: Path) -> None:
        write_route(routes_dir, "broken.py", "raise RuntimeError('never imported')\n")
        visited: list[str] = []
        records = register_routes(
            app, [routes_dir], dry=True,
            before_register=lambda path: visited.append(path),
            after_register=lambda path: visited.append("after:" + path),
        )
        broken = str(routes_dir / "broken.py")
        assert len(records) == 1
        assert visited == [broken, "after:" + broken]
        assert app.routes == []

    def test_hook_error_aborts_pass(self, app: RecordingApp, pets_tree: Path) -> None:
        def before(path: str) -> None:
            raise ValueError("stop")

        with pytest.raises(ValueError, match="stop"):
            register_routes(app, [pets_tree], before_register=before)
        assert app.routes == []


# ---------------------------------------------------------------------------
# Module validation
# ---------------------------------------------------------------------------


class TestModuleValidation:

    def test_missing_export_stops_pass(self, app: RecordingApp, routes_dir: Path) -> None:
        write_route(routes_dir, "a.py", ROUTER_MODULE)
        bad = write_route(routes_dir, "b.py", "VALUE = 1\n")
        write_route(routes_dir, "c.py", ROUTER_MODULE)
        visited: list[str] = []

        with pytest.raises(RouteImportError, match="has no 'router' export") as exc_info:
            register_routes(app, [routes_dir], before_register=lambda path: visited.append(path))

        assert str(bad) in str(exc_info.value)
        assert exc_info.value.path == str(bad)
        assert app.paths == ["/a"]
        assert visited == [str(routes_dir / "a.py"), str(bad)]

    def test_export_must_be_router(self, app: RecordingApp, routes_dir: Path) -> None:
        write_route(routes_dir, "pets.py", "router = 'not a router'\n")
        with pytest.raises(RouteImportError, match="must be a burrow Router, got str"):
            register_routes(app, [routes_dir])

    def test_import_failure_wrapped(self, app: RecordingApp, routes_dir: Path) -> None:
        write_route(routes_dir, "pets.py", "import does_not_exist_anywhere\n")
        with pytest.raises(RouteImportError, match="Unable to import"):
            register_routes(app, [routes_dir])

    def test_host_rejection_wrapped(self, routes_dir: Path) -> None:
        app = RecordingApp(frozen=True)
        write_route(routes_dir, "pets.py", ROUTER_MODULE)
        with pytest.raises(RouteImportError, match="rejected by the host router") as exc_info:
            register_routes(app, [routes_dir])
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_non_module_object_rejected(self, app: RecordingApp, routes_dir: Path) -> None:
        write_route(routes_dir, "pets.py")
        loader = RegistryLoader({"/pets.py": lambda: 42})
        with pytest.raises(RouteImportError, match="did not load as a module"):
            register_routes(app, [routes_dir], loader=loader)

    @pytest.mark.parametrize(
        "obj",
        [lambda request: "ok", Router(), Exception("not a module")],
        ids=["function", "router", "instance"],
    )
    def test_objects_with_dict_are_not_modules(self, obj: object) -> None:
        with pytest.raises(RouteImportError, match=r"did not load as a module \(got"):
            router_for(obj, "/pets", source="/srv/routes/pets.py")


class TestImplicitRouter:
    """Modules without a Router export but with HTTP-method handlers."""

    def test_method_functions(self, app: RecordingApp, routes_dir: Path) -> None:
        write_route(routes_dir, "pets/[pet].py", (
            "async def get(request):\n"
            "    return 'show'\n"
            "\n"
            "async def delete(request):\n"
            "    return 'gone'\n"
        ))
        register_routes(app, [routes_dir])
        assert [(r.path, r.methods) for r in app.routes] == [
            ("/pets/{pet}", ["GET"]),
            ("/pets/{pet}", ["DELETE"]),
        ]

    def test_catch_all_handler_maps_to_get(
        self, app: RecordingApp, routes_dir: Path,
    ) -> None:
        write_route(routes_dir, "health.py", "def handler(request):\n    return 'ok'\n")
        register_routes(app, [routes_dir])
        assert [(r.path, r.methods) for r in app.routes] == [("/health", ["GET"])]

    def test_handler_ignored_when_get_exists(self) -> None:
        module = types.SimpleNamespace(get=lambda r: "get", handler=lambda r: "handler")
        router = router_for(module, "/search")
        assert len(router) == 1
        assert router.entries[0].handler(None) == "get"

    def test_explicit_router_wins(self) -> None:
        explicit = Router()
        module = types.SimpleNamespace(router=explicit, get=lambda r: "get")
        assert router_for(module, "/x") is explicit


# ---------------------------------------------------------------------------
# Loader substitution and observability
# ---------------------------------------------------------------------------


class TestLoaderSubstitution:

    def test_registry_loader(self, app: RecordingApp, pets_tree: Path) -> None:
        def make(tag: str):
            def factory() -> object:
                router = Router()
                router.get(generate_url())(lambda: tag)
                return types.SimpleNamespace(router=router)
            return factory

        loader = RegistryLoader({
            "/pets.py": make("pets"),
            "/pets/[pet].py": make("pet"),
        })
        register_routes(app, [pets_tree], loader=loader)
        assert {r.path: r.handler() for r in app.routes} == {
            "/pets": "pets",
            "/pets/{pet}": "pet",
        }


class TestEventLog:

    def test_events_recorded(self, app: RecordingApp, pets_tree: Path) -> None:
        log = EventLog()
        register_routes(app, [pets_tree], event_log=log)

        discovered = log.query(event_type=RouteDiscovered)
        registered = log.query(event_type=RouteRegistered)
        assert len(discovered) == 2
        assert {e.url for e in registered} == {"/pets", "/pets/:pet"}
        assert all(not e.dry and e.load_ms >= 0 for e in registered)

    def test_dry_events_flagged(self, app: RecordingApp, pets_tree: Path) -> None:
        log = EventLog()
        register_routes(app, [pets_tree], dry=True, event_log=log)
        assert all(e.dry for e in log.query(event_type=RouteRegistered))
