"""Burrow CLI — burrow routes.

Entry point for the ``burrow`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the burrow CLI."""
    parser = argparse.ArgumentParser(
        prog="burrow",
        description="File-system route discovery for chirp apps.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # burrow routes
    routes_parser = subparsers.add_parser(
        "routes",
        help="List discovered routes without importing them",
    )
    routes_parser.add_argument(
        "paths", nargs="*", help="Base paths to scan (default: from config)",
    )
    routes_parser.add_argument("--root", default=".", help="Project root directory")
    routes_parser.add_argument("--slug-pattern", default=None, help="Slug regex")
    routes_parser.add_argument("--ignore-pattern", default=None, help="Ignore regex")
    routes_parser.add_argument(
        "--raw-order", action="store_true",
        help="Use directory-listing order instead of sorting entries",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from burrow import __version__

    return __version__


def run_routes(args: argparse.Namespace) -> None:
    """Print the route table a registration pass would produce.

    Runs a dry registration, so route modules are never imported.
    """
    from burrow._errors import BurrowError
    from burrow.config_loader import load_config
    from burrow.observability.log import EventLog
    from burrow.routes.registration import register_routes

    overrides: dict[str, object] = {"dry": True}
    if args.paths:
        overrides["paths"] = tuple(args.paths)
    if args.slug_pattern is not None:
        overrides["slug_pattern"] = args.slug_pattern
    if args.ignore_pattern is not None:
        overrides["ignore_pattern"] = args.ignore_pattern
    if args.raw_order:
        overrides["sort_entries"] = False

    log = EventLog(max_events=None)

    try:
        config = load_config(Path(args.root), **overrides)
        register_routes(
            None,  # type: ignore[arg-type]  # dry runs never touch the app
            config.base_paths,
            slug_pattern=config.slug_pattern,
            ignore_pattern=config.ignore_pattern,
            extensions=config.extensions,
            dry=True,
            event_log=log,
            sort_entries=config.sort_entries,
        )
    except BurrowError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = log.routes()
    if not rows:
        print("No routes found.")
        return

    width = max(max(len(url) for url, _ in rows), 4)  # "PATH" header
    fmt = f"{{:<{width}}}  {{}}"
    print(fmt.format("PATH", "FILE"))
    print("-" * min(width + 2 + max(len(f) for _, f in rows), 80))
    for url, path in rows:
        print(fmt.format(url, path))


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        run_routes(args)


if __name__ == "__main__":
    main()
