"""Traversal engine: walk base paths and collect route files.

The walk is iterative.  Each open directory is a *frame* holding the names
still to be visited; frames form a stack whose top is the deepest open
directory.  Entries are consumed from the tail of each frame, and a directory
entry is only popped from its parent once the frame under it is exhausted, so
the last element of every frame always spells out the path being visited::

    routes/
      pets.py
      pets/
        [pet].py

    stack                                 relative path
    [["pets.py", "pets"]]                 /pets
    [["pets.py", "pets"], ["[pet].py"]]   /pets/[pet].py
    [["pets.py"]]                         /pets.py

Traversal never recurses, so tree depth is bounded by memory, not by the
interpreter's recursion limit.
"""

import logging
import os
import stat
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from burrow._errors import EmptyDirectoryError, PathError, UnsupportedEntryError
from burrow._types import BasePath, PatternLike, RelativePath
from burrow.routes.patterns import (
    DEFAULT_EXTENSIONS,
    DEFAULT_IGNORE_PATTERN,
    compile_pattern,
    has_route_extension,
    is_ignored,
)

logger = logging.getLogger("burrow.routes")

# Relative path recorded for a base path that is itself a file
ROOT_RELATIVE_PATH: RelativePath = "/"


@dataclass(frozen=True, slots=True)
class RouteRecord:
    """A discovered route file.

    Attributes:
        full_path: Absolute path to the route file.
        base_path: Normalized base path the file was found under.
        relative_path: POSIX path of the file relative to *base_path*, with a
            leading ``/``.  ``/`` when the base path is the file itself.

    """

    full_path: Path
    base_path: BasePath
    relative_path: RelativePath


def normalize_base_path(path: str | os.PathLike[str]) -> BasePath:
    """Strip a leading ``./`` and a trailing ``/`` from *path*.

    ``./src/routes/`` -> ``src/routes``

    """
    text = os.fspath(path)
    text = text.removeprefix("./")
    if len(text) > 1:
        text = text.removesuffix("/")
    return text


def discover_routes(
    paths: Iterable[str | os.PathLike[str]],
    *,
    ignore_pattern: PatternLike = DEFAULT_IGNORE_PATTERN,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    sort_entries: bool = True,
) -> dict[str, RouteRecord]:
    """Walk every base path and return the route files found, in order.

    Base paths are deduplicated, keeping first-seen order.  The result maps
    each file's absolute path (as a string) to its :class:`RouteRecord`;
    insertion order is traversal order.

    Args:
        paths: Base paths (files or directories) to scan.
        ignore_pattern: Regex searched against each entry *name*.  Matching
            directories are pruned, matching files are skipped.
        extensions: Accepted route-file suffixes.
        sort_entries: Visit siblings in ascending name order.  When False the
            raw ``os.listdir`` order is consumed from its tail.

    Raises:
        PathError: A base path is empty, or a path could not be statted or listed.
        UnsupportedEntryError: An entry is neither a file nor a directory.
        EmptyDirectoryError: Internal frame bookkeeping went out of sync.

    """
    ignore = compile_pattern(ignore_pattern)
    accepted = tuple(extensions)
    records: dict[str, RouteRecord] = {}

    for base_path in dict.fromkeys(normalize_base_path(p) for p in paths):
        if not base_path:
            msg = "Base path is empty; use '.' for the current directory"
            raise PathError(msg)
        base = Path(base_path).resolve()
        mode = _stat_mode(base)

        if stat.S_ISREG(mode):
            _emit(records, RouteRecord(base, base_path, ROOT_RELATIVE_PATH))
            continue

        if not stat.S_ISDIR(mode):
            msg = f"Base path {base_path!r} is neither a file nor a directory"
            raise UnsupportedEntryError(msg)

        frames: list[list[str]] = [_list_dir(base, sort_entries)]

        while frames:
            top = frames[-1]

            # Finished the directory on top: pop it, then the entry that led
            # into it from the parent frame.
            if not top:
                frames.pop()
                if frames:
                    frames[-1].pop()
                continue

            relative_path = derive_relative_path(frames)
            full_path = base / relative_path.lstrip("/")
            name = top[-1]
            mode = _stat_mode(full_path)

            if stat.S_ISREG(mode):
                top.pop()
                if not has_route_extension(name, accepted):
                    continue
                if is_ignored(name, ignore):
                    continue
                _emit(records, RouteRecord(full_path, base_path, relative_path))
                continue

            if stat.S_ISDIR(mode):
                if is_ignored(name, ignore):
                    logger.debug("Pruned ignored directory %s", full_path)
                    top.pop()
                    continue
                frames.append(_list_dir(full_path, sort_entries))
                continue

            msg = f"Unsupported filesystem entry {str(full_path)!r}"
            raise UnsupportedEntryError(msg)

    return records


def derive_relative_path(frames: list[list[str]]) -> RelativePath:
    """Join the last element of every frame into a ``/``-rooted path.

    Raises:
        EmptyDirectoryError: If any frame on the stack is empty.

    """
    parts = [""]
    for frame in frames:
        if not frame:
            msg = "Unable to derive relative path: a directory frame is empty"
            raise EmptyDirectoryError(msg)
        parts.append(frame[-1])
    return "/".join(parts)


def _emit(records: dict[str, RouteRecord], record: RouteRecord) -> None:
    key = str(record.full_path)
    if key in records:
        return
    logger.debug("Discovered route file %s (%s)", key, record.relative_path)
    records[key] = record


def _stat_mode(path: Path) -> int:
    """Return the ``st_mode`` of *path*, following symlinks.

    Raises:
        UnsupportedEntryError: *path* is a symlink pointing nowhere.
        PathError: *path* does not exist or cannot be statted.

    """
    try:
        return path.stat().st_mode
    except FileNotFoundError as exc:
        if path.is_symlink():
            msg = f"Broken symlink {str(path)!r}"
            raise UnsupportedEntryError(msg) from exc
        msg = f"Path {str(path)!r} does not exist"
        raise PathError(msg) from exc
    except OSError as exc:
        msg = f"Unable to stat {str(path)!r}: {exc}"
        raise PathError(msg) from exc


def _list_dir(path: Path, sort_entries: bool) -> list[str]:
    """List *path* as a frame whose tail is the next entry to visit."""
    try:
        names = os.listdir(path)
    except OSError as exc:
        msg = f"Unable to list directory {str(path)!r}: {exc}"
        raise PathError(msg) from exc
    if sort_entries:
        names.sort(reverse=True)
    return names
