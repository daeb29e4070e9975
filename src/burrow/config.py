"""Burrow configuration.

BurrowConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path

from burrow.routes.patterns import (
    DEFAULT_EXTENSIONS,
    DEFAULT_IGNORE_PATTERN,
    DEFAULT_SLUG_PATTERN,
)


@dataclass(frozen=True, slots=True)
class BurrowConfig:
    """Configuration for a route registration pass.

    Attributes:
        root: Project root that relative base paths resolve against.
              Always resolved to an absolute path on construction.
        paths: Base paths (files or directories) holding route modules.
        slug_pattern: Regex with one capture group marking parameter segments.
        ignore_pattern: Regex searched against file and directory names to skip.
        extensions: Accepted route-file suffixes.
        export_name: Module attribute holding each route module's Router.
        dry: Walk and run hooks without importing route modules.
        sort_entries: Visit sibling entries in ascending name order instead
            of raw directory-listing order.

    """

    root: Path = field(default_factory=Path.cwd)
    paths: tuple[str, ...] = ("routes",)
    slug_pattern: str = DEFAULT_SLUG_PATTERN
    ignore_pattern: str = DEFAULT_IGNORE_PATTERN
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    export_name: str = "router"
    dry: bool = False
    sort_entries: bool = True

    def __post_init__(self) -> None:
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        # Config files and CLI flags hand over lists (or a lone string)
        if isinstance(self.paths, str):
            object.__setattr__(self, "paths", (self.paths,))
        elif not isinstance(self.paths, tuple):
            object.__setattr__(self, "paths", tuple(self.paths))
        if isinstance(self.extensions, str):
            object.__setattr__(self, "extensions", (self.extensions,))
        elif not isinstance(self.extensions, tuple):
            object.__setattr__(self, "extensions", tuple(self.extensions))

    @property
    def base_paths(self) -> tuple[Path, ...]:
        """Base paths resolved against *root*, in configured order."""
        return tuple(
            p if p.is_absolute() else self.root / p
            for p in (Path(raw) for raw in self.paths)
        )
