"""Ignore and slug patterns evaluated against path segments."""

import re
from collections.abc import Iterable

from burrow._errors import ConfigError
from burrow._types import PatternLike

# Bracket-delimited segments such as ``[pet]``
DEFAULT_SLUG_PATTERN = r"\[(.+?)\]"

# Names starting with an underscore (also covers __init__.py and __pycache__)
DEFAULT_IGNORE_PATTERN = r"^_"

DEFAULT_EXTENSIONS: tuple[str, ...] = (".py",)


def compile_pattern(pattern: PatternLike) -> re.Pattern[str]:
    """Return *pattern* compiled, leaving precompiled patterns untouched.

    Raises:
        ConfigError: If *pattern* is not a valid regular expression.

    """
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as exc:
        msg = f"Invalid pattern {pattern!r}: {exc}"
        raise ConfigError(msg) from exc


def compile_slug_pattern(pattern: PatternLike) -> re.Pattern[str]:
    """Compile a slug pattern and check it has exactly one capture group.

    Raises:
        ConfigError: If the pattern is invalid or has zero or several groups.

    """
    compiled = compile_pattern(pattern)
    if compiled.groups != 1:
        msg = (
            f"Slug pattern {compiled.pattern!r} must contain exactly one "
            f"capture group, found {compiled.groups}"
        )
        raise ConfigError(msg)
    return compiled


def is_ignored(name: str, pattern: re.Pattern[str]) -> bool:
    """True if a file or directory *name* matches the ignore pattern."""
    return pattern.search(name) is not None


def has_route_extension(name: str, extensions: Iterable[str]) -> bool:
    """True if *name* ends with one of the accepted route-file extensions."""
    return name.endswith(tuple(extensions))
