"""Burrow error hierarchy.

All burrow-specific errors inherit from BurrowError for easy catching.
Where a builtin exception has the same meaning, the burrow error also
inherits from it so ``except ImportError`` and friends keep working.
"""


class BurrowError(Exception):
    """Base error for all burrow operations."""


class ConfigError(BurrowError):
    """Invalid or missing configuration."""


class PathError(BurrowError):
    """A base path or traversed entry could not be statted or listed."""


class EmptyDirectoryError(BurrowError):
    """A relative path was derived while a directory frame was empty."""


class RouteImportError(BurrowError, ImportError):
    """A route module failed to load or did not export a usable router."""


class UnsupportedEntryError(BurrowError, NotImplementedError):
    """A filesystem entry was neither a regular file nor a directory."""


class RouteContextError(BurrowError, TypeError):
    """Route context was read outside of a route module load."""
