"""Shared type definitions for burrow."""

import re
from collections.abc import Callable
from typing import Any

# Base path as supplied by the user (file or directory)
type BasePath = str

# Path of a route file relative to its base path, e.g. "/pets/[pet].py"
type RelativePath = str

# Route URL path (e.g., "/pets", "/pets/:pet")
type RoutePath = str

# Regex given either as source text or precompiled
type PatternLike = str | re.Pattern[str]

# Handler function collected by a Router
type HandlerFunc = Callable[..., Any]

# before_register / after_register callback, called as hook(path=...)
type RegisterHook = Callable[..., object]
