"""Load BurrowConfig from burrow.yaml / burrow.toml if present.

Merges file config with keyword overrides. Overrides take precedence.
"""

from __future__ import annotations

import tomllib
from dataclasses import fields
from pathlib import Path

import yaml

from burrow._errors import ConfigError
from burrow.config import BurrowConfig

_CONFIG_KEYS: frozenset[str] = frozenset(
    f.name for f in fields(BurrowConfig) if f.name != "root"
)


def load_config(root: Path, **overrides: object) -> BurrowConfig:
    """Load BurrowConfig for *root*, optionally merging a config file.

    Looks for burrow.yaml, burrow.yml, or burrow.toml in *root*.  Keys may sit
    at the top level or under a ``burrow`` section.

    Raises:
        ConfigError: If the config file is malformed or has unknown keys.

    """
    file_config = _read_burrow_config(root)
    merged = {**file_config, **overrides}
    unknown = sorted(set(merged) - _CONFIG_KEYS)
    if unknown:
        msg = f"Unknown burrow config key(s): {', '.join(unknown)}"
        raise ConfigError(msg)
    return BurrowConfig(root=root, **merged)  # type: ignore[arg-type]


def _read_burrow_config(root: Path) -> dict[str, object]:
    """Read burrow config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("burrow.yaml", "burrow.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "burrow.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return _flatten_burrow_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_burrow_section(data)


def _flatten_burrow_section(data: dict[str, object]) -> dict[str, object]:
    """Extract burrow.* keys into top-level config.

    Unrelated top-level keys are left alone; everything under ``burrow`` must
    be a known setting.
    """
    result: dict[str, object] = {}
    for k, v in data.items():
        if k != "burrow" and k in _CONFIG_KEYS:
            result[k] = v
    section = data.get("burrow")
    if isinstance(section, dict):
        result.update(section)
    return result
