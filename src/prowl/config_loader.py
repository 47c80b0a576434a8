"""Load ProwlConfig from prowl.yaml or prowl.toml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from prowl._errors import ConfigError
from prowl.config import ProwlConfig

CONFIG_FILES: tuple[str, ...] = ("prowl.yaml", "prowl.yml", "prowl.toml")

_KNOWN_KEYS: frozenset[str] = frozenset({
    "routes_dir",
    "output_dir",
    "extension",
    "entry_name",
    "data_prefix",
    "template",
})


def load_config(root: Path, **overrides: object) -> ProwlConfig:
    """Load ProwlConfig from root, optionally merging prowl.yaml.

    Looks for prowl.yaml, prowl.yml, or prowl.toml in root. If found, loads
    and merges with overrides. Overrides take precedence; ``None`` overrides
    are ignored so unset CLI flags do not mask file values.

    Raises:
        ConfigError: If the config file cannot be parsed, names unknown keys,
            or gives a key a non-string value.

    """
    file_config = _read_prowl_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    unknown = sorted(set(merged) - _KNOWN_KEYS)
    if unknown:
        msg = f"Unknown prowl config keys: {', '.join(unknown)}"
        raise ConfigError(msg)
    for key, value in merged.items():
        if value is None and key == "template":
            continue
        if not isinstance(value, str):
            msg = f"Config key {key!r} must be a string, got {type(value).__name__}"
            raise ConfigError(msg)
    return ProwlConfig(root=root, **merged)  # type: ignore[arg-type]


def find_config_file(root: Path) -> Path | None:
    """Return the first config file present in root, or None."""
    for name in CONFIG_FILES:
        path = root / name
        if path.is_file():
            return path
    return None


def _read_prowl_config(root: Path) -> dict[str, object]:
    """Read prowl config from yaml/toml if present. Returns empty dict otherwise."""
    path = find_config_file(root)
    if path is None:
        return {}
    if path.suffix == ".toml":
        return _parse_toml(path)
    return _parse_yaml(path)


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Invalid config file {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"Config file {path} must contain a mapping"
        raise ConfigError(msg)
    return _flatten_prowl_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Invalid config file {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_prowl_section(data)


def _flatten_prowl_section(data: dict[str, object]) -> dict[str, object]:
    """Extract prowl.* keys into top-level config."""
    result: dict[str, object] = {}
    prowl = data.get("prowl")
    if isinstance(prowl, dict):
        result.update(prowl)
    for k, v in data.items():
        if k != "prowl" and k in _KNOWN_KEYS:
            result[k] = v
    return result
