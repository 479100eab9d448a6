"""Load DocgenConfig from docgen.yaml / docgen.toml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from docgen._errors import ConfigError
from docgen.config import DocgenConfig

CONFIG_NAMES = ("docgen.yaml", "docgen.yml", "docgen.toml")

# Keys used by the original docgen.config.js, accepted alongside snake_case.
_KEY_ALIASES = {
    "baseDir": "base_dir",
    "docgenDir": "docgen_dir",
    "originContentDir": "origin_content_dir",
    "ignoreFiles": "ignore_files",
    "splitString": "split_string",
    "combinedContentFile": "combined_content_file",
    "orderedContentFile": "ordered_content_file",
    "menuContentFile": "menu_content_file",
    "debounceMs": "debounce_ms",
}

_KNOWN_KEYS = frozenset(
    {
        "base_dir",
        "docgen_dir",
        "origin_content_dir",
        "languages",
        "ignore_files",
        "split_string",
        "combined_content_file",
        "ordered_content_file",
        "menu_content_file",
        "debounce_ms",
    }
)


def load_config(root: Path, **overrides: object) -> DocgenConfig:
    """Load DocgenConfig from root, optionally merging a config file.

    Looks for docgen.yaml, docgen.yml, or docgen.toml in root. If found, loads
    and merges with overrides. Overrides take precedence; ``None`` overrides
    are ignored so CLI defaults never mask file values.

    Raises:
        ConfigError: If the config file cannot be parsed.

    """
    file_config = _read_docgen_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    for key in ("languages", "ignore_files"):
        if key in merged and isinstance(merged[key], str):
            merged[key] = (merged[key],)
    return DocgenConfig(root=root, **merged)


def _read_docgen_config(root: Path) -> dict[str, object]:
    """Read docgen config from yaml/toml if present. Returns empty dict otherwise."""
    for name in CONFIG_NAMES:
        path = root / name
        if not path.is_file():
            continue
        if path.suffix == ".toml":
            return _parse_toml(path)
        return _parse_yaml(path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Cannot read {path.name}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_docgen_section(data, path)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Cannot read {path.name}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_docgen_section(data, path)


def _flatten_docgen_section(data: object, path: Path) -> dict[str, object]:
    """Extract docgen.* keys into top-level config, normalizing key names."""
    if not isinstance(data, dict):
        msg = f"{path.name} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)

    raw: dict[str, object] = {}
    section = data.get("docgen")
    if isinstance(section, dict):
        raw.update(section)
    for k, v in data.items():
        if k != "docgen":
            raw.setdefault(k, v)

    result: dict[str, object] = {}
    for k, v in raw.items():
        key = _KEY_ALIASES.get(k, k)
        if key in _KNOWN_KEYS:
            result[key] = v
    return result
