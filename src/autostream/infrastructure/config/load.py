from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides


_SECTION_KEYS: set[str] = {"http", "upstream", "logging", "autostream"}

_TOP_LEVEL_KEYS: tuple[str, ...] = ("app_name", "environment")

# Flat key (env vars, CLI flags) -> (section, key) in config.yaml.
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "http_timeout_seconds": ("http", "timeout_seconds"),
    "http_user_agent": ("http", "user_agent"),
    "upstream_url": ("upstream", "url"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
}


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge *override* into *base* in place; nested mappings merge key by key."""
    for key, value in override.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _deep_merge(current, value)
        else:
            base[key] = value
    return base


def _normalize_layer(data: Mapping[str, Any]) -> dict[str, Any]:
    """Bring one config layer into the sectioned config.yaml shape.

    Sections (``http``, ``upstream``, ``logging``, ``autostream``) are
    copied as-is; flat keys such as ``upstream_url`` are moved into
    their section. Unknown keys are dropped.
    """
    out: dict[str, Any] = {
        section: dict(data[section])
        for section in _SECTION_KEYS
        if isinstance(data.get(section), Mapping)
    }
    for key in _TOP_LEVEL_KEYS:
        if key in data:
            out[key] = data[key]
    for flat_key, (section, section_key) in _FLAT_KEYS.items():
        if flat_key in data:
            out.setdefault(section, {})[section_key] = data[flat_key]
    return out


def _read_yaml_config(config_path: Path) -> dict[str, Any]:
    parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"{config_path}: top level must be a mapping, got {type(parsed).__name__}")
    return parsed


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Build the validated AppConfig.

    Precedence, lowest first: built-in defaults, YAML file,
    ``AUTOSTREAM_*`` environment (including a ``.env`` file), CLI flags.
    Read-only: nothing is written to disk.
    """
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        # Real environment variables win over the .env file.
        load_dotenv(dotenv_path, override=False)

    merged = _normalize_layer(deepcopy(DEFAULT_CONFIG))

    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(config_path)
        _deep_merge(merged, _normalize_layer(_read_yaml_config(config_path)))

    _deep_merge(merged, _normalize_layer(EnvOverrides().to_update_dict()))
    _deep_merge(merged, _normalize_layer(cli_overrides or {}))

    return AppConfig.model_validate(merged)
