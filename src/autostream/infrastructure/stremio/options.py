"""Addon configuration parsing: loosely typed strings -> CurationSettings.

All coercion is permissive; values that do not parse fall back to the
configured defaults instead of failing the request.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import unquote

import structlog

from autostream.domain.entities.stremio import (
    CurationSettings,
    SelectionOptions,
    SelectionRule,
)

log = structlog.get_logger(__name__)

_TRUTHY = frozenset({"1", "true", "yes", "on"})

# Leading float literal, like JavaScript parseFloat ("1.5x" -> 1.5).
_NUMBER_PREFIX_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# Config key -> short name shown in the manifest.
DEBRID_PROVIDERS: dict[str, str] = {
    "realdebrid": "RD",
    "premiumize": "PM",
    "alldebrid": "AD",
    "debridlink": "DL",
    "easydebrid": "ED",
    "offcloud": "OC",
    "torbox": "TB",
    "putio": "Putio",
}

DEFAULT_SORT = "autostream"


def parse_bool(value: Any, default: bool) -> bool:
    """Absent -> default; otherwise true only for 1/true/yes/on."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def parse_number(value: Any, default: float) -> float:
    """Parse a leading number; absent, unparsable or non-finite -> default."""
    if value is None or isinstance(value, bool):
        return default
    text = value if isinstance(value, (int, float)) else str(value)
    if isinstance(text, str):
        m = _NUMBER_PREFIX_RE.match(text)
        if not m:
            log.debug("config_number_invalid", value=text, default=default)
            return default
        text = m.group(0)
    try:
        number = float(text)
    except (OverflowError, ValueError):
        log.debug("config_number_out_of_range", default=default)
        return default
    return number if math.isfinite(number) else default


def parse_rule(value: Any, default: SelectionRule) -> SelectionRule:
    if value is None:
        return default
    text = str(value).strip().lower()
    if text == "ratio_or_delta":
        return "ratio_or_delta"
    if text == "ratio_and_delta":
        return "ratio_and_delta"
    log.debug("config_rule_invalid", value=text, default=default)
    return default


def _first_present(config: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = config.get(key)
        if value is not None:
            return value
    return None


def has_debrid_configured(config: Mapping[str, Any]) -> bool:
    """True when at least one debrid provider key is present and truthy."""
    return any(config.get(key) for key in DEBRID_PROVIDERS)


def configured_debrid_names(config: Mapping[str, Any]) -> list[str]:
    """Short names of configured debrid providers, in declaration order."""
    return [short for key, short in DEBRID_PROVIDERS.items() if config.get(key)]


def parse_addon_config(raw: str | None) -> dict[str, str]:
    """Parse a Stremio config path segment: ``key=value|key=value``.

    Keys are lower-cased; segments without ``=`` are ignored.
    """
    if not raw:
        return {}
    out: dict[str, str] = {}
    for part in unquote(raw).split("|"):
        key, sep, value = part.partition("=")
        key = key.strip().lower()
        if not sep or not key:
            continue
        out[key] = value.strip()
    return out


def parse_selection_options(
    config: Mapping[str, Any],
    *,
    defaults: SelectionOptions | None = None,
) -> SelectionOptions:
    """Build SelectionOptions from addon config keys.

    Keys: preferlower, ratio, delta, rule, top2/two/twooutputs, tighten.
    Without an explicit ``tighten``, tightening follows whether a debrid
    provider is configured.
    """
    base = defaults or SelectionOptions()
    return SelectionOptions(
        prefer_lower_if_much_faster=parse_bool(
            config.get("preferlower"), base.prefer_lower_if_much_faster
        ),
        ratio_need=parse_number(config.get("ratio"), base.ratio_need),
        delta_need=parse_number(config.get("delta"), base.delta_need),
        rule=parse_rule(config.get("rule"), base.rule),
        two_outputs=parse_bool(
            _first_present(config, "top2", "two", "twooutputs"), base.two_outputs
        ),
        tighten_when_debrid=parse_bool(
            config.get("tighten"), has_debrid_configured(config)
        ),
        tighten_ratio_factor=base.tighten_ratio_factor,
    )


def parse_curation_settings(
    config: Mapping[str, Any],
    *,
    defaults: SelectionOptions | None = None,
) -> CurationSettings:
    """Single validation step from raw addon config to CurationSettings."""
    sort = str(config.get("sort") or DEFAULT_SORT).strip().lower()
    return CurationSettings(
        sort=sort,
        beautify=parse_bool(config.get("beautify"), False),
        selection=parse_selection_options(config, defaults=defaults),
    )
