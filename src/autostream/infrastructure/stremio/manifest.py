"""Stremio addon manifest for AutoStream."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from autostream.infrastructure.stremio.options import configured_debrid_names

ADDON_ID = "community.autostream"
ADDON_VERSION = "0.1.0"
ADDON_NAME = "AutoStream"

_DESCRIPTION = (
    "AutoStream picks the single best stream for each title, balancing "
    "quality with seeders. Debrid can be enabled via the Configure tab."
)


def addon_name(config: Mapping[str, Any]) -> str:
    """``AutoStream`` plus configured debrid short names, e.g. ``AutoStream RD/PM``."""
    suffix = "/".join(configured_debrid_names(config))
    return f"{ADDON_NAME} {suffix}" if suffix else ADDON_NAME


def build_manifest(config: Mapping[str, Any]) -> dict[str, Any]:
    """Build the Stremio addon manifest (stream resource only, no catalogs)."""
    return {
        "id": ADDON_ID,
        "version": ADDON_VERSION,
        "name": addon_name(config),
        "description": _DESCRIPTION,
        "catalogs": [],
        "resources": [
            {
                "name": "stream",
                "types": ["movie", "series"],
                "idPrefixes": ["tt", "kitsu"],
            }
        ],
        "types": ["movie", "series"],
        "behaviorHints": {
            "configurable": True,
            "configurationRequired": False,
        },
    }
