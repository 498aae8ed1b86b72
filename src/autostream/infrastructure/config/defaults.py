"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "autostream",
    "environment": "dev",
    "http": {
        "timeout_seconds": 15.0,
        "user_agent": "AutoStream/0.1.0",
    },
    "upstream": {
        "url": "https://torrentio.strem.fun",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "autostream": {
        "prefer_lower_if_much_faster": True,
        "ratio_need": 1.35,
        "delta_need": 200.0,
        "rule": "ratio_and_delta",
        "two_outputs": True,
        "debrid_ratio_factor": 1.2,
        "title_timeout_seconds": 5.0,
    },
}
