from __future__ import annotations

from .load import load_config
from .schema import AppConfig, AutoStreamConfig, EnvOverrides

__all__ = ["AppConfig", "AutoStreamConfig", "EnvOverrides", "load_config"]
