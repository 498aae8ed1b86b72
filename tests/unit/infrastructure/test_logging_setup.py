"""Tests for the structlog/uvicorn logging config builder."""

from __future__ import annotations

import logging

import structlog

from autostream.infrastructure.config.schema import AppConfig
from autostream.infrastructure.logging.setup import (
    BASE_LOGGING_CONFIG,
    _LevelRangeFilter,
    build_logging_config,
)


def _record(level: int) -> logging.LogRecord:
    return logging.LogRecord("t", level, __file__, 1, "msg", None, None)


class TestBuildLoggingConfig:
    def test_handlers_use_structlog_formatter(self) -> None:
        cfg = build_logging_config(AppConfig())
        assert cfg["handlers"]["default"]["formatter"] == "structlog"
        assert cfg["handlers"]["access"]["formatter"] == "structlog"
        assert cfg["formatters"]["structlog"]["()"] is structlog.stdlib.ProcessorFormatter

    def test_level_applied_everywhere(self) -> None:
        cfg = build_logging_config(AppConfig(log_level="DEBUG"))
        assert cfg["root"]["level"] == "DEBUG"
        assert {c["level"] for c in cfg["loggers"].values()} == {"DEBUG"}

    def test_json_renderer_in_prod(self) -> None:
        cfg = build_logging_config(AppConfig(environment="prod"))
        renderer = cfg["formatters"]["structlog"]["processors"][-1]
        assert isinstance(renderer, structlog.processors.JSONRenderer)

    def test_console_renderer_in_dev(self) -> None:
        cfg = build_logging_config(AppConfig(environment="dev"))
        renderer = cfg["formatters"]["structlog"]["processors"][-1]
        assert isinstance(renderer, structlog.dev.ConsoleRenderer)

    def test_base_config_not_mutated(self) -> None:
        build_logging_config(AppConfig(log_level="ERROR"))
        assert "structlog" not in BASE_LOGGING_CONFIG["formatters"]
        assert BASE_LOGGING_CONFIG["loggers"]["uvicorn"]["level"] == "INFO"


class TestLevelRangeFilter:
    def test_max_level(self) -> None:
        f = _LevelRangeFilter(max_level=logging.WARNING)
        assert f.filter(_record(logging.INFO))
        assert f.filter(_record(logging.WARNING))
        assert not f.filter(_record(logging.ERROR))

    def test_min_level(self) -> None:
        f = _LevelRangeFilter(min_level=logging.ERROR)
        assert not f.filter(_record(logging.WARNING))
        assert f.filter(_record(logging.CRITICAL))
