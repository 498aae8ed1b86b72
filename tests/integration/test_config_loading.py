"""Integration tests for configuration loading with layered precedence.

Tests the real load_config() function with actual YAML files, environment
variables, and CLI overrides to verify precedence: defaults < YAML < ENV < CLI.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from autostream.infrastructure.config.load import load_config

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "AUTOSTREAM_APP_NAME",
        "AUTOSTREAM_ENVIRONMENT",
        "AUTOSTREAM_HTTP_TIMEOUT_SECONDS",
        "AUTOSTREAM_HTTP_USER_AGENT",
        "AUTOSTREAM_UPSTREAM_URL",
        "AUTOSTREAM_LOG_LEVEL",
        "AUTOSTREAM_LOG_FORMAT",
    ):
        # setenv first so teardown also drops values a .env file sets
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture()
def yaml_config(tmp_path: Path) -> Path:
    """Write a minimal YAML config and return its path."""
    config = {
        "app_name": "autostream-test",
        "environment": "test",
        "http": {
            "timeout_seconds": 9.0,
            "user_agent": "TestAgent/1.0",
        },
        "upstream": {"url": "https://upstream.example/"},
        "logging": {"level": "DEBUG", "format": "console"},
        "autostream": {
            "ratio_need": 1.5,
            "rule": "ratio_or_delta",
            "bonus_scores": {"web": 0, "disc": 0, "codec": 0, "debrid": 0},
        },
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(config), encoding="utf-8")
    return path


class TestDefaultsOnly:
    """Load with no YAML, no ENV, no CLI — pure defaults."""

    def test_defaults_produce_valid_config(self) -> None:
        config = load_config()
        assert config.app_name == "autostream"
        assert config.environment == "dev"
        assert config.http_timeout_seconds == 15.0
        assert config.upstream_url == "https://torrentio.strem.fun"
        assert config.log_level == "INFO"
        assert config.log_format == "console"  # dev → console

    def test_autostream_defaults(self) -> None:
        opts = load_config().autostream.default_options()
        assert opts.ratio_need == 1.35
        assert opts.delta_need == 200.0
        assert opts.rule == "ratio_and_delta"
        assert opts.two_outputs is True
        assert opts.tighten_ratio_factor == 1.2

    def test_defaults_derive_log_format_from_environment(self) -> None:
        config = load_config(cli_overrides={"environment": "prod"})
        assert config.log_format == "json"


class TestYamlOverrides:
    """YAML values override defaults."""

    def test_yaml_overrides_defaults(self, yaml_config: Path) -> None:
        config = load_config(config_path=yaml_config)
        assert config.app_name == "autostream-test"
        assert config.environment == "test"
        assert config.http_timeout_seconds == 9.0
        assert config.http_user_agent == "TestAgent/1.0"
        assert config.upstream_url == "https://upstream.example"
        assert config.log_level == "DEBUG"
        assert config.autostream.ratio_need == 1.5
        assert config.autostream.rule == "ratio_or_delta"
        assert config.autostream.bonus_scores["web"] == 0

    def test_autostream_partial_override_preserves_defaults(
        self, yaml_config: Path
    ) -> None:
        config = load_config(config_path=yaml_config)
        assert config.autostream.delta_need == 200.0
        assert config.autostream.quality_scores["2160p"] == 1000

    def test_yaml_file_not_found_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(config_path=tmp_path / "nonexistent.yaml")

    def test_yaml_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(config_path=path)

    def test_empty_yaml_keeps_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(config_path=path).app_name == "autostream"

    def test_invalid_rule_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"autostream": {"rule": "fastest"}}), encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(config_path=path)

    def test_negative_ratio_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"autostream": {"ratio_need": -1}}), encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(config_path=path)


class TestEnvOverrides:
    """Environment variables override YAML and defaults."""

    def test_env_overrides_yaml(
        self, yaml_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("AUTOSTREAM_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("AUTOSTREAM_UPSTREAM_URL", "https://env.example")

        config = load_config(config_path=yaml_config)
        assert config.log_level == "WARNING"
        assert config.upstream_url == "https://env.example"
        # YAML values not overridden by ENV stay
        assert config.app_name == "autostream-test"

    def test_env_overrides_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AUTOSTREAM_ENVIRONMENT", "prod")

        config = load_config()
        assert config.environment == "prod"
        assert config.log_format == "json"  # prod → json

    def test_dotenv_file(self, tmp_path: Path) -> None:
        dotenv = tmp_path / ".env"
        dotenv.write_text("AUTOSTREAM_HTTP_TIMEOUT_SECONDS=42\n", encoding="utf-8")

        config = load_config(dotenv_path=dotenv)
        assert config.http_timeout_seconds == 42.0

    def test_dotenv_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(dotenv_path=tmp_path / "missing.env")


class TestCliOverrides:
    """CLI overrides beat everything (highest precedence)."""

    def test_cli_overrides_yaml_and_env(
        self, yaml_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("AUTOSTREAM_LOG_LEVEL", "WARNING")

        config = load_config(
            config_path=yaml_config,
            cli_overrides={"log_level": "ERROR", "upstream_url": "https://cli.example"},
        )
        assert config.log_level == "ERROR"
        assert config.upstream_url == "https://cli.example"

    def test_cli_overrides_with_sectioned_format(self, yaml_config: Path) -> None:
        config = load_config(
            config_path=yaml_config,
            cli_overrides={"autostream": {"delta_need": 50.0}},
        )
        assert config.autostream.delta_need == 50.0
        assert config.autostream.ratio_need == 1.5  # from YAML

    def test_sectioned_dump_round_trips(self, yaml_config: Path) -> None:
        config = load_config(config_path=yaml_config)
        again = load_config(cli_overrides=config.to_sectioned_dict())
        assert again == config
