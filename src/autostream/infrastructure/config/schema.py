"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from autostream.domain.entities.stremio import SelectionOptions, SelectionRule

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


class AutoStreamConfig(BaseModel):
    """Configuration for stream scoring and selection.

    All values configurable via YAML (autostream section). Per-request
    addon config (ratio, delta, rule, ...) overrides the policy defaults.
    """

    quality_scores: dict[str, int] = Field(
        default={
            "4320p": 1200,
            "2160p": 1000,
            "1440p": 800,
            "1080p": 600,
            "720p": 400,
            "480p": 200,
            "CAM": 100,
            "other": 100,
        },
        description="Base score per quality tier (one tier step = 200).",
    )
    default_quality_score: int = Field(
        default=100,
        description="Base score for tiers missing from quality_scores.",
    )
    speed_multiplier: float = Field(
        default=200.0,
        description="Speed proxy = log(1 + seeders) * speed_multiplier.",
    )
    bonus_scores: dict[str, int] = Field(
        default={
            "web": 30,
            "disc": 40,
            "codec": 10,
            "debrid": 20,
        },
        description="Additive label bonuses (web source, disc/remux, codec, debrid).",
    )

    prefer_lower_if_much_faster: bool = Field(
        default=True,
        description="Allow substituting a much faster lower-quality stream.",
    )
    ratio_need: float = Field(
        default=1.35,
        description="Minimum speed-proxy ratio (lower/higher) for a downgrade.",
    )
    delta_need: float = Field(
        default=200.0,
        description="Minimum additive speed-proxy advantage for a downgrade.",
    )
    rule: SelectionRule = Field(
        default="ratio_and_delta",
        description="How ratio and delta thresholds combine.",
    )
    two_outputs: bool = Field(
        default=True,
        description="Append a 1080p fallback when the primary pick is not 1080p.",
    )
    debrid_ratio_factor: float = Field(
        default=1.2,
        description="ratio_need multiplier applied when debrid tightening is on.",
    )

    cinemeta_url: str = Field(
        default="https://v3-cinemeta.strem.io",
        description="Base URL of the Cinemeta metadata addon (title lookup).",
    )
    title_timeout_seconds: float = Field(
        default=5.0,
        description="Upper bound for a single title lookup (no retries).",
    )

    @field_validator("ratio_need", "delta_need", "speed_multiplier")
    @classmethod
    def _validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("value must be >= 0")
        return v

    @field_validator("debrid_ratio_factor", "title_timeout_seconds")
    @classmethod
    def _validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("value must be > 0")
        return v

    def default_options(self) -> SelectionOptions:
        """Policy defaults used when a request does not override them."""
        return SelectionOptions(
            prefer_lower_if_much_faster=self.prefer_lower_if_much_faster,
            ratio_need=self.ratio_need,
            delta_need=self.delta_need,
            rule=self.rule,
            two_outputs=self.two_outputs,
            tighten_ratio_factor=self.debrid_ratio_factor,
        )


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/logging/upstream/autostream).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="autostream", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP client (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=15.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="HTTP timeout in seconds for upstream requests.",
    )
    http_user_agent: str = Field(
        default="AutoStream/0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Upstream addon (YAML section: upstream.*)
    upstream_url: str = Field(
        default="https://torrentio.strem.fun",
        validation_alias=AliasChoices(
            "upstream_url",
            AliasPath("upstream", "url"),
        ),
        description="Base URL of the upstream Stremio addon providing candidates.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # Scoring + selection (YAML section: autostream.*)
    autostream: AutoStreamConfig = Field(default_factory=AutoStreamConfig)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @field_validator("upstream_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "user_agent": self.http_user_agent,
            },
            "upstream": {"url": self.upstream_url},
            "logging": {"level": self.log_level, "format": self.log_format},
            "autostream": self.autostream.model_dump(),
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read AUTOSTREAM_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - AUTOSTREAM_UPSTREAM_URL
    - AUTOSTREAM_HTTP_TIMEOUT_SECONDS
    - AUTOSTREAM_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="AUTOSTREAM_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    upstream_url: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
