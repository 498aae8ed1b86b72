"""Shared test fixtures for AutoStream test suite."""

from __future__ import annotations

import pytest

from autostream.domain.entities.stremio import StremioStreamRequest
from autostream.infrastructure.config.schema import AppConfig, AutoStreamConfig

# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def app_config() -> AppConfig:
    """AppConfig pointing at fake upstream/Cinemeta hosts."""
    return AppConfig(
        environment="test",
        upstream_url="https://upstream.test",
        autostream=AutoStreamConfig(cinemeta_url="https://cinemeta.test"),
    )


# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def movie_request() -> StremioStreamRequest:
    return StremioStreamRequest(
        stremio_id="tt0133093", content_type="movie", base_id="tt0133093"
    )


@pytest.fixture()
def episode_request() -> StremioStreamRequest:
    return StremioStreamRequest(
        stremio_id="tt0944947:1:5",
        content_type="series",
        base_id="tt0944947",
        season=1,
        episode=5,
    )
