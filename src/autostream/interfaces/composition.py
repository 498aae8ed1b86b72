"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

import functools
from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from autostream.application.use_cases.autostream import AutoStreamUseCase
from autostream.infrastructure.cinemeta.client import HttpxCinemetaClient
from autostream.infrastructure.config.schema import AppConfig
from autostream.infrastructure.stremio.name_curator import curate_names
from autostream.infrastructure.stremio.options import parse_curation_settings
from autostream.infrastructure.stremio.selection import apply_autostream
from autostream.infrastructure.stremio.stream_sorter import StreamScorer
from autostream.infrastructure.stremio.upstream import HttpxUpstreamStreamSource
from autostream.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def build_use_case(
    config: AppConfig,
    *,
    source: HttpxUpstreamStreamSource,
    titles: HttpxCinemetaClient,
) -> AutoStreamUseCase:
    """Wire the use case with config-bound pure functions."""
    return AutoStreamUseCase(
        source=source,
        titles=titles,
        settings_fn=functools.partial(
            parse_curation_settings,
            defaults=config.autostream.default_options(),
        ),
        select_fn=functools.partial(
            apply_autostream,
            scorer=StreamScorer(config.autostream),
        ),
        curate_fn=curate_names,
        title_timeout_seconds=config.autostream.title_timeout_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. HTTP Client (shared by both adapters)
        2. Upstream stream source
        3. Cinemeta title resolver
        4. AutoStream use case
    """
    state = cast(AppState, app.state)
    config = state.config

    # 1) HTTP client
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
        follow_redirects=True,
    )
    log.info("http_client_initialized", timeout=config.http_timeout_seconds)

    # 2) Upstream addon
    state.stream_source = HttpxUpstreamStreamSource(
        http_client=state.http_client,
        base_url=config.upstream_url,
    )
    log.info("upstream_source_initialized", upstream_url=config.upstream_url)

    # 3) Title resolver
    state.title_resolver = HttpxCinemetaClient(
        http_client=state.http_client,
        base_url=config.autostream.cinemeta_url,
        timeout_seconds=config.autostream.title_timeout_seconds,
    )
    log.info("title_resolver_initialized", base_url=config.autostream.cinemeta_url)

    # 4) Use case
    state.autostream_uc = build_use_case(
        config,
        source=state.stream_source,
        titles=state.title_resolver,
    )

    log.info("app_startup_complete")

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")

        log.info("app_shutdown_complete")
