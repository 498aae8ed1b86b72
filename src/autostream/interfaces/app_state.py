"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from autostream.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from autostream.application.use_cases.autostream import AutoStreamUseCase
    from autostream.domain.ports import StreamSourcePort, TitleResolverPort


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient

    # Domain Ports
    stream_source: StreamSourcePort
    title_resolver: TitleResolverPort

    # Application Services
    autostream_uc: AutoStreamUseCase
