"""AutoStream curation use case.

Stremio ID -> upstream candidates -> dedupe/score/select
-> optional name curation -> 1-2 StreamCandidates.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping, Sequence
from typing import Any

import structlog

from autostream.domain.entities.stremio import (
    CurationSettings,
    ScoredCandidate,
    SelectionOptions,
    StreamCandidate,
    StremioStreamRequest,
)
from autostream.domain.ports.stream_source import StreamSourcePort
from autostream.domain.ports.title_resolver import TitleResolverPort

# Type aliases for injected pure functions.
_SettingsFn = Callable[[Mapping[str, Any]], CurationSettings]
_SelectFn = Callable[[Sequence[StreamCandidate], SelectionOptions], list[ScoredCandidate]]
_CurateFn = Callable[..., list[StreamCandidate]]

log = structlog.get_logger(__name__)


class AutoStreamUseCase:
    """Curates upstream streams for one Stremio stream request."""

    def __init__(
        self,
        *,
        source: StreamSourcePort,
        titles: TitleResolverPort,
        settings_fn: _SettingsFn,
        select_fn: _SelectFn,
        curate_fn: _CurateFn,
        title_timeout_seconds: float = 5.0,
    ) -> None:
        self._source = source
        self._titles = titles
        self._settings_fn = settings_fn
        self._select_fn = select_fn
        self._curate_fn = curate_fn
        self._title_timeout = title_timeout_seconds

    async def execute(
        self,
        request: StremioStreamRequest,
        addon_config: Mapping[str, Any],
        *,
        raw_config: str = "",
    ) -> list[StreamCandidate]:
        """Fetch candidates from upstream and curate them."""
        candidates = await self._source.fetch_streams(
            request.content_type, request.stremio_id, raw_config
        )
        return await self.curate(candidates, addon_config, request=request)

    async def curate(
        self,
        candidates: Sequence[StreamCandidate],
        addon_config: Mapping[str, Any],
        *,
        request: StremioStreamRequest | None = None,
    ) -> list[StreamCandidate]:
        """Run selection (and optional name curation) on given candidates."""
        if not candidates:
            return []

        settings = self._settings_fn(addon_config)
        if not settings.autostream_enabled:
            log.debug("autostream_passthrough", sort=settings.sort, count=len(candidates))
            return list(candidates)

        selected = self._select_fn(candidates, settings.selection)
        log.info(
            "autostream_selected",
            stremio_id=request.stremio_id if request else None,
            candidates=len(candidates),
            picked=[s.tier.label for s in selected],
            beautify=settings.beautify,
        )

        if not settings.beautify:
            return [s.candidate for s in selected]

        title = await self._resolve_title(request) if request else None
        return self._curate_fn(
            selected,
            canonical_title=title,
            season=request.season if request else None,
            episode=request.episode if request else None,
        )

    async def _resolve_title(self, request: StremioStreamRequest) -> str | None:
        """Single bounded lookup; any failure degrades to the local fallback."""
        try:
            return await asyncio.wait_for(
                self._titles.resolve_title(request.content_type, request.lookup_id),
                timeout=self._title_timeout,
            )
        except asyncio.TimeoutError:
            log.warning(
                "title_lookup_timeout",
                stremio_id=request.lookup_id,
                timeout=self._title_timeout,
            )
        except Exception:
            log.warning("title_lookup_failed", stremio_id=request.lookup_id, exc_info=True)
        return None
