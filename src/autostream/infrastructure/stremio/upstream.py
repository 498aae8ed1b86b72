"""Upstream Stremio addon client — fetches the raw candidate list."""

from __future__ import annotations

from urllib.parse import quote

import httpx
import structlog

from autostream.domain.entities.stremio import StreamCandidate
from autostream.infrastructure.stremio.stream_converter import candidates_from_stremio

log = structlog.get_logger(__name__)


class HttpxUpstreamStreamSource:
    """Fetches ``/stream/{type}/{id}.json`` from an upstream addon.

    Implements ``StreamSourcePort`` from domain.ports.stream_source.
    """

    def __init__(self, *, http_client: httpx.AsyncClient, base_url: str) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")

    def _stream_url(self, content_type: str, stremio_id: str, addon_config: str) -> str:
        prefix = f"{self._base_url}/{addon_config.strip('/')}" if addon_config else self._base_url
        return f"{prefix}/stream/{content_type}/{quote(stremio_id, safe=':')}.json"

    async def fetch_streams(
        self,
        content_type: str,
        stremio_id: str,
        addon_config: str = "",
    ) -> list[StreamCandidate]:
        url = self._stream_url(content_type, stremio_id, addon_config)
        try:
            resp = await self._http.get(url)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as exc:
            log.warning(
                "upstream_http_error",
                stremio_id=stremio_id,
                status=exc.response.status_code,
            )
            return []
        except httpx.HTTPError:
            log.warning("upstream_fetch_failed", stremio_id=stremio_id, exc_info=True)
            return []
        except ValueError:
            log.warning("upstream_invalid_json", stremio_id=stremio_id)
            return []

        raw_streams = data.get("streams") if isinstance(data, dict) else None
        if not isinstance(raw_streams, list):
            log.debug("upstream_no_streams", stremio_id=stremio_id)
            return []

        candidates = candidates_from_stremio(raw_streams)
        log.debug(
            "upstream_streams_fetched", stremio_id=stremio_id, count=len(candidates)
        )
        return candidates
