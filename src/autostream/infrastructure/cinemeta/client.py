"""Cinemeta client — canonical title lookup over async httpx.

Single attempt with a bounded timeout, no retries and no caching.
Every failure is logged and reported as None.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
import structlog

log = structlog.get_logger(__name__)

_BASE_URL = "https://v3-cinemeta.strem.io"


class HttpxCinemetaClient:
    """Title resolver backed by the public Cinemeta addon.

    Implements ``TitleResolverPort`` from domain.ports.title_resolver.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        base_url: str = _BASE_URL,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds

    async def _get_meta(self, content_type: str, stremio_id: str) -> dict[str, Any] | None:
        """GET the meta document. Returns the ``meta`` object or None."""
        url = f"{self._base_url}/meta/{content_type}/{quote(stremio_id, safe='')}.json"
        try:
            resp = await self._http.get(url, timeout=self._timeout)
            if resp.status_code == 404:
                log.debug("title_lookup_not_found", stremio_id=stremio_id)
                return None
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError:
            log.warning("title_lookup_http_error", stremio_id=stremio_id, exc_info=True)
            return None
        except httpx.HTTPError:
            log.warning("title_lookup_failed", stremio_id=stremio_id, exc_info=True)
            return None
        except ValueError:
            log.warning("title_lookup_invalid_json", stremio_id=stremio_id)
            return None

        meta = data.get("meta") if isinstance(data, dict) else None
        return meta if isinstance(meta, dict) else None

    async def resolve_title(self, content_type: str, stremio_id: str) -> str | None:
        """Canonical title (``meta.name``, else ``meta.originalName``) or None."""
        meta = await self._get_meta(content_type, stremio_id)
        if meta is None:
            return None
        for key in ("name", "originalName"):
            value = meta.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        return None
