"""Stremio addon API endpoints (manifest, stream)."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from autostream.domain.entities.stremio import StremioContentType, StremioStreamRequest
from autostream.infrastructure.stremio.manifest import build_manifest
from autostream.infrastructure.stremio.options import parse_addon_config
from autostream.infrastructure.stremio.stream_converter import candidate_to_stremio
from autostream.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["stremio"])

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
}


def parse_stream_id(content_type: str, raw_id: str) -> StremioStreamRequest | None:
    """Parse Stremio stream ID into a StremioStreamRequest.

    Movies: "tt1234567"
    Series: "tt1234567:1:5" (season 1, episode 5)
    Anime:  "kitsu:1234" or "kitsu:1234:5" (episode 5, no season)
    """
    if content_type not in ("movie", "series"):
        return None

    ct: StremioContentType = cast(StremioContentType, content_type)
    parts = raw_id.split(":")

    if raw_id.startswith("kitsu:"):
        if len(parts) < 2 or not parts[1]:
            return None
        base_id = f"kitsu:{parts[1]}"
        if len(parts) == 3:
            try:
                episode = int(parts[2])
            except ValueError:
                return None
            return StremioStreamRequest(
                stremio_id=raw_id, content_type=ct, base_id=base_id, episode=episode
            )
        return StremioStreamRequest(stremio_id=raw_id, content_type=ct, base_id=base_id)

    if not raw_id.startswith("tt"):
        return None

    base_id = parts[0]
    if ct == "series" and len(parts) == 3:
        try:
            season = int(parts[1])
            episode = int(parts[2])
        except ValueError:
            return None
        return StremioStreamRequest(
            stremio_id=raw_id,
            content_type=ct,
            base_id=base_id,
            season=season,
            episode=episode,
        )

    return StremioStreamRequest(stremio_id=raw_id, content_type=ct, base_id=base_id)


def _request_config(request: Request, raw_config: str) -> dict[str, str]:
    """Addon config from the path segment, overridden by query parameters."""
    config = parse_addon_config(raw_config)
    for key, value in request.query_params.items():
        if key != "config":
            config[key.lower()] = value
    return config


@router.get("/manifest.json")
@router.get("/{config}/manifest.json")
async def stremio_manifest(request: Request, config: str = "") -> JSONResponse:
    """Serve the Stremio addon manifest."""
    addon_config = _request_config(request, config)
    return JSONResponse(
        content=build_manifest(addon_config),
        headers=_CORS_HEADERS,
    )


@router.get("/stream/{content_type}/{stream_id}.json")
@router.get("/{config}/stream/{content_type}/{stream_id}.json")
async def stremio_stream(
    request: Request,
    content_type: str,
    stream_id: str,
    config: str = "",
) -> JSONResponse:
    """Serve 1-2 curated streams for a movie or episode."""
    state = cast(AppState, request.app.state)
    empty = JSONResponse(content={"streams": []}, headers=_CORS_HEADERS)

    parsed = parse_stream_id(content_type, stream_id)
    if parsed is None:
        log.debug("stremio_invalid_stream_id", content_type=content_type, id=stream_id)
        return empty

    use_case = getattr(state, "autostream_uc", None)
    if use_case is None:
        return empty

    try:
        curated = await use_case.execute(
            parsed, _request_config(request, config), raw_config=config
        )
    except Exception:
        log.warning(
            "stremio_stream_failed",
            content_type=content_type,
            stream_id=stream_id,
            exc_info=True,
        )
        return empty

    streams: list[dict[str, Any]] = [candidate_to_stremio(c) for c in curated]
    return JSONResponse(content={"streams": streams}, headers=_CORS_HEADERS)
