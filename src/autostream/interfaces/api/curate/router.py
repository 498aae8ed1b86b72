"""Curation API: run the AutoStream pipeline on caller-supplied streams."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from autostream.infrastructure.stremio.stream_converter import (
    candidate_to_stremio,
    candidates_from_stremio,
)
from autostream.interfaces.api.stremio.router import parse_stream_id
from autostream.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["curate"])


class CurateRequest(BaseModel):
    """Stremio streams plus addon-style options (ratio, delta, beautify, ...)."""

    streams: list[dict[str, Any]] = Field(default_factory=list)
    options: dict[str, Any] = Field(default_factory=dict)
    type: str | None = None
    id: str | None = None


class CurateResponse(BaseModel):
    streams: list[dict[str, Any]]


@router.post("/curate", response_model=CurateResponse)
async def curate_streams(request: Request, body: CurateRequest) -> CurateResponse:
    state = cast(AppState, request.app.state)
    candidates = candidates_from_stremio(body.streams)

    stream_request = None
    if body.type and body.id:
        stream_request = parse_stream_id(body.type, body.id)

    options = {str(k).lower(): v for k, v in body.options.items()}
    curated = await state.autostream_uc.curate(
        candidates, options, request=stream_request
    )
    log.debug("curate_api_done", received=len(body.streams), returned=len(curated))
    return CurateResponse(streams=[candidate_to_stremio(c) for c in curated])
