"""Rewrite curated stream names into ``<title> — [SxxEyy - ]<quality>``."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from autostream.domain.entities.stremio import (
    QualityTier,
    ScoredCandidate,
    StreamCandidate,
)
from autostream.infrastructure.stremio.release_parser import (
    first_line,
    raw_resolution_token,
)

_FRIENDLY_QUALITY: dict[QualityTier, str] = {
    QualityTier.UHD_4320P: "8K",
    QualityTier.UHD_2160P: "4K",
    QualityTier.QHD_1440P: "2K",
    QualityTier.HD_1080P: "1080p",
    QualityTier.HD_720P: "720p",
    QualityTier.SD_480P: "480p",
}


def friendly_quality(scored: ScoredCandidate) -> str:
    """Display quality; for other/CAM the raw resolution token or ``""``."""
    friendly = _FRIENDLY_QUALITY.get(scored.tier)
    if friendly:
        return friendly
    candidate = scored.candidate
    return raw_resolution_token(first_line(candidate.title) or candidate.name) or ""


def fallback_title(candidate: StreamCandidate) -> str:
    """Locally derivable title: first line of the raw title, else the raw name."""
    return first_line(candidate.title) or candidate.name.strip()


def episode_tag(season: int | None, episode: int | None) -> str:
    if season is None or episode is None:
        return ""
    return f"S{season:02d}E{episode:02d}"


def curate_names(
    streams: Sequence[ScoredCandidate],
    *,
    canonical_title: str | None,
    season: int | None = None,
    episode: int | None = None,
) -> list[StreamCandidate]:
    """Return new candidates with display names rewritten.

    Without a canonical title each stream falls back to its own label.
    """
    tag = episode_tag(season, episode)
    curated: list[StreamCandidate] = []
    for scored in streams:
        title = (canonical_title or "").strip() or fallback_title(scored.candidate)
        suffix = " - ".join(p for p in (tag, friendly_quality(scored)) if p)
        name = f"{title} — {suffix}" if suffix else title
        curated.append(replace(scored.candidate, name=name))
    return curated
