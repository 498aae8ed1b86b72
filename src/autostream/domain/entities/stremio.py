"""Domain entities for AutoStream stream curation.

Pure value objects — no framework dependencies, no I/O.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Literal

StremioContentType = Literal["movie", "series"]
SelectionRule = Literal["ratio_and_delta", "ratio_or_delta"]


class QualityTier(IntEnum):
    """Ranked quality tiers (higher value = better quality)."""

    OTHER = 0
    CAM = 1
    SD_480P = 2
    HD_720P = 3
    HD_1080P = 4
    QHD_1440P = 5
    UHD_2160P = 6
    UHD_4320P = 7

    @property
    def label(self) -> str:
        """Short tag used in config keys and logs, e.g. ``"1080p"``."""
        return _TIER_LABELS[self]


_TIER_LABELS: dict[QualityTier, str] = {
    QualityTier.OTHER: "other",
    QualityTier.CAM: "CAM",
    QualityTier.SD_480P: "480p",
    QualityTier.HD_720P: "720p",
    QualityTier.HD_1080P: "1080p",
    QualityTier.QHD_1440P: "1440p",
    QualityTier.UHD_2160P: "2160p",
    QualityTier.UHD_4320P: "4320p",
}


@dataclass(frozen=True)
class StreamCandidate:
    """A single upstream stream descriptor, immutable as received.

    ``extra`` keeps every upstream field that curation does not read, so
    a candidate can be passed through without losing information.
    """

    name: str = ""
    title: str = ""
    info_hash: str | None = None
    url: str | None = None
    file_idx: int | None = None
    behavior_hints: Mapping[str, Any] = field(default_factory=dict)
    extra: Mapping[str, Any] = field(default_factory=dict)

    @property
    def label(self) -> str:
        """Free-text label (name + title) that quality hints are read from."""
        return f"{self.name} {self.title}"

    @property
    def identity(self) -> str | None:
        """Deduplication key: hash > url > grouping hints > None (unique)."""
        if self.info_hash:
            return f"hash:{self.info_hash.lower()}"
        if self.url:
            return f"url:{self.url}"
        group = str(self.behavior_hints.get("bingeGroup") or "")
        filename = str(self.behavior_hints.get("filename") or "")
        if group or filename:
            return f"group:{group}|{filename}"
        return None


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate annotated with its derived tier, speed proxy and score."""

    candidate: StreamCandidate
    tier: QualityTier = QualityTier.OTHER
    speed: float = 0.0
    score: float = 0.0

    def same_stream(self, other: ScoredCandidate) -> bool:
        """True when both wrap the same candidate or share an identity."""
        if self.candidate is other.candidate:
            return True
        identity = self.candidate.identity
        return identity is not None and identity == other.candidate.identity


@dataclass(frozen=True)
class SelectionOptions:
    """Validated, immutable selection policy settings for one request."""

    prefer_lower_if_much_faster: bool = True
    ratio_need: float = 1.35
    delta_need: float = 200.0
    rule: SelectionRule = "ratio_and_delta"
    two_outputs: bool = True
    tighten_when_debrid: bool = True
    tighten_ratio_factor: float = 1.2


@dataclass(frozen=True)
class CurationSettings:
    """Everything a stream request asks of the curation pipeline."""

    sort: str = "autostream"
    beautify: bool = False
    selection: SelectionOptions = field(default_factory=SelectionOptions)

    @property
    def autostream_enabled(self) -> bool:
        return self.sort == "autostream"


@dataclass(frozen=True)
class StremioStreamRequest:
    """Parsed Stremio stream request.

    Created from URL path: ``tt1234567`` (movie), ``tt1234567:1:5``
    (series, season 1, episode 5) or ``kitsu:1234:5`` (anime episode).
    """

    stremio_id: str
    content_type: StremioContentType
    base_id: str = ""
    season: int | None = None
    episode: int | None = None

    @property
    def lookup_id(self) -> str:
        """Identifier used for metadata lookups (without season/episode)."""
        return self.base_id or self.stremio_id
