"""Stream scoring and sorting for AutoStream.

Scores candidates by quality tier, a seeder-based speed proxy and small
label bonuses. All weights are configurable via AutoStreamConfig.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from autostream.domain.entities.stremio import (
    QualityTier,
    ScoredCandidate,
    StreamCandidate,
)
from autostream.infrastructure.config.schema import AutoStreamConfig
from autostream.infrastructure.stremio.release_parser import (
    bonus_markers,
    classify_quality,
    extract_seeders,
)

SPEED_MULTIPLIER = 200.0


def speed_proxy(seeders: int | None, multiplier: float = SPEED_MULTIPLIER) -> float:
    """Log-compressed download speed stand-in: ``log(1 + seeders) * 200``.

    Absent counts count as 0 seeders; result is never negative.
    """
    count = max(0, seeders or 0)
    try:
        return math.log1p(count) * multiplier
    except OverflowError:
        # math.log accepts ints beyond float range.
        return math.log(count) * multiplier



def dedupe_candidates(candidates: Iterable[StreamCandidate]) -> list[StreamCandidate]:
    """Drop candidates whose identity was already seen (first one wins).

    Candidates without any identity signal are always kept.
    """
    seen: set[str] = set()
    out: list[StreamCandidate] = []
    for candidate in candidates:
        key = candidate.identity
        if key is not None:
            if key in seen:
                continue
            seen.add(key)
        out.append(candidate)
    return out


class StreamScorer:
    """Ranking: quality tier first, seeders second, label hints as tie-breakers.

    All weights come from AutoStreamConfig — no hardcoded values.
    Score formula: quality_score[tier] + log1p(seeders) * speed_multiplier + bonuses

    With default config one tier step is worth 200 points, the same as a
    1 -> e (about 2.7x) growth in (1 + seeders).
    """

    def __init__(self, config: AutoStreamConfig) -> None:
        self._quality_scores = config.quality_scores
        self._default_quality_score = config.default_quality_score
        self._speed_multiplier = config.speed_multiplier
        self._bonus_scores = config.bonus_scores

    def quality_score(self, tier: QualityTier) -> int:
        return self._quality_scores.get(tier.label, self._default_quality_score)

    def preference_bonus(self, label: str) -> int:
        return sum(self._bonus_scores.get(marker, 0) for marker in bonus_markers(label))

    def rank(self, candidate: StreamCandidate) -> ScoredCandidate:
        """Calculate tier, speed proxy and score for a single candidate."""
        label = candidate.label
        tier = classify_quality(label)
        speed = speed_proxy(
            extract_seeders(candidate.title), multiplier=self._speed_multiplier
        )
        score = self.quality_score(tier) + speed + self.preference_bonus(label)
        return ScoredCandidate(candidate=candidate, tier=tier, speed=speed, score=score)

    def sort(self, candidates: Sequence[StreamCandidate]) -> list[ScoredCandidate]:
        """Score and sort descending. Stable: equal scores keep input order."""
        scored = [self.rank(c) for c in candidates]
        scored.sort(key=lambda s: s.score, reverse=True)
        return scored
