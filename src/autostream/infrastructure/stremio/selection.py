"""AutoStream selection policy: best quality unless a lower tier is much faster.

Pure decision logic over an already score-sorted candidate list.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import structlog

from autostream.domain.entities.stremio import (
    QualityTier,
    ScoredCandidate,
    SelectionOptions,
    SelectionRule,
    StreamCandidate,
)
from autostream.infrastructure.stremio.stream_sorter import (
    StreamScorer,
    dedupe_candidates,
)

log = structlog.get_logger(__name__)


def is_much_faster(
    low: ScoredCandidate,
    high: ScoredCandidate,
    *,
    ratio_need: float,
    delta_need: float,
    rule: SelectionRule,
) -> bool:
    """Whether *low* beats *high* on speed by the required ratio/delta.

    A zero speed on *high* makes the ratio infinite; the delta threshold
    still applies under ``ratio_and_delta``.
    """
    ratio = low.speed / high.speed if high.speed > 0 else math.inf
    delta = low.speed - high.speed
    if rule == "ratio_or_delta":
        return ratio >= ratio_need or delta >= delta_need
    return ratio >= ratio_need and delta >= delta_need


class SelectionPolicy:
    """Picks 1-2 streams from a score-sorted list.

    1. best = top-ranked; alt = first later candidate of a strictly lower tier.
    2. alt replaces best only if it is "much faster"; with debrid tightening
       the test is repeated with ratio_need * factor and ratio_and_delta.
    3. If the pick is not 1080p, the best-ranked other 1080p stream is
       appended as a fallback.
    """

    def __init__(self, options: SelectionOptions) -> None:
        self._options = options

    def select(self, ranked: Sequence[ScoredCandidate]) -> list[ScoredCandidate]:
        if not ranked:
            return []

        picked = ranked[0]
        if self._options.prefer_lower_if_much_faster:
            picked = self._pick_primary(ranked)

        out = [picked]
        if self._options.two_outputs and picked.tier != QualityTier.HD_1080P:
            fallback = self._fallback_1080p(ranked, picked)
            if fallback is not None:
                out.append(fallback)
        return out

    def _pick_primary(self, ranked: Sequence[ScoredCandidate]) -> ScoredCandidate:
        best = ranked[0]
        # Only the first lower-tier candidate in rank order is considered.
        alt = next((s for s in ranked[1:] if s.tier < best.tier), None)
        if alt is None:
            return best

        opts = self._options
        if not is_much_faster(
            alt, best, ratio_need=opts.ratio_need, delta_need=opts.delta_need, rule=opts.rule
        ):
            return best

        if opts.tighten_when_debrid and not is_much_faster(
            alt,
            best,
            ratio_need=opts.ratio_need * opts.tighten_ratio_factor,
            delta_need=opts.delta_need,
            rule="ratio_and_delta",
        ):
            log.debug(
                "autostream_downgrade_rejected_tightened",
                best_tier=best.tier.label,
                alt_tier=alt.tier.label,
                best_speed=round(best.speed, 1),
                alt_speed=round(alt.speed, 1),
            )
            return best

        log.debug(
            "autostream_downgrade_accepted",
            best_tier=best.tier.label,
            alt_tier=alt.tier.label,
            best_speed=round(best.speed, 1),
            alt_speed=round(alt.speed, 1),
        )
        return alt

    @staticmethod
    def _fallback_1080p(
        ranked: Sequence[ScoredCandidate], picked: ScoredCandidate
    ) -> ScoredCandidate | None:
        return next(
            (
                s
                for s in ranked
                if s.tier == QualityTier.HD_1080P and not s.same_stream(picked)
            ),
            None,
        )


def apply_autostream(
    candidates: Sequence[StreamCandidate] | None,
    options: SelectionOptions,
    *,
    scorer: StreamScorer,
) -> list[ScoredCandidate]:
    """Dedupe -> score -> sort -> select. Returns 1-2 scored picks ([] if no input)."""
    if not candidates:
        return []

    deduped = dedupe_candidates(candidates)
    ranked = scorer.sort(deduped)
    selected = SelectionPolicy(options).select(ranked)

    log.debug(
        "autostream_selected",
        candidates=len(candidates),
        deduped=len(deduped),
        picked=[s.tier.label for s in selected],
        tightened=options.tighten_when_debrid,
    )
    return selected
