"""Convert between Stremio stream JSON objects and StreamCandidates.

Pure transformation logic — no I/O, no framework dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from autostream.domain.entities.stremio import StreamCandidate

_KNOWN_KEYS = frozenset({"name", "title", "infoHash", "url", "fileIdx", "behaviorHints"})


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return None


def candidate_from_stremio(raw: Mapping[str, Any]) -> StreamCandidate:
    """Build a StreamCandidate from a Stremio stream object.

    ``title`` falls back to ``description`` (newer Stremio SDK field);
    unknown fields are kept verbatim in ``extra``.
    """
    hints = raw.get("behaviorHints")
    title = raw.get("title") or raw.get("description") or ""
    return StreamCandidate(
        name=str(raw.get("name") or ""),
        title=str(title),
        info_hash=str(raw["infoHash"]) if raw.get("infoHash") else None,
        url=str(raw["url"]) if raw.get("url") else None,
        file_idx=_as_int(raw.get("fileIdx")),
        behavior_hints=dict(hints) if isinstance(hints, Mapping) else {},
        extra={k: v for k, v in raw.items() if k not in _KNOWN_KEYS},
    )


def candidates_from_stremio(raw_streams: Iterable[Any]) -> list[StreamCandidate]:
    """Convert a ``streams`` array, skipping entries that are not objects."""
    return [candidate_from_stremio(s) for s in raw_streams if isinstance(s, Mapping)]


def candidate_to_stremio(candidate: StreamCandidate) -> dict[str, Any]:
    """Serialize a candidate back to Stremio JSON (lossless for known fields)."""
    out: dict[str, Any] = dict(candidate.extra)
    out["name"] = candidate.name
    # Do not duplicate a description that only stood in for the title.
    if candidate.title and out.get("description") != candidate.title:
        out["title"] = candidate.title
    if candidate.info_hash:
        out["infoHash"] = candidate.info_hash
    if candidate.file_idx is not None:
        out["fileIdx"] = candidate.file_idx
    if candidate.url:
        out["url"] = candidate.url
    if candidate.behavior_hints:
        out["behaviorHints"] = dict(candidate.behavior_hints)
    return out
