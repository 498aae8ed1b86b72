"""Free-text parsing of stream labels: quality tier, seeders, bonus markers.

Every function here is total: malformed or empty input yields the
lowest tier, no seeders or no bonus, never an exception.
"""

from __future__ import annotations

import re

from guessit import guessit

from autostream.domain.entities.stremio import QualityTier

# --- Quality tiers (tested highest first; first match wins) ---

_TIER_PATTERNS: tuple[tuple[QualityTier, re.Pattern[str]], ...] = (
    (QualityTier.UHD_4320P, re.compile(r"(?i)\b(?:4320p|8k)\b")),
    (QualityTier.UHD_2160P, re.compile(r"(?i)\b(?:2160p|4k|uhd)\b")),
    (QualityTier.QHD_1440P, re.compile(r"(?i)\b(?:1440p|2k)\b")),
    (QualityTier.HD_1080P, re.compile(r"(?i)\b1080p\b")),
    (QualityTier.HD_720P, re.compile(r"(?i)\b720p\b")),
    (QualityTier.SD_480P, re.compile(r"(?i)\b480p\b")),
    (
        QualityTier.CAM,
        re.compile(
            r"(?i)\b(?:cam|hdcam|camrip|telesync|hdts|telecine|scr|screener|dvdscr)\b"
        ),
    ),
)

# --- Seeders ---

# Torrentio-style "👤 123" marker.
_SEEDERS_ICON_RE = re.compile(r"👤\s*(\d+)")
# Plain-text forms: "seeders: 123", "seeds=12", "123 seeders".
_SEEDERS_TEXT_RE = re.compile(
    r"(?i)\b(?:seeders?|seeds?)\s*[:=]?\s*(\d+)\b|\b(\d+)\s*(?:seeders?|seeds?)\b"
)

# --- Preference bonus markers ---

_BONUS_PATTERNS: dict[str, re.Pattern[str]] = {
    "web": re.compile(r"(?i)(?:web[-\s.]?dl|web[-\s.]?rip)\b"),
    "disc": re.compile(r"(?i)\b(?:remux|blu[-\s.]?ray|b[dr]rip)\b"),
    "codec": re.compile(r"(?i)\b(?:hevc|x265|h\.?265)\b"),
    "debrid": re.compile(
        r"(?i)\b(?:real[-\s]?debrid|premiumize|all[-\s]?debrid|rd|ad|pm)\b"
    ),
}


def classify_quality(label: str | None) -> QualityTier:
    """Map a free-text label to exactly one QualityTier.

    Explicit resolutions (and their aliases 2k/4k/uhd/8k) win over
    camera/telesync/screener markers; no recognised token -> OTHER.
    """
    if not label:
        return QualityTier.OTHER
    for tier, pattern in _TIER_PATTERNS:
        if pattern.search(label):
            return tier
    return QualityTier.OTHER


def extract_seeders(title: str | None) -> int | None:
    """Extract a non-negative seeder count from a raw title, or None."""
    if not title:
        return None
    m = _SEEDERS_ICON_RE.search(title)
    digits = m.group(1) if m else None
    if digits is None:
        m = _SEEDERS_TEXT_RE.search(title)
        digits = (m.group(1) or m.group(2)) if m else None
    if digits is None:
        return None
    try:
        return int(digits)
    except ValueError:
        # Beyond the interpreter's int string-conversion digit limit.
        return None


def bonus_markers(label: str | None) -> list[str]:
    """Names of all preference markers present in *label* (may be several)."""
    if not label:
        return []
    return [name for name, pattern in _BONUS_PATTERNS.items() if pattern.search(label)]


def raw_resolution_token(text: str | None) -> str | None:
    """Screen size guessit finds in *text* (e.g. ``"576p"``), or None."""
    if not text or not text.strip():
        return None
    screen_size = guessit(text).get("screen_size")
    return str(screen_size) if screen_size else None


def first_line(text: str | None) -> str:
    """First line of a multi-line title, trimmed."""
    if not text:
        return ""
    return text.strip().split("\n", 1)[0].strip()
