from .stremio import (
    CurationSettings,
    QualityTier,
    ScoredCandidate,
    SelectionOptions,
    SelectionRule,
    StreamCandidate,
    StremioContentType,
    StremioStreamRequest,
)

__all__ = [
    "CurationSettings",
    "QualityTier",
    "ScoredCandidate",
    "SelectionOptions",
    "SelectionRule",
    "StreamCandidate",
    "StremioContentType",
    "StremioStreamRequest",
]
