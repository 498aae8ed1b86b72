"""Port for retrieving raw stream candidates from an upstream aggregator."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from autostream.domain.entities.stremio import StreamCandidate


@runtime_checkable
class StreamSourcePort(Protocol):
    """Async interface for fetching candidate streams for a title."""

    async def fetch_streams(
        self,
        content_type: str,
        stremio_id: str,
        addon_config: str = "",
    ) -> list[StreamCandidate]:
        """Fetch upstream candidates. Returns [] on any upstream failure."""
        ...
