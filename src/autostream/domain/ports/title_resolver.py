"""Port for canonical title resolution."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TitleResolverPort(Protocol):
    """Async interface for canonical title lookups."""

    async def resolve_title(self, content_type: str, stremio_id: str) -> str | None:
        """Return the canonical human-readable title, or None.

        Implementations MUST NOT raise for network, status or parse
        failures; they log and return None instead.
        """
        ...
