"""Upstream client port."""

from typing import Any, Protocol


class UpstreamClient(Protocol):
    """Port for fetching one JSON document from the transit API."""

    async def fetch_json(self, url: str) -> dict[str, Any]:
        """Fetch ``url`` and return the parsed JSON object.

        Raises:
            UpstreamError: One of its subclasses on timeout, non-2xx status,
                non-object body or transport failure.
        """
        ...
