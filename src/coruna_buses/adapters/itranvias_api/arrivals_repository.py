"""iTranvías arrivals repository adapter."""

import logging
from typing import TYPE_CHECKING

from coruna_buses.adapters.itranvias_api.parser import TransitParser
from coruna_buses.domain.models.arrival import ArrivalsResponse, LineArrivals
from coruna_buses.domain.models.interest_set import InterestSet, normalize_tokens
from coruna_buses.domain.ports.arrivals_repository import ArrivalsRepository

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from coruna_buses.domain.models.line_meta import LineMeta
    from coruna_buses.domain.models.transit_settings import TransitSettings
    from coruna_buses.domain.ports.stop_catalog import StopCatalog
    from coruna_buses.domain.ports.upstream_client import UpstreamClient


class ItranviasArrivalsRepository(ArrivalsRepository):
    """Assembles live arrivals for a stop, named and filtered with catalog line data."""

    def __init__(
        self,
        settings: "TransitSettings",
        client: "UpstreamClient",
        catalog: "StopCatalog",
    ) -> None:
        """Initialize the repository.

        Args:
            settings: Resolved transit settings (arrivals URL template, interest tokens).
            client: Upstream client used for the live fetch.
            catalog: Catalog providing line metadata and the resolved interest set.
        """
        self._settings = settings
        self._client = client
        self._catalog = catalog
        self._tokens = normalize_tokens(settings.interest_lines)

    async def get_arrivals(self, stop_id: int) -> ArrivalsResponse:
        """Fetch and assemble arrivals for a stop.

        Args:
            stop_id: Stop to query.

        Returns:
            Lines of interest sorted by their soonest bus; lines without buses last.

        Raises:
            UpstreamError: The live fetch failed. There is no cached fallback.
        """
        await self._catalog.ensure_lines_loaded()

        payload = await self._client.fetch_json(self._settings.arrivals_url(stop_id))
        interest = self._catalog.get_interest_set()

        lines: list[LineArrivals] = []
        for line_id, raw_buses in TransitParser.extract_arrival_lines(payload):
            meta = self._catalog.get_line_meta(line_id)
            if not self._is_interest_line(line_id, meta, interest):
                continue

            buses = sorted(TransitParser.parse_buses(raw_buses), key=lambda bus: bus.sort_eta)
            lines.append(
                LineArrivals(
                    line_id=line_id,
                    line_name=meta.name if meta else None,
                    color_hex=meta.color if meta else None,
                    buses=tuple(buses),
                )
            )

        lines.sort(key=lambda line: line.sort_eta)
        logger.debug(f"Stop {stop_id}: {len(lines)} line(s) of interest with arrivals")
        return ArrivalsResponse(stop_id=stop_id, lines=tuple(lines))

    def _is_interest_line(
        self, line_id: int, meta: "LineMeta | None", interest: InterestSet
    ) -> bool:
        # Only an empty token list means "all lines". An empty resolved set can
        # also come from a placeholder catalog or from tokens naming no catalog line.
        if not self._tokens or line_id in interest:
            return True
        # Direct token checks also match lines missing from the catalog's line list
        if str(line_id) in self._tokens:
            return True
        return meta is not None and meta.name_lower in self._tokens
