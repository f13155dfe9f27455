"""Application services (use cases) for stops and arrivals."""

import logging
from typing import TYPE_CHECKING

from coruna_buses.domain.errors import UpstreamError
from coruna_buses.domain.models import ArrivalsResponse, BoardStatus, Stop, StopBoard

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from coruna_buses.domain.ports import ArrivalsRepository, StopCatalog

DEFAULT_SEARCH_LIMIT = 50
MAX_SEARCH_LIMIT = 400


class TransitService:
    """Operations exposed to the transport layers."""

    def __init__(
        self,
        catalog: "StopCatalog",
        arrivals_repository: "ArrivalsRepository",
        primary_stop_id: int,
    ) -> None:
        """Initialize with a stop catalog and an arrivals repository."""
        self._catalog = catalog
        self._arrivals_repository = arrivals_repository
        self.primary_stop_id = primary_stop_id

    async def search_stops(
        self, query: str | None = None, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[Stop]:
        """Search stops of interest by a case-insensitive substring of their name.

        A blank query returns the first ``limit`` stops in name order.
        """
        limit = max(1, min(limit, MAX_SEARCH_LIMIT))
        stops = await self._catalog.get_stops()
        needle = (query or "").strip().lower()
        if needle:
            stops = [stop for stop in stops if needle in stop.name.lower()]
        return stops[:limit]

    @property
    def is_catalog_degraded(self) -> bool:
        """True while the catalog serves the placeholder instead of real stops."""
        return self._catalog.is_degraded

    async def get_stop(self, stop_id: int) -> Stop | None:
        return await self._catalog.get_stop(stop_id)

    async def get_arrivals(self, stop_id: int) -> ArrivalsResponse:
        return await self._arrivals_repository.get_arrivals(stop_id)

    async def show_arrivals(self, stop_id: int | None = None) -> StopBoard:
        """Build the board for a stop, defaulting to the primary stop.

        Never raises for upstream failures: the returned status tells a missing
        stop apart from unavailable arrivals and from a degraded catalog. While
        the catalog is degraded an unknown stop cannot be told apart from a real
        one, so its arrivals are fetched anyway and ``stop`` is left as None.
        """
        selected = stop_id if stop_id is not None else self.primary_stop_id
        stop = await self.get_stop(selected)
        if stop is None and not self.is_catalog_degraded:
            return StopBoard(
                primary_stop_id=self.primary_stop_id,
                requested_stop_id=selected,
                status=BoardStatus.STOP_NOT_FOUND,
            )

        try:
            arrivals = await self.get_arrivals(selected)
        except UpstreamError as e:
            logger.warning(f"Arrivals unavailable for stop {selected}: {e}")
            return StopBoard(
                primary_stop_id=self.primary_stop_id,
                requested_stop_id=selected,
                status=BoardStatus.ARRIVALS_UNAVAILABLE,
                stop=stop,
                error_code=e.code,
            )

        status = BoardStatus.CATALOG_DEGRADED if self.is_catalog_degraded else BoardStatus.OK
        return StopBoard(
            primary_stop_id=self.primary_stop_id,
            requested_stop_id=selected,
            status=status,
            stop=stop,
            arrivals=arrivals,
        )
