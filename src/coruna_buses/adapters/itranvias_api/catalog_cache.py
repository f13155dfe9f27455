"""In-memory cache of the iTranvías stop/line catalog.

The cache holds one ``CatalogEntry`` at a time. Refreshes are single-flight:
the first caller that finds the entry expired starts one ``asyncio.Task`` and
every later caller awaits that same task until it finishes. The task is
recorded before the first suspension point, so no second fetch can start.

On upstream failure the previous entry keeps being served without extending
its expiry. If no load ever succeeded, a placeholder holding only the primary
stop is installed with a finite expiry, so it is retried like any other entry.
"""

from __future__ import annotations

import asyncio
import logging
import math
import time
import unicodedata
from collections.abc import Callable
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from coruna_buses.adapters.itranvias_api.constants import (
    PLACEHOLDER_RETRY_SECONDS,
    PLACEHOLDER_STOP_NAME,
)
from coruna_buses.adapters.itranvias_api.parser import TransitParser
from coruna_buses.domain.errors import UpstreamError
from coruna_buses.domain.models.catalog_entry import CatalogEntry
from coruna_buses.domain.models.interest_set import InterestSet
from coruna_buses.domain.models.stop import Stop
from coruna_buses.domain.ports.stop_catalog import StopCatalog

if TYPE_CHECKING:
    from coruna_buses.domain.models.line_meta import LineMeta
    from coruna_buses.domain.models.transit_settings import TransitSettings
    from coruna_buses.domain.ports.upstream_client import UpstreamClient

logger = logging.getLogger(__name__)


def stop_name_sort_key(name: str) -> tuple[str, str]:
    """Spanish-style collation key: accent and case insensitive, "ñ" after "n"."""
    folded = name.casefold().replace("ñ", "n\U0010ffff")
    stripped = "".join(
        c for c in unicodedata.normalize("NFKD", folded) if not unicodedata.combining(c)
    )
    return stripped, name


class CatalogCache(StopCatalog):
    """Owns the cached catalog entry and its refresh policy."""

    def __init__(
        self,
        settings: TransitSettings,
        client: UpstreamClient,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize an empty cache.

        Args:
            settings: Resolved transit settings (source URL, TTL, interest tokens).
            client: Upstream client used to fetch the catalog document.
            clock: Monotonic clock in seconds, injectable for tests.
        """
        self._settings = settings
        self._client = client
        self._clock = clock
        self._entry: CatalogEntry | None = None
        self._refresh_task: asyncio.Task[CatalogEntry] | None = None

    @property
    def is_degraded(self) -> bool:
        return self._entry is not None and self._entry.is_placeholder

    @property
    def is_refreshing(self) -> bool:
        return self._refresh_task is not None

    async def get_stops(self, force_refresh: bool = False) -> list[Stop]:
        """Get interest-filtered stops sorted by name, refreshing first if expired.

        Stops left with no line of interest are omitted. With the unfiltered
        interest sentinel every stop is returned with its full line list.
        """
        entry = await self._load(force=force_refresh)
        if entry.interest.is_unfiltered:
            stops = list(entry.stops)
        else:
            stops = [
                filtered
                for filtered in (self._apply_interest(entry, stop) for stop in entry.stops)
                if filtered.lines
            ]
        return sorted(stops, key=lambda stop: stop_name_sort_key(stop.name))

    async def get_stop(self, stop_id: int) -> Stop | None:
        """Look up a stop in the unfiltered catalog, then filter its lines to the interest set."""
        entry = await self._load()
        stop = entry.stops_by_id.get(stop_id)
        if stop is None:
            return None
        return self._apply_interest(entry, stop)

    async def ensure_lines_loaded(self) -> None:
        """Load the catalog when no line metadata is known yet."""
        if self._entry is None or not self._entry.lines:
            await self._load()

    def get_line_meta(self, line_id: int) -> LineMeta | None:
        if self._entry is None:
            return None
        return self._entry.lines.get(line_id)

    def get_interest_set(self) -> InterestSet:
        if self._entry is None:
            return InterestSet()
        return self._entry.interest

    @staticmethod
    def _apply_interest(entry: CatalogEntry, stop: Stop) -> Stop:
        return replace(stop, lines=entry.interest.filter_lines(stop.lines))

    async def _load(self, force: bool = False) -> CatalogEntry:
        """Return a fresh entry, joining or starting the single in-flight refresh."""
        entry = self._entry
        if not force and entry is not None and self._clock() < entry.expires_at:
            return entry

        if self._refresh_task is None:
            self._refresh_task = asyncio.create_task(self._refresh())
        else:
            logger.debug("Joining in-flight catalog refresh")

        # A cancelled caller must not cancel the refresh other callers are waiting on
        return await asyncio.shield(self._refresh_task)

    async def _refresh(self) -> CatalogEntry:
        url = self._settings.stops_source_url
        try:
            payload = await self._client.fetch_json(url)
            entry = self._build_entry(payload)
        except UpstreamError as e:
            entry = self._fallback_entry(e)
        except Exception as e:
            if self._entry is None:
                logger.exception("Unexpected error on first catalog load, serving placeholder")
                self._entry = self._placeholder_entry()
                raise
            entry = self._fallback_entry(e)
        finally:
            self._refresh_task = None

        self._entry = entry
        return entry

    def _build_entry(self, payload: dict[str, Any]) -> CatalogEntry:
        raw_stops, raw_lines = TransitParser.extract_catalog(payload)
        lines = TransitParser.parse_lines(raw_lines)
        stops = TransitParser.parse_stops(raw_stops)
        interest = InterestSet.resolve(lines, self._settings.interest_lines)

        ttl = self._settings.cache_ttl_seconds
        expires_at = self._clock() + ttl if ttl > 0 else math.inf
        logger.info(
            f"Loaded catalog: {len(stops)} stop(s), {len(lines)} line(s), "
            f"{len(interest.line_ids) or 'all'} line(s) of interest"
        )
        return CatalogEntry(
            stops=tuple(stops), lines=lines, interest=interest, expires_at=expires_at
        )

    def _fallback_entry(self, error: Exception) -> CatalogEntry:
        if self._entry is not None:
            logger.warning(f"Catalog refresh failed, serving previous catalog: {error}")
            return self._entry

        logger.error(f"Initial catalog load failed, serving placeholder stop: {error}")
        return self._placeholder_entry()

    def _placeholder_entry(self) -> CatalogEntry:
        """Single primary stop with no lines and a finite expiry."""
        stop_id = self._settings.primary_stop_id
        ttl = self._settings.cache_ttl_seconds
        retry_in = ttl if ttl > 0 else PLACEHOLDER_RETRY_SECONDS
        return CatalogEntry(
            stops=(Stop(id=stop_id, name=PLACEHOLDER_STOP_NAME.format(stop_id=stop_id)),),
            lines={},
            interest=InterestSet(),
            expires_at=self._clock() + retry_in,
            is_placeholder=True,
        )
