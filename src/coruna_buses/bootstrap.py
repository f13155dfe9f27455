"""Wiring of adapters and services shared by the web server and the CLI."""

from typing import TYPE_CHECKING

from coruna_buses.adapters.itranvias_api import (
    CatalogCache,
    ItranviasArrivalsRepository,
    ItranviasHttpClient,
)
from coruna_buses.application.services import TransitService

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from coruna_buses.domain.models import TransitSettings


def build_transit_service(settings: "TransitSettings", session: "ClientSession") -> TransitService:
    """Create the catalog cache, arrivals repository and service over one session."""
    client = ItranviasHttpClient(session=session, timeout_ms=settings.http_timeout_ms)
    catalog = CatalogCache(settings, client)
    arrivals_repository = ItranviasArrivalsRepository(settings, client, catalog)
    return TransitService(catalog, arrivals_repository, primary_stop_id=settings.primary_stop_id)
