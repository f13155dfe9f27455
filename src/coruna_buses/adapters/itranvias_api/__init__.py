"""iTranvías API adapters for A Coruña city buses."""

from coruna_buses.adapters.itranvias_api.arrivals_repository import ItranviasArrivalsRepository
from coruna_buses.adapters.itranvias_api.catalog_cache import CatalogCache
from coruna_buses.adapters.itranvias_api.http_client import ItranviasHttpClient
from coruna_buses.adapters.itranvias_api.parser import TransitParser

__all__ = ["CatalogCache", "ItranviasArrivalsRepository", "ItranviasHttpClient", "TransitParser"]
