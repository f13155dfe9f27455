"""Adapters layer - external system integrations."""

from coruna_buses.adapters.config import AppConfig
from coruna_buses.adapters.itranvias_api import (
    CatalogCache,
    ItranviasArrivalsRepository,
    ItranviasHttpClient,
)

__all__ = [
    "AppConfig",
    "CatalogCache",
    "ItranviasArrivalsRepository",
    "ItranviasHttpClient",
]
