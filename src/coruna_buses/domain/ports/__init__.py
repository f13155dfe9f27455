"""Ports (interfaces) for the ports-and-adapters architecture."""

from coruna_buses.domain.ports.arrivals_repository import ArrivalsRepository
from coruna_buses.domain.ports.stop_catalog import StopCatalog
from coruna_buses.domain.ports.upstream_client import UpstreamClient

__all__ = [
    "ArrivalsRepository",
    "StopCatalog",
    "UpstreamClient",
]
