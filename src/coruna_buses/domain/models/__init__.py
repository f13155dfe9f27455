"""Domain models for A Coruña bus data."""

from coruna_buses.domain.models.arrival import ArrivalsResponse, Bus, LineArrivals
from coruna_buses.domain.models.catalog_entry import CatalogEntry
from coruna_buses.domain.models.interest_set import InterestSet
from coruna_buses.domain.models.line_meta import LineMeta
from coruna_buses.domain.models.stop import Stop
from coruna_buses.domain.models.stop_board import BoardStatus, StopBoard
from coruna_buses.domain.models.transit_settings import TransitSettings

__all__ = [
    "ArrivalsResponse",
    "BoardStatus",
    "Bus",
    "CatalogEntry",
    "InterestSet",
    "LineArrivals",
    "LineMeta",
    "Stop",
    "StopBoard",
    "TransitSettings",
]
