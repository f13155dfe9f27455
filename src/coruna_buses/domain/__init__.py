"""Domain layer - core business logic and models."""

from coruna_buses.domain.models import (
    ArrivalsResponse,
    InterestSet,
    LineMeta,
    Stop,
    TransitSettings,
)
from coruna_buses.domain.ports import (
    ArrivalsRepository,
    StopCatalog,
    UpstreamClient,
)

__all__ = [
    "ArrivalsRepository",
    "ArrivalsResponse",
    "InterestSet",
    "LineMeta",
    "Stop",
    "StopCatalog",
    "TransitSettings",
    "UpstreamClient",
]
