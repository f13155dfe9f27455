"""Arrivals repository port."""

from typing import Protocol

from coruna_buses.domain.models.arrival import ArrivalsResponse


class ArrivalsRepository(Protocol):
    """Port for retrieving live arrivals at a stop."""

    async def get_arrivals(self, stop_id: int) -> ArrivalsResponse:
        """Get interest-line arrivals for a stop, never cached."""
        ...
