"""Stop board domain model."""

from dataclasses import dataclass
from enum import Enum

from coruna_buses.domain.models.arrival import ArrivalsResponse
from coruna_buses.domain.models.stop import Stop


class BoardStatus(str, Enum):
    """Outcome of asking for a stop's board."""

    OK = "ok"
    STOP_NOT_FOUND = "stop_not_found"
    ARRIVALS_UNAVAILABLE = "arrivals_unavailable"
    CATALOG_DEGRADED = "catalog_degraded"


@dataclass(frozen=True)
class StopBoard:
    """A stop together with its live arrivals and how the lookup went."""

    primary_stop_id: int
    requested_stop_id: int
    status: BoardStatus
    stop: Stop | None = None
    arrivals: ArrivalsResponse | None = None
    error_code: str | None = None  # Upstream error code when arrivals failed

    def to_dict(self) -> dict[str, object]:
        return {
            "primary_stop_id": self.primary_stop_id,
            "stop": self.stop.to_dict() if self.stop else None,
            "arrivals": self.arrivals.to_dict() if self.arrivals else None,
            "status": self.status.value,
            "message": self.error_code,
        }
