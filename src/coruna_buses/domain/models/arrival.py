"""Arrival domain models."""

import sys
from dataclasses import dataclass, field

# Sort key used for unknown ETAs so they land after every known one
UNKNOWN_ETA = sys.maxsize


@dataclass(frozen=True)
class Bus:
    """A single bus approaching a stop."""

    bus_id: int
    eta_minutes: int | None = None
    distance_meters: int | None = None
    status: int | None = None
    last_stop_id: int | None = None

    @property
    def sort_eta(self) -> int:
        return UNKNOWN_ETA if self.eta_minutes is None else self.eta_minutes

    def to_dict(self) -> dict[str, int | None]:
        return {
            "bus_id": self.bus_id,
            "eta_minutes": self.eta_minutes,
            "distance_meters": self.distance_meters,
            "status": self.status,
            "last_stop_id": self.last_stop_id,
        }


@dataclass(frozen=True)
class LineArrivals:
    """Buses of one line for one stop, soonest first."""

    line_id: int
    line_name: str | None
    color_hex: str | None
    buses: tuple[Bus, ...] = field(default_factory=tuple)

    @property
    def sort_eta(self) -> int:
        """ETA of the soonest bus; lines without buses sort last."""
        return self.buses[0].sort_eta if self.buses else UNKNOWN_ETA

    def to_dict(self) -> dict[str, object]:
        return {
            "line_id": self.line_id,
            "line_name": self.line_name,
            "color_hex": self.color_hex,
            "buses": [bus.to_dict() for bus in self.buses],
        }


@dataclass(frozen=True)
class ArrivalsResponse:
    """Live arrivals for one stop. An empty ``lines`` tuple is a valid result."""

    stop_id: int
    lines: tuple[LineArrivals, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, object]:
        return {"stop_id": self.stop_id, "lines": [line.to_dict() for line in self.lines]}
