"""Stop domain model."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Stop:
    """Represents a bus stop from the network catalog."""

    id: int
    name: str
    latitude: float = 0.0
    longitude: float = 0.0
    lines: tuple[int, ...] = field(default_factory=tuple)  # Line ids served, in upstream order

    def to_dict(self) -> dict[str, object]:
        """Serialize to the public record shape."""
        return {
            "id": self.id,
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "lines": list(self.lines),
        }
