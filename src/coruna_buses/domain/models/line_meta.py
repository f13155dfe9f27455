"""Line metadata domain model."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LineMeta:
    """Display metadata for a bus line."""

    id: int
    name: str
    color: str | None = None  # "#RRGGBB"-shaped token, None when upstream sends nothing
    name_lower: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "name_lower", self.name.lower())
