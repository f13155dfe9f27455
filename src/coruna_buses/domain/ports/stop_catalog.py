"""Stop catalog port."""

from typing import Protocol

from coruna_buses.domain.models.interest_set import InterestSet
from coruna_buses.domain.models.line_meta import LineMeta
from coruna_buses.domain.models.stop import Stop


class StopCatalog(Protocol):
    """Port for reading the cached stop/line catalog."""

    async def get_stops(self, force_refresh: bool = False) -> list[Stop]:
        """Interest-filtered stops sorted by name."""
        ...

    async def get_stop(self, stop_id: int) -> Stop | None:
        """Look up one stop, with its lines filtered to the interest set."""
        ...

    async def ensure_lines_loaded(self) -> None:
        """Load the catalog if no line metadata is known yet."""
        ...

    def get_line_meta(self, line_id: int) -> LineMeta | None:
        """Metadata of a line in the current catalog generation."""
        ...

    def get_interest_set(self) -> InterestSet:
        """Interest set resolved for the current catalog generation."""
        ...

    @property
    def is_degraded(self) -> bool:
        """Whether the catalog is serving the placeholder entry."""
        ...
