"""Catalog cache entry domain model."""

from dataclasses import dataclass, field

from coruna_buses.domain.models.interest_set import InterestSet
from coruna_buses.domain.models.line_meta import LineMeta
from coruna_buses.domain.models.stop import Stop


@dataclass(frozen=True)
class CatalogEntry:
    """One generation of the stop/line catalog.

    Entries are never mutated; a refresh swaps in a whole new entry.
    ``expires_at`` is on the ``time.monotonic()`` clock and may be ``math.inf``.
    """

    stops: tuple[Stop, ...]
    lines: dict[int, LineMeta]
    interest: InterestSet
    expires_at: float
    is_placeholder: bool = False
    stops_by_id: dict[int, Stop] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_id: dict[int, Stop] = {}
        for stop in self.stops:
            by_id.setdefault(stop.id, stop)
        object.__setattr__(self, "stops_by_id", by_id)
