"""Tests for application services."""

import pytest

from coruna_buses.application.services import TransitService
from coruna_buses.domain.errors import UpstreamTimeout
from coruna_buses.domain.models import (
    ArrivalsResponse,
    BoardStatus,
    Bus,
    InterestSet,
    LineArrivals,
    LineMeta,
    Stop,
)


class MockStopCatalog:
    """Mock stop catalog returning fixed stops."""

    def __init__(self, stops: list[Stop], degraded: bool = False) -> None:
        """Initialize with stops in display order."""
        self.stops = stops
        self.degraded = degraded

    async def get_stops(self, force_refresh: bool = False) -> list[Stop]:  # noqa: ARG002
        return list(self.stops)

    async def get_stop(self, stop_id: int) -> Stop | None:
        return next((stop for stop in self.stops if stop.id == stop_id), None)

    async def ensure_lines_loaded(self) -> None:
        return None

    def get_line_meta(self, line_id: int) -> LineMeta | None:  # noqa: ARG002
        return None

    def get_interest_set(self) -> InterestSet:
        return InterestSet()

    @property
    def is_degraded(self) -> bool:
        return self.degraded


class MockArrivalsRepository:
    """Mock arrivals repository returning a fixed response or raising."""

    def __init__(
        self, lines: tuple[LineArrivals, ...] = (), error: Exception | None = None
    ) -> None:
        self.lines = lines
        self.error = error
        self.requested: list[int] = []

    async def get_arrivals(self, stop_id: int) -> ArrivalsResponse:
        self.requested.append(stop_id)
        if self.error is not None:
            raise self.error
        return ArrivalsResponse(stop_id=stop_id, lines=self.lines)


@pytest.fixture
def sample_stops() -> list[Stop]:
    """Create sample stops in name order."""
    return [
        Stop(id=42, name="Abente y Lago", lines=(12,)),
        Stop(id=523, name="Plaza de Pontevedra", lines=(3,)),
        Stop(id=524, name="Plaza de Lugo", lines=(3, 12)),
    ]


@pytest.fixture
def sample_lines() -> tuple[LineArrivals, ...]:
    bus = Bus(bus_id=1, eta_minutes=2)
    return (LineArrivals(line_id=3, line_name="3", color_hex="#ff0000", buses=(bus,)),)


class TestSearchStops:
    """Tests for stop search."""

    @pytest.mark.asyncio
    async def test_when_query_given_then_case_insensitive_substring_match(
        self, sample_stops: list[Stop]
    ) -> None:
        service = TransitService(MockStopCatalog(sample_stops), MockArrivalsRepository(), 42)

        stops = await service.search_stops("  PLAZA ")

        assert [stop.id for stop in stops] == [523, 524]

    @pytest.mark.asyncio
    async def test_when_query_blank_then_first_stops_returned(
        self, sample_stops: list[Stop]
    ) -> None:
        service = TransitService(MockStopCatalog(sample_stops), MockArrivalsRepository(), 42)

        stops = await service.search_stops(None, limit=2)

        assert [stop.id for stop in stops] == [42, 523]

    @pytest.mark.asyncio
    async def test_when_limit_out_of_range_then_clamped(self, sample_stops: list[Stop]) -> None:
        service = TransitService(MockStopCatalog(sample_stops), MockArrivalsRepository(), 42)

        assert len(await service.search_stops("", limit=0)) == 1
        assert len(await service.search_stops("", limit=10_000)) == 3


class TestShowArrivals:
    """Tests for the stop board use case."""

    @pytest.mark.asyncio
    async def test_when_no_stop_given_then_primary_stop_used(
        self, sample_stops: list[Stop], sample_lines: tuple[LineArrivals, ...]
    ) -> None:
        repository = MockArrivalsRepository(lines=sample_lines)
        service = TransitService(MockStopCatalog(sample_stops), repository, 42)

        board = await service.show_arrivals()

        assert board.status is BoardStatus.OK
        assert board.stop is not None
        assert board.stop.id == 42
        assert board.arrivals is not None
        assert board.arrivals.lines == sample_lines
        assert repository.requested == [42]

    @pytest.mark.asyncio
    async def test_when_stop_unknown_then_not_found_without_fetch(
        self, sample_stops: list[Stop]
    ) -> None:
        repository = MockArrivalsRepository()
        service = TransitService(MockStopCatalog(sample_stops), repository, 42)

        board = await service.show_arrivals(999)

        assert board.status is BoardStatus.STOP_NOT_FOUND
        assert board.stop is None
        assert repository.requested == []

    @pytest.mark.asyncio
    async def test_when_arrivals_fail_then_unavailable_with_code(
        self, sample_stops: list[Stop]
    ) -> None:
        repository = MockArrivalsRepository(error=UpstreamTimeout("https://example.test"))
        service = TransitService(MockStopCatalog(sample_stops), repository, 42)

        board = await service.show_arrivals(523)

        assert board.status is BoardStatus.ARRIVALS_UNAVAILABLE
        assert board.error_code == "transit_api_timeout"
        assert board.stop is not None
        assert board.arrivals is None

    @pytest.mark.asyncio
    async def test_when_catalog_degraded_then_status_reports_it(self) -> None:
        catalog = MockStopCatalog([Stop(id=42, name="Parada 42")], degraded=True)
        service = TransitService(catalog, MockArrivalsRepository(), 42)

        board = await service.show_arrivals()

        assert board.status is BoardStatus.CATALOG_DEGRADED
        assert board.to_dict()["status"] == "catalog_degraded"

    @pytest.mark.asyncio
    async def test_when_catalog_degraded_then_other_stop_is_not_reported_missing(
        self, sample_lines: tuple[LineArrivals, ...]
    ) -> None:
        """Given a placeholder catalog, when asking for another stop, then arrivals are fetched."""
        catalog = MockStopCatalog([Stop(id=42, name="Parada 42")], degraded=True)
        repository = MockArrivalsRepository(lines=sample_lines)
        service = TransitService(catalog, repository, 42)

        board = await service.show_arrivals(523)

        assert board.status is BoardStatus.CATALOG_DEGRADED
        assert board.stop is None
        assert board.arrivals is not None
        assert board.arrivals.lines == sample_lines
        assert repository.requested == [523]

    @pytest.mark.asyncio
    async def test_when_get_arrivals_fails_then_error_propagates(
        self, sample_stops: list[Stop]
    ) -> None:
        repository = MockArrivalsRepository(error=UpstreamTimeout("https://example.test"))
        service = TransitService(MockStopCatalog(sample_stops), repository, 42)

        with pytest.raises(UpstreamTimeout):
            await service.get_arrivals(523)
