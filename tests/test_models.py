"""Tests for domain models."""

import math

import pytest

from coruna_buses.domain.models import (
    BoardStatus,
    Bus,
    CatalogEntry,
    InterestSet,
    LineArrivals,
    LineMeta,
    Stop,
    StopBoard,
)
from coruna_buses.domain.models.arrival import UNKNOWN_ETA


def test_stop_to_dict() -> None:
    """Given a stop, when serializing, then lines become a list."""
    stop = Stop(id=42, name="Abente y Lago", latitude=43.37, longitude=-8.39, lines=(12, 3))

    assert stop.to_dict() == {
        "id": 42,
        "name": "Abente y Lago",
        "latitude": 43.37,
        "longitude": -8.39,
        "lines": [12, 3],
    }


def test_line_meta_lowercases_name() -> None:
    assert LineMeta(id=300, name="UDC").name_lower == "udc"


def test_models_are_immutable() -> None:
    """Given a stop, when assigning a field, then an error is raised."""
    stop = Stop(id=1, name="A")

    with pytest.raises(AttributeError):
        stop.name = "B"  # type: ignore[misc]


def test_unknown_eta_sorts_last() -> None:
    unknown = Bus(bus_id=1)
    known = Bus(bus_id=2, eta_minutes=30)

    assert unknown.sort_eta == UNKNOWN_ETA
    assert sorted([unknown, known], key=lambda bus: bus.sort_eta) == [known, unknown]


def test_line_without_buses_sorts_last() -> None:
    empty = LineArrivals(line_id=1, line_name="1", color_hex=None)
    busy = LineArrivals(
        line_id=2, line_name="2", color_hex=None, buses=(Bus(bus_id=5, eta_minutes=60),)
    )

    assert empty.sort_eta > busy.sort_eta


def test_catalog_entry_indexes_first_stop_per_id() -> None:
    """Given duplicate stop ids, when indexing, then the first one wins."""
    first = Stop(id=7, name="First")
    entry = CatalogEntry(
        stops=(first, Stop(id=7, name="Second")),
        lines={},
        interest=InterestSet(),
        expires_at=math.inf,
    )

    assert entry.stops_by_id == {7: first}
    assert entry.is_placeholder is False


def test_stop_board_to_dict_for_missing_stop() -> None:
    board = StopBoard(primary_stop_id=42, requested_stop_id=9, status=BoardStatus.STOP_NOT_FOUND)

    assert board.to_dict() == {
        "primary_stop_id": 42,
        "stop": None,
        "arrivals": None,
        "status": "stop_not_found",
        "message": None,
    }
