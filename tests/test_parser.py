"""Tests for the iTranvías response parser."""

import math

import pytest

from coruna_buses.adapters.itranvias_api.parser import (
    TransitParser,
    format_color,
    safe_float,
    safe_int,
)


class TestSafeInt:
    """Tests for lenient integer parsing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(7, 7), (7.9, 7), (-2.5, -2), ("12", 12), (" 12abc", 12), ("3A", 3)],
    )
    def test_when_value_has_leading_integer_then_parsed(self, value: object, expected: int) -> None:
        assert safe_int(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", True, math.inf, math.nan, [1], {"a": 1}])
    def test_when_value_not_numeric_then_none(self, value: object) -> None:
        assert safe_int(value) is None


class TestSafeFloat:
    """Tests for lenient float parsing."""

    def test_when_numeric_string_then_parsed(self) -> None:
        assert safe_float("43.3623") == pytest.approx(43.3623)
        assert safe_float("-8.41xyz") == pytest.approx(-8.41)

    def test_when_not_numeric_then_none(self) -> None:
        assert safe_float("north") is None
        assert safe_float(None) is None
        assert safe_float(False) is None


class TestFormatColor:
    """Tests for color canonicalization."""

    def test_when_bare_hex_then_prefixed(self) -> None:
        assert format_color("ff0000") == "#ff0000"

    def test_when_already_prefixed_then_unchanged(self) -> None:
        assert format_color("#00ff00") == "#00ff00"

    def test_when_short_hex_then_left_padded(self) -> None:
        assert format_color("ff") == "#0000ff"

    @pytest.mark.parametrize("value", ["", "   ", None, 16711680])
    def test_when_blank_or_missing_then_none(self, value: object) -> None:
        assert format_color(value) is None


class TestParseStops:
    """Tests for stop catalog parsing."""

    def test_when_record_malformed_then_dropped_and_siblings_kept(self) -> None:
        """Given a mix of good and bad records, when parsing, then only bad ones are dropped."""
        raw = [
            {"id": 1, "nombre": "Porto", "posx": "-8.4", "posy": "43.3", "enlaces": [3, "12", "x"]},
            {"nombre": "No id"},
            {"id": "abc"},
            "not an object",
            None,
            {"id": "2"},
        ]

        stops = TransitParser.parse_stops(raw)

        assert [stop.id for stop in stops] == [1, 2]
        assert stops[0].lines == (3, 12)
        assert stops[0].latitude == pytest.approx(43.3)
        assert stops[0].longitude == pytest.approx(-8.4)

    def test_when_fields_missing_then_defaults_used(self) -> None:
        """Given a stop with only an id, then name, coordinates and lines default."""
        stop = TransitParser.parse_stops([{"id": 5, "nombre": 123, "posx": "?", "enlaces": "3"}])[0]

        assert stop.name == "Parada 5"
        assert (stop.latitude, stop.longitude) == (0.0, 0.0)
        assert stop.lines == ()

    def test_when_input_is_empty_then_empty(self) -> None:
        assert TransitParser.parse_stops([]) == []


class TestParseLines:
    """Tests for line metadata parsing."""

    def test_when_lines_parsed_then_keyed_by_id(self) -> None:
        raw = [
            {"id": 3, "lin_comer": " 3 ", "color": "ff0000"},
            {"id": "1A", "lin_comer": "UDC"},
            {"lin_comer": "ghost"},
            42,
        ]

        lines = TransitParser.parse_lines(raw)

        assert set(lines) == {3, 1}
        assert lines[3].name == "3"
        assert lines[3].color == "#ff0000"
        assert lines[1].name == "UDC"
        assert lines[1].name_lower == "udc"
        assert lines[1].color is None

    def test_when_name_missing_then_stringified_id(self) -> None:
        lines = TransitParser.parse_lines([{"id": 21}, {"id": 22, "lin_comer": 22}])

        assert lines[21].name == "21"
        assert lines[22].name == "22"

    def test_when_name_is_integral_float_then_formatted_as_integer(self) -> None:
        """Given lin_comer 3.0, when parsed, then the name is "3" so a "3" token matches it."""
        lines = TransitParser.parse_lines(
            [{"id": 3, "lin_comer": 3.0}, {"id": 4, "lin_comer": 4.5}]
        )

        assert lines[3].name == "3"
        assert lines[4].name == "4.5"

    def test_when_id_repeated_then_last_wins(self) -> None:
        raw = [{"id": 3, "lin_comer": "old"}, {"id": 3, "lin_comer": "new"}]
        lines = TransitParser.parse_lines(raw)

        assert lines[3].name == "new"


class TestExtraction:
    """Tests for walking the nested upstream documents."""

    def test_when_catalog_nodes_missing_then_empty_lists(self) -> None:
        assert TransitParser.extract_catalog({}) == ([], [])
        assert TransitParser.extract_catalog({"iTranvias": []}) == ([], [])
        assert TransitParser.extract_catalog({"iTranvias": {"actualizacion": {"paradas": {}}}}) == (
            [],
            [],
        )

    def test_when_arrival_lines_lack_id_then_skipped(self) -> None:
        payload = {
            "buses": {
                "lineas": [
                    {"linea": 3, "buses": [{"bus": 1}]},
                    {"buses": [{"bus": 2}]},
                    "junk",
                    {"linea": "12", "buses": "junk"},
                ]
            }
        }

        extracted = list(TransitParser.extract_arrival_lines(payload))

        assert extracted == [(3, [{"bus": 1}]), (12, [])]

    def test_when_buses_parsed_then_nullable_fields_tolerated(self) -> None:
        buses = TransitParser.parse_buses(
            [
                {"bus": 3321, "tiempo": "4", "distancia": 950, "estado": 0, "ult_parada": 523},
                {"bus": None, "tiempo": 1},
                {"bus": "3322", "tiempo": "?"},
            ]
        )

        assert [bus.bus_id for bus in buses] == [3321, 3322]
        assert buses[0].eta_minutes == 4
        assert buses[0].last_stop_id == 523
        assert buses[1].eta_minutes is None
        assert buses[1].distance_meters is None
