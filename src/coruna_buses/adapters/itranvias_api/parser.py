"""Parser for iTranvías API responses.

The upstream schema is third-party and undocumented, so every field access is
fallible: a malformed record is dropped while its well-formed siblings are kept.
"""

import logging
import math
import re
from collections.abc import Iterator
from typing import Any

from coruna_buses.adapters.itranvias_api.constants import PLACEHOLDER_STOP_NAME
from coruna_buses.domain.models.arrival import Bus
from coruna_buses.domain.models.line_meta import LineMeta
from coruna_buses.domain.models.stop import Stop

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def as_object(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None


def as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def safe_int(value: Any) -> int | None:
    """Parse an integer, accepting finite numbers and strings with a leading integer."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return math.trunc(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        return int(match.group(1)) if match else None
    return None


def safe_float(value: Any) -> float | None:
    """Parse a float, accepting finite numbers and strings with a leading number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    if isinstance(value, str):
        match = _FLOAT_PREFIX.match(value)
        return float(match.group(1)) if match else None
    return None


def format_color(raw_color: Any) -> str | None:
    """Normalize an upstream color to a ``#RRGGBB``-shaped token.

    Values already starting with ``#`` are kept; others are left-padded with
    zeros to six characters and prefixed. Blank or non-string values give None.
    """
    if not isinstance(raw_color, str) or not raw_color.strip():
        return None
    color = raw_color.strip()
    if color.startswith("#"):
        return color
    return f"#{color.rjust(6, '0')}"


class TransitParser:
    """Turns loosely-typed iTranvías documents into strict domain records."""

    @staticmethod
    def extract_catalog(payload: dict[str, Any]) -> tuple[list[Any], list[Any]]:
        """Extract (raw stops, raw lines) from a catalog document.

        Missing or non-object intermediate nodes yield empty lists.
        """
        root = as_object(payload.get("iTranvias")) or {}
        update = as_object(root.get("actualizacion")) or {}
        return as_list(update.get("paradas")), as_list(update.get("lineas"))

    @staticmethod
    def extract_arrival_lines(payload: dict[str, Any]) -> Iterator[tuple[int, list[Any]]]:
        """Yield (line id, raw buses) for each line entry of an arrivals document.

        Entries that are not objects or have no numeric line id are skipped.
        """
        buses_root = as_object(payload.get("buses")) or {}
        for raw_line in as_list(buses_root.get("lineas")):
            line = as_object(raw_line)
            if line is None:
                continue
            line_id = safe_int(line.get("linea"))
            if line_id is None:
                continue
            yield line_id, as_list(line.get("buses"))

    @staticmethod
    def parse_stops(raw_stops: list[Any]) -> list[Stop]:
        """Parse catalog stop entries, dropping those without a numeric id.

        Args:
            raw_stops: Raw ``paradas`` entries.

        Returns:
            List of Stop objects in upstream order.
        """
        results = []
        for raw in raw_stops:
            stop = TransitParser._parse_stop(raw)
            if stop is not None:
                results.append(stop)

        dropped = len(raw_stops) - len(results)
        if dropped:
            logger.debug(f"Dropped {dropped} malformed stop record(s)")
        return results

    @staticmethod
    def _parse_stop(raw: Any) -> Stop | None:
        stop = as_object(raw)
        if stop is None:
            return None
        stop_id = safe_int(stop.get("id"))
        if stop_id is None:
            return None

        name = stop.get("nombre")
        if not isinstance(name, str) or not name.strip():
            name = PLACEHOLDER_STOP_NAME.format(stop_id=stop_id)

        lines = (safe_int(item) for item in as_list(stop.get("enlaces")))
        return Stop(
            id=stop_id,
            name=name,
            latitude=safe_float(stop.get("posy")) or 0.0,
            longitude=safe_float(stop.get("posx")) or 0.0,
            lines=tuple(line_id for line_id in lines if line_id is not None),
        )

    @staticmethod
    def parse_lines(raw_lines: list[Any]) -> dict[int, LineMeta]:
        """Parse catalog line entries into metadata keyed by line id.

        Entries without a numeric id are dropped. A repeated id keeps the last entry.
        """
        info: dict[int, LineMeta] = {}
        for raw in raw_lines:
            line = as_object(raw)
            if line is None:
                continue
            line_id = safe_int(line.get("id"))
            if line_id is None:
                continue

            name = TransitParser._line_name(line.get("lin_comer"), line_id)
            info[line_id] = LineMeta(id=line_id, name=name, color=format_color(line.get("color")))
        return info

    @staticmethod
    def _line_name(raw_name: Any, line_id: int) -> str:
        if isinstance(raw_name, str) and raw_name.strip():
            return raw_name.strip()
        if isinstance(raw_name, float) and raw_name.is_integer():
            return str(int(raw_name))
        if isinstance(raw_name, (int, float)) and not isinstance(raw_name, bool):
            return str(raw_name)
        return str(line_id)

    @staticmethod
    def parse_buses(raw_buses: list[Any]) -> list[Bus]:
        """Parse bus entries of one arrivals line, dropping those without a bus id."""
        results = []
        for raw in raw_buses:
            bus = as_object(raw)
            if bus is None:
                continue
            bus_id = safe_int(bus.get("bus"))
            if bus_id is None:
                continue
            results.append(
                Bus(
                    bus_id=bus_id,
                    eta_minutes=safe_int(bus.get("tiempo")),
                    distance_meters=safe_int(bus.get("distancia")),
                    status=safe_int(bus.get("estado")),
                    last_stop_id=safe_int(bus.get("ult_parada")),
                )
            )
        return results
