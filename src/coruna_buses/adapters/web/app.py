"""Starlette JSON API over the transit service."""

import logging
from typing import TYPE_CHECKING, Any

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from coruna_buses.adapters.formatters import ArrivalsFormatter
from coruna_buses.domain.errors import UpstreamError

if TYPE_CHECKING:
    from coruna_buses.application.services import TransitService

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50
MAX_LIMIT = 400


def _parse_limit(raw: str | None) -> int:
    """Parse the ``limit`` query parameter; raises ValueError when out of range."""
    if raw is None or raw == "":
        return DEFAULT_LIMIT
    limit = int(raw)
    if not 1 <= limit <= MAX_LIMIT:
        raise ValueError(f"limit must be between 1 and {MAX_LIMIT}")
    return limit


def create_app(service: "TransitService", formatter: ArrivalsFormatter | None = None) -> Starlette:
    """Build the ASGI application.

    Args:
        service: Transit service answering every route.
        formatter: Formatter for the ``summary`` fields. Defaults to ArrivalsFormatter.
    """
    formatter = formatter or ArrivalsFormatter()

    async def search_stops(request: Request) -> Response:
        try:
            limit = _parse_limit(request.query_params.get("limit"))
        except ValueError as e:
            return JSONResponse({"error": "invalid_limit", "detail": str(e)}, status_code=400)

        stops = await service.search_stops(request.query_params.get("query"), limit)
        return JSONResponse(
            {
                "total": len(stops),
                "stops": [stop.to_dict() for stop in stops],
                "primary_stop_id": service.primary_stop_id,
                "summary": formatter.summarize_search(stops),
            }
        )

    async def get_stop(request: Request) -> Response:
        stop_id: int = request.path_params["stop_id"]
        stop = await service.get_stop(stop_id)
        if stop is None:
            return JSONResponse({"error": "stop_not_found"}, status_code=404)
        return JSONResponse(stop.to_dict())

    async def get_arrivals(request: Request) -> Response:
        stop_id: int = request.path_params["stop_id"]
        stop = await service.get_stop(stop_id)
        # A degraded catalog only knows the primary stop, so unknown ids are tried live
        if stop is None and not service.is_catalog_degraded:
            return JSONResponse({"error": "stop_not_found"}, status_code=404)
        try:
            arrivals = await service.get_arrivals(stop_id)
        except UpstreamError as e:
            logger.warning(f"Arrivals unavailable for stop {stop_id}: {e}")
            return JSONResponse({"error": e.code}, status_code=502)
        return JSONResponse(arrivals.to_dict())

    async def show_board(request: Request) -> Response:
        stop_id: int | None = request.path_params.get("stop_id")
        board = await service.show_arrivals(stop_id)
        payload: dict[str, Any] = board.to_dict()
        payload["summary"] = formatter.summarize_board(board)
        return JSONResponse(payload)

    async def healthz(_request: Request) -> Response:
        """Health check endpoint for load balancers and monitoring."""
        return Response(content="Ok", media_type="text/plain")

    return Starlette(
        routes=[
            Route("/api/stops", search_stops, methods=["GET"]),
            Route("/api/stops/{stop_id:int}", get_stop, methods=["GET"]),
            Route("/api/stops/{stop_id:int}/arrivals", get_arrivals, methods=["GET"]),
            Route("/api/board", show_board, methods=["GET"]),
            Route("/api/board/{stop_id:int}", show_board, methods=["GET"]),
            Route("/healthz", healthz, methods=["GET"]),
        ]
    )
