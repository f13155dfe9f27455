"""Command-line access to stops and arrivals."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

import aiohttp

from coruna_buses.adapters.config import AppConfig
from coruna_buses.adapters.formatters import ArrivalsFormatter
from coruna_buses.application.services import TransitService
from coruna_buses.bootstrap import build_transit_service
from coruna_buses.domain.models import BoardStatus


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


async def run_search(
    service: TransitService, query: str | None, limit: int, as_json: bool = False
) -> int:
    """Print stops matching ``query``. Returns the process exit code."""
    formatter = ArrivalsFormatter()
    stops = await service.search_stops(query, limit)
    if as_json:
        _print_json({"total": len(stops), "stops": [stop.to_dict() for stop in stops]})
        return 0

    print(formatter.summarize_search(stops))
    for stop in stops:
        print(f"  {formatter.summarize_stop(stop)}")
    return 0


async def run_stop(service: TransitService, stop_id: int, as_json: bool = False) -> int:
    """Print one stop. Returns 1 when the stop does not exist."""
    stop = await service.get_stop(stop_id)
    if stop is None:
        print(f"Stop {stop_id} does not exist.", file=sys.stderr)
        return 1

    if as_json:
        _print_json(stop.to_dict())
    else:
        print(ArrivalsFormatter.summarize_stop(stop))
    return 0


async def run_arrivals(service: TransitService, stop_id: int | None, as_json: bool = False) -> int:
    """Print the arrivals board of a stop. Returns 1 unless the board could be built."""
    board = await service.show_arrivals(stop_id)
    if as_json:
        _print_json(board.to_dict())
    else:
        formatter = ArrivalsFormatter()
        print(formatter.summarize_board(board))
        if board.arrivals:
            for line in board.arrivals.lines:
                etas = ", ".join(formatter.format_eta(bus.eta_minutes) for bus in line.buses)
                print(f"  {line.line_name or line.line_id}: {etas or 'no buses'}")

    if board.status in (BoardStatus.STOP_NOT_FOUND, BoardStatus.ARRIVALS_UNAVAILABLE):
        return 1
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="A Coruña bus stops and arrivals",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Search for stops of interest
  coruna-buses-cli search "Plaza"

  # Show one stop
  coruna-buses-cli stop 42

  # Show arrivals at the primary stop, or at a given one
  coruna-buses-cli arrivals
  coruna-buses-cli arrivals 523 --json
        """,
    )
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log upstream activity")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    search_parser = subparsers.add_parser("search", help="Search stops by name")
    search_parser.add_argument("query", nargs="?", help="Part of the stop name")
    search_parser.add_argument("--limit", type=int, default=50, help="Maximum results (1-400)")

    stop_parser = subparsers.add_parser("stop", help="Show one stop")
    stop_parser.add_argument("stop_id", type=int, help="Stop ID")

    arrivals_parser = subparsers.add_parser("arrivals", help="Show live arrivals at a stop")
    arrivals_parser.add_argument(
        "stop_id", type=int, nargs="?", help="Stop ID (defaults to the primary stop)"
    )
    return parser


async def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.ERROR,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = AppConfig().to_transit_settings()
    except (ValueError, FileNotFoundError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    async with aiohttp.ClientSession() as session:
        service = build_transit_service(settings, session)
        if args.command == "search":
            return await run_search(service, args.query, args.limit, as_json=args.json)
        if args.command == "stop":
            return await run_stop(service, args.stop_id, as_json=args.json)
        return await run_arrivals(service, args.stop_id, as_json=args.json)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    cli_main()
