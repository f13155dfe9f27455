"""Human-readable summaries of stops and arrivals."""

from coruna_buses.domain.models import ArrivalsResponse, BoardStatus, Stop, StopBoard

MAX_SUMMARY_LINES = 4


class ArrivalsFormatter:
    """Renders structured stop boards as short text for transports."""

    @staticmethod
    def format_eta(eta_minutes: int | None) -> str:
        """Format an ETA in minutes (e.g., 'arriving', '1 min', '7 min')."""
        if eta_minutes is None:
            return "no data"
        if eta_minutes <= 0:
            return "arriving"
        if eta_minutes == 1:
            return "1 min"
        return f"{eta_minutes} min"

    def summarize_board(self, board: StopBoard) -> str:
        """One-line summary of a stop board, covering every board status."""
        if board.status is BoardStatus.STOP_NOT_FOUND:
            return f"Stop {board.requested_stop_id} does not exist."
        if board.status is BoardStatus.ARRIVALS_UNAVAILABLE or board.arrivals is None:
            return (
                f"Could not retrieve arrivals for stop {board.requested_stop_id} "
                f"({board.error_code or 'transit_api_unavailable'})."
            )

        if board.stop is not None:
            label = f"{board.stop.id} - {board.stop.name}"
        else:
            label = f"Stop {board.requested_stop_id}"
        summary = self._summarize_arrivals(label, board.arrivals)
        if board.status is BoardStatus.CATALOG_DEGRADED:
            summary += " (stop catalog temporarily unavailable)"
        return summary

    def _summarize_arrivals(self, label: str, arrivals: ArrivalsResponse) -> str:
        lines = arrivals.lines
        if not lines:
            return f"{label}: no arrivals for the configured lines."

        upcoming = []
        for line in lines[:MAX_SUMMARY_LINES]:
            name = line.line_name or f"Line {line.line_id}"
            first_eta = line.buses[0].eta_minutes if line.buses else None
            upcoming.append(f"{name} ({self.format_eta(first_eta)})")
        return f"{label}. Next: {', '.join(upcoming)}."

    @staticmethod
    def summarize_search(stops: list[Stop]) -> str:
        return f"Found {len(stops)} stop{'' if len(stops) == 1 else 's'}."

    @staticmethod
    def summarize_stop(stop: Stop) -> str:
        lines = ", ".join(str(line_id) for line_id in stop.lines) or "none"
        return f"{stop.id} - {stop.name} (lines: {lines})"
