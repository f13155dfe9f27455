"""Text formatters for transport adapters."""

from coruna_buses.adapters.formatters.arrivals_formatter import ArrivalsFormatter

__all__ = ["ArrivalsFormatter"]
