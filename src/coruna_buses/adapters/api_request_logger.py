"""Utility for logging upstream requests when CORUNA_LOG_REQUESTS is enabled."""

import logging
import os

logger = logging.getLogger(__name__)


def should_log_requests() -> bool:
    """Check if request logging is enabled via CORUNA_LOG_REQUESTS environment variable."""
    return os.getenv("CORUNA_LOG_REQUESTS", "").lower() == "true"


def log_api_request(method: str, url: str, timeout_ms: int | None = None) -> None:
    """Log an outgoing request if CORUNA_LOG_REQUESTS is enabled.

    Args:
        method: HTTP method (GET, POST, etc.).
        url: Full request URL.
        timeout_ms: Timeout applied to the request (optional).
    """
    if not should_log_requests():
        return

    suffix = f" (timeout {timeout_ms} ms)" if timeout_ms is not None else ""
    logger.info(f"API Request: {method} {url}{suffix}")


def log_api_response(url: str, status: int, elapsed_ms: float) -> None:
    """Log the status and latency of a finished request if logging is enabled."""
    if not should_log_requests():
        return

    logger.info(f"API Response: {status} from {url} in {elapsed_ms:.0f} ms")
