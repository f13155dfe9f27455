"""Errors raised when the upstream transit API cannot be used."""


class UpstreamError(Exception):
    """Base class for upstream fetch failures.

    ``code`` is a stable machine-readable identifier surfaced to callers.
    """

    code = "transit_api_unavailable"

    def __init__(self, url: str, detail: str | None = None) -> None:
        self.url = url
        super().__init__(f"{self.code}: {detail or url}")


class UpstreamTimeout(UpstreamError):
    """The request did not complete within the configured timeout."""

    code = "transit_api_timeout"


class UpstreamHttpError(UpstreamError):
    """The upstream answered with a non-2xx status."""

    def __init__(self, url: str, status: int) -> None:
        self.status = status
        super().__init__(url, f"HTTP {status} from {url}")

    @property
    def code(self) -> str:  # type: ignore[override]
        return f"transit_api_error_{self.status}"


class UpstreamMalformed(UpstreamError):
    """The body was not a JSON object."""

    code = "transit_api_invalid_payload"


class UpstreamUnreachable(UpstreamError):
    """Any other transport failure: DNS, refused connection, aborted request."""

    code = "transit_api_unavailable"
