"""Resolved transit configuration handed to the core."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TransitSettings:
    """Configuration the catalog and arrivals components run with."""

    primary_stop_id: int
    stops_source_url: str
    arrivals_url_template: str  # Contains a "{stop_id}" placeholder
    interest_lines: tuple[str, ...] = field(default_factory=tuple)
    cache_ttl_seconds: int = 0  # 0 or negative caches forever once loaded
    http_timeout_ms: int = 8000

    def arrivals_url(self, stop_id: int) -> str:
        return self.arrivals_url_template.replace("{stop_id}", str(stop_id))
