"""12-factor configuration adapter using environment variables and TOML config."""

import json
import logging
import tomllib
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from coruna_buses.adapters.itranvias_api.constants import (
    DEFAULT_ARRIVALS_URL_TEMPLATE,
    DEFAULT_STOPS_SOURCE_URL,
)
from coruna_buses.domain.models.transit_settings import TransitSettings

logger = logging.getLogger(__name__)

DEFAULT_PRIMARY_STOP_ID = 42
DEFAULT_INTEREST_LINES = ["3", "3A", "12", "14"]
MIN_HTTP_TIMEOUT_MS = 1000


def parse_interest_lines(value: Any) -> Any:
    """Accept a JSON list or a comma-separated string; trim and drop blanks."""
    if isinstance(value, str):
        text = value.strip()
        value = json.loads(text) if text.startswith("[") else text.split(",")
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    return value


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to bind the server to")

    # Transit configuration
    primary_stop_id: int = Field(
        default=DEFAULT_PRIMARY_STOP_ID,
        description="Stop shown by default and used as placeholder when the catalog is down",
    )
    interest_lines: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_INTEREST_LINES),
        description="Line ids or names to show (comma-separated or JSON list, empty for all)",
    )

    # iTranvías API configuration
    stops_source_url: str = Field(
        default=DEFAULT_STOPS_SOURCE_URL, description="URL of the stop/line catalog document"
    )
    arrivals_url_template: str = Field(
        default=DEFAULT_ARRIVALS_URL_TEMPLATE,
        description="Arrivals URL with a {stop_id} placeholder",
    )
    cache_ttl_seconds: int = Field(
        default=0, description="Catalog cache TTL in seconds (0 or negative caches forever)"
    )
    http_timeout_seconds: float = Field(
        default=8.0, description="Timeout for iTranvías API requests in seconds"
    )

    # TOML config file path with an optional [transit] section
    config_file: str | None = Field(
        default=None,
        description="Path to TOML configuration file overriding primary stop and interest lines",
    )

    @field_validator("interest_lines", mode="before")
    @classmethod
    def split_interest_lines(cls, v: Any) -> Any:
        """Split and clean interest line tokens."""
        return parse_interest_lines(v)

    @field_validator("primary_stop_id")
    @classmethod
    def validate_primary_stop_id(cls, v: int) -> int:
        """Validate the primary stop id is positive."""
        if v <= 0:
            raise ValueError("primary_stop_id must be a positive integer")
        return v

    @field_validator("arrivals_url_template")
    @classmethod
    def validate_arrivals_url_template(cls, v: str) -> str:
        """Validate the template has a place for the stop id."""
        if "{stop_id}" not in v:
            raise ValueError("arrivals_url_template must contain a {stop_id} placeholder")
        return v

    @property
    def http_timeout_ms(self) -> int:
        """Request timeout in milliseconds, never below one second."""
        return max(MIN_HTTP_TIMEOUT_MS, round(self.http_timeout_seconds * 1000))

    def _load_toml_data(self) -> dict[str, Any]:
        """Load the TOML file and apply its [transit] section, if any."""
        if not self.config_file:
            return {}

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        transit = toml_data.get("transit", {})
        if not isinstance(transit, dict):
            raise ValueError("TOML config 'transit' must be a table")

        if "primary_stop_id" in transit:
            stop_id = transit["primary_stop_id"]
            if isinstance(stop_id, int) and not isinstance(stop_id, bool) and stop_id > 0:
                self.primary_stop_id = stop_id
            else:
                logger.warning(f"Ignoring invalid primary_stop_id in {config_path}: {stop_id!r}")

        if "interest_lines" in transit:
            raw_lines = transit["interest_lines"]
            lines = parse_interest_lines(raw_lines if isinstance(raw_lines, list) else [])
            # An empty list in the file means "not configured", not "show everything"
            self.interest_lines = lines or list(DEFAULT_INTEREST_LINES)

        return toml_data

    def to_transit_settings(self) -> TransitSettings:
        """Resolve the settings the catalog and arrivals components run with."""
        self._load_toml_data()
        return TransitSettings(
            primary_stop_id=self.primary_stop_id,
            stops_source_url=self.stops_source_url,
            arrivals_url_template=self.arrivals_url_template,
            interest_lines=tuple(self.interest_lines),
            cache_ttl_seconds=self.cache_ttl_seconds,
            http_timeout_ms=self.http_timeout_ms,
        )
