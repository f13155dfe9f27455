"""Configuration adapters."""

from coruna_buses.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
