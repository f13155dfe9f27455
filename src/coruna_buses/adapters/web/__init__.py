"""Web adapter exposing the transit service over HTTP."""

from coruna_buses.adapters.web.app import create_app

__all__ = ["create_app"]
