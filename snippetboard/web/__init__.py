"""Browser UI for the snippet board."""

from .server import create_app

__all__ = ["create_app"]
