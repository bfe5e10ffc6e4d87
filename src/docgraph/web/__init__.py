"""HTTP API for the documentation graph."""

from .server import app, configure, start_server

__all__ = ["app", "configure", "start_server"]
