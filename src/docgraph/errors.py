"""Exceptions raised at docgraph's boundaries (file loading and config).

The graph pipeline itself never raises in normal operation; bad input
degrades to an empty or default view instead.
"""

from __future__ import annotations


class DocGraphError(Exception):
    """Base class for docgraph errors."""


class TreeLoadError(DocGraphError):
    """A content tree could not be read or did not validate."""


class ConfigError(DocGraphError):
    """``config.toml`` is unreadable or holds an invalid value."""
