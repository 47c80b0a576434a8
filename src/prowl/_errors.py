"""Prowl error hierarchy.

All prowl-specific errors inherit from ProwlError for easy catching.
"""


class ProwlError(Exception):
    """Base error for all prowl operations."""


class ConfigError(ProwlError):
    """Invalid or missing configuration."""


class FatalIOError(ProwlError):
    """Filesystem failure while reading routes or writing bundle output."""


class PathEncodingError(ProwlError):
    """A discovered route path cannot be represented as text."""


class RouteConflictError(ProwlError):
    """Two route files resolve to the same module binding name."""
