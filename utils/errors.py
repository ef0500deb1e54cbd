"""
Custom exception classes for the dashboard configuration.

These provide a hierarchy of typed exceptions for better error handling.
"""


class DashError(Exception):
    """Base exception for dashboard-related errors."""

    pass


class ConfigError(DashError):
    """Exception raised for configuration-related errors."""

    pass


class UnknownKeyError(ConfigError, KeyError):
    """Raised when a dotted configuration key is not recognized."""

    def __init__(self, key: object) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Unknown configuration key: {self.key!r}"


class HostResolutionError(DashError):
    """The environment could not report a usable hostname."""

    pass
