"""
Utilities Package

Error types and logging helpers shared by the dashboard configuration.
"""

from .errors import ConfigError, DashError, HostResolutionError, UnknownKeyError
from .logging import get_logger, setup_logging, stop_logging

__all__ = [
    "ConfigError",
    "DashError",
    "HostResolutionError",
    "UnknownKeyError",
    "get_logger",
    "setup_logging",
    "stop_logging",
]
