"""
Test Factories Module

Centralized factory functions for creating test resolvers and expected
configuration snapshots.
"""

from .config_factories import (
    make_expected_config,
    make_failing_resolver,
    make_resolver,
)

__all__ = [
    "make_expected_config",
    "make_failing_resolver",
    "make_resolver",
]
