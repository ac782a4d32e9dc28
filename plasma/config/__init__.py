"""
Runtime Configuration Module

Provides configuration loading for the circuit-shared constants and the
hasher backend.
"""

from .runtime import (
    CircuitConfig,
    HasherConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "CircuitConfig",
    "HasherConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]
