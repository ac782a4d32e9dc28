"""
Module 06 - Runtime Configuration
Circuit-shared constants and hasher selection.

Owner: Protocol/Crypto Engineer
Module ID: M06

Leaf bit widths and tree depth are circuit-shared; the hasher backend is local.

The circuit constants are a contract with the external proving circuit:
both sides must use identical values. CircuitConfig is therefore frozen,
and nothing in the tree core alters it after construction.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from plasma.crypto.field import FR_BITS
from plasma.schemas.errors import ConfigurationException

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "PLASMA_"

DEFAULT_BALANCE_BITS = 128
DEFAULT_NONCE_BITS = 32
DEFAULT_COORD_BITS = FR_BITS
DEFAULT_TREE_DEPTH = 24

HASHER_BACKENDS = ("pedersen", "sha256")


@dataclass(frozen=True)
class CircuitConfig:
    """Bit widths and depth shared with the proving circuit."""
    balance_bits: int = DEFAULT_BALANCE_BITS
    nonce_bits: int = DEFAULT_NONCE_BITS
    coord_bits: int = DEFAULT_COORD_BITS
    tree_depth: int = DEFAULT_TREE_DEPTH

    def __post_init__(self) -> None:
        for name in ("balance_bits", "nonce_bits", "coord_bits"):
            width = getattr(self, name)
            if isinstance(width, bool) or not isinstance(width, int):
                raise ConfigurationException(
                    f"{name} must be an integer, got {width!r}", setting=name
                )
            if not 1 <= width <= FR_BITS:
                raise ConfigurationException(
                    f"{name} must be between 1 and {FR_BITS}, got {width}",
                    setting=name,
                )
        if isinstance(self.tree_depth, bool) or not isinstance(self.tree_depth, int):
            raise ConfigurationException(
                f"tree_depth must be an integer, got {self.tree_depth!r}",
                setting="tree_depth",
            )
        if self.tree_depth < 0:
            raise ConfigurationException(
                f"tree_depth must be non-negative, got {self.tree_depth}",
                setting="tree_depth",
            )

    @property
    def leaf_bits(self) -> int:
        """Total width of an encoded account leaf."""
        return self.balance_bits + self.nonce_bits + 2 * self.coord_bits


@dataclass
class HasherConfig:
    """Configuration for the leaf/node hash backend."""
    backend: str = "pedersen"

    def __post_init__(self):
        if self.backend not in HASHER_BACKENDS:
            raise ConfigurationException(
                f"Unknown hasher backend {self.backend!r}, "
                f"expected one of {list(HASHER_BACKENDS)}",
                setting="backend",
            )


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for the account tree.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    circuit: CircuitConfig = field(default_factory=CircuitConfig)
    hasher: HasherConfig = field(default_factory=HasherConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - PLASMA_BALANCE_BITS: balance width in bits
        - PLASMA_NONCE_BITS: nonce width in bits
        - PLASMA_COORD_BITS: public key coordinate width in bits
        - PLASMA_TREE_DEPTH: tree depth
        - PLASMA_HASHER_BACKEND: "pedersen" or "sha256"
        """
        overrides: dict[str, Any] = {}

        for key in ("balance_bits", "nonce_bits", "coord_bits", "tree_depth"):
            raw = os.getenv(f"{ENV_PREFIX}{key.upper()}")
            if raw:
                try:
                    overrides.setdefault("circuit", {})[key] = int(raw)
                except ValueError as e:
                    raise ConfigurationException(
                        f"{ENV_PREFIX}{key.upper()} must be an integer, got {raw!r}",
                        setting=key,
                    ) from e

        if os.getenv(f"{ENV_PREFIX}HASHER_BACKEND"):
            overrides.setdefault("hasher", {})["backend"] = (
                os.getenv(f"{ENV_PREFIX}HASHER_BACKEND", "pedersen").lower()
            )

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        circuit_data = data.get("circuit", {}) or {}
        hasher_data = data.get("hasher", {}) or {}

        try:
            circuit = CircuitConfig(**circuit_data) if circuit_data else CircuitConfig()
            hasher = HasherConfig(**hasher_data) if hasher_data else HasherConfig()
        except TypeError as e:
            raise ConfigurationException(f"Invalid configuration keys: {e}") from e

        return cls(
            circuit=circuit,
            hasher=hasher,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        circuit = self.circuit
        if "circuit" in overrides:
            circuit = replace(circuit, **overrides["circuit"])

        hasher = self.hasher
        if "hasher" in overrides:
            hasher = HasherConfig(**overrides["hasher"])

        return RuntimeConfig(circuit=circuit, hasher=hasher, extra=dict(self.extra))

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "circuit": {
                "balance_bits": self.circuit.balance_bits,
                "nonce_bits": self.circuit.nonce_bits,
                "coord_bits": self.circuit.coord_bits,
                "tree_depth": self.circuit.tree_depth,
            },
            "hasher": {
                "backend": self.hasher.backend,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig | None) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
