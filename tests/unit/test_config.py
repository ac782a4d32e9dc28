"""
Runtime Configuration Unit Tests
Tests for plasma/config/runtime.py
"""
import pytest

from plasma.config import (
    CircuitConfig,
    HasherConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)
from plasma.schemas.errors import ConfigurationException


@pytest.fixture
def clean_env(monkeypatch):
    for key in ("BALANCE_BITS", "NONCE_BITS", "COORD_BITS", "TREE_DEPTH", "HASHER_BACKEND"):
        monkeypatch.delenv(f"PLASMA_{key}", raising=False)
    return monkeypatch


class TestCircuitConfig:
    """Tests for CircuitConfig defaults and validation."""

    def test_defaults(self):
        config = CircuitConfig()

        assert config.balance_bits == 128
        assert config.nonce_bits == 32
        assert config.coord_bits == 254
        assert config.tree_depth == 24
        assert config.leaf_bits == 668

    def test_frozen(self):
        config = CircuitConfig()
        with pytest.raises(AttributeError):
            config.tree_depth = 10

    @pytest.mark.parametrize("kwargs", [
        {"balance_bits": 0},
        {"nonce_bits": 255},
        {"coord_bits": -1},
        {"balance_bits": "128"},
        {"nonce_bits": True},
    ])
    def test_invalid_widths_rejected(self, kwargs):
        with pytest.raises(ConfigurationException):
            CircuitConfig(**kwargs)

    def test_invalid_depth_rejected(self):
        with pytest.raises(ConfigurationException) as exc_info:
            CircuitConfig(tree_depth=-1)
        assert exc_info.value.details["setting"] == "tree_depth"

    def test_zero_depth_allowed(self):
        assert CircuitConfig(tree_depth=0).tree_depth == 0


class TestHasherConfig:
    """Tests for HasherConfig."""

    def test_default_backend(self):
        assert HasherConfig().backend == "pedersen"

    def test_unknown_backend_rejected(self):
        with pytest.raises(ConfigurationException, match="Unknown hasher backend"):
            HasherConfig(backend="poseidon")


class TestRuntimeConfig:
    """Tests for loading RuntimeConfig."""

    def test_from_dict_partial(self):
        config = RuntimeConfig.from_dict({"circuit": {"tree_depth": 10}})

        assert config.circuit.tree_depth == 10
        assert config.circuit.balance_bits == 128
        assert config.hasher.backend == "pedersen"

    def test_from_dict_unknown_key_rejected(self):
        with pytest.raises(ConfigurationException, match="Invalid configuration keys"):
            RuntimeConfig.from_dict({"circuit": {"depth": 10}})

    def test_from_dict_empty(self):
        assert RuntimeConfig.from_dict({}) == RuntimeConfig()

    def test_to_dict_round_trip(self):
        config = RuntimeConfig(
            circuit=CircuitConfig(balance_bits=64, tree_depth=8),
            hasher=HasherConfig(backend="sha256"),
            extra={"ledger": "main"},
        )
        assert RuntimeConfig.from_dict(config.to_dict()) == config

    def test_from_env(self, clean_env):
        clean_env.setenv("PLASMA_TREE_DEPTH", "12")
        clean_env.setenv("PLASMA_HASHER_BACKEND", "Sha256")

        config = RuntimeConfig.from_env()

        assert config.circuit.tree_depth == 12
        assert config.hasher.backend == "sha256"

    def test_from_env_non_integer_rejected(self, clean_env):
        clean_env.setenv("PLASMA_NONCE_BITS", "lots")

        with pytest.raises(ConfigurationException) as exc_info:
            RuntimeConfig.from_env()
        assert exc_info.value.details["setting"] == "nonce_bits"

    def test_from_env_defaults(self, clean_env):
        assert RuntimeConfig.from_env() == RuntimeConfig()

    def test_from_yaml(self, tmp_path, clean_env):
        path = tmp_path / "plasma.yaml"
        path.write_text(
            "circuit:\n"
            "  balance_bits: 96\n"
            "  tree_depth: 16\n"
            "hasher:\n"
            "  backend: sha256\n"
        )

        config = RuntimeConfig.from_yaml(path)

        assert config.circuit.balance_bits == 96
        assert config.circuit.tree_depth == 16
        assert config.hasher.backend == "sha256"

    def test_from_yaml_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert RuntimeConfig.from_yaml(path) == RuntimeConfig()

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "missing.yaml")

    def test_with_env_overrides(self, clean_env):
        base = RuntimeConfig.from_dict({"circuit": {"balance_bits": 96, "tree_depth": 16}})
        clean_env.setenv("PLASMA_TREE_DEPTH", "20")

        config = base.with_env_overrides()

        assert config.circuit.tree_depth == 20
        assert config.circuit.balance_bits == 96
        assert base.circuit.tree_depth == 16

    def test_with_env_overrides_noop(self, clean_env):
        base = RuntimeConfig()
        assert base.with_env_overrides() is base


class TestDefaultConfig:
    """Tests for the process-wide default."""

    def test_get_default_is_cached(self, clean_env):
        assert get_default_config() is get_default_config()

    def test_set_and_reset(self, clean_env):
        custom = RuntimeConfig(circuit=CircuitConfig(tree_depth=3))
        set_default_config(custom)
        assert get_default_config() is custom

        set_default_config(None)
        assert get_default_config() == RuntimeConfig()
