"""Tests for configuration overrides and validation."""

import importlib
import pytest
from tiktoktrim import config


@pytest.fixture
def reload_config(monkeypatch):
    """Reload config with patched environment, then restore defaults."""
    yield lambda: importlib.reload(config)
    for name in ("TIKTOKTRIM_CONNECT_TIMEOUT", "TIKTOKTRIM_READ_TIMEOUT", "TIKTOKTRIM_MAX_REDIRECTS"):
        monkeypatch.delenv(name, raising=False)
    importlib.reload(config)


class TestConfig:
    """Test suite for config module."""

    def test_defaults(self):
        assert config.CONNECT_TIMEOUT == 10
        assert config.READ_TIMEOUT == 10
        assert config.DOMAIN_MARKER == "tiktok.com"
        assert config.TRACKING_PARAM == "_t"
        assert "vm.tiktok.com" in config.SHORT_LINK_HOSTS

    def test_timeout_override_from_environment(self, monkeypatch, reload_config):
        monkeypatch.setenv("TIKTOKTRIM_CONNECT_TIMEOUT", "2.5")
        monkeypatch.setenv("TIKTOKTRIM_READ_TIMEOUT", "4")

        reloaded = reload_config()

        assert reloaded.CONNECT_TIMEOUT == 2.5
        assert reloaded.READ_TIMEOUT == 4.0

    def test_non_positive_timeout_rejected(self, monkeypatch, reload_config):
        monkeypatch.setenv("TIKTOKTRIM_READ_TIMEOUT", "0")

        with pytest.raises(ValueError, match="READ_TIMEOUT must be a positive number"):
            reload_config()

    @pytest.mark.parametrize(
        "name, value",
        [
            ("TIKTOKTRIM_CONNECT_TIMEOUT", "inf"),
            ("TIKTOKTRIM_READ_TIMEOUT", "nan"),
            ("TIKTOKTRIM_READ_TIMEOUT", "-inf"),
        ],
    )
    def test_non_finite_timeout_rejected(self, monkeypatch, reload_config, name, value):
        monkeypatch.setenv(name, value)

        with pytest.raises(ValueError, match=f"{name} must be a finite number"):
            reload_config()

    def test_non_numeric_timeout_rejected(self, monkeypatch, reload_config):
        monkeypatch.setenv("TIKTOKTRIM_CONNECT_TIMEOUT", "ten")

        with pytest.raises(
            ValueError, match="TIKTOKTRIM_CONNECT_TIMEOUT must be a number of type float, got: 'ten'"
        ):
            reload_config()

    def test_non_integer_max_redirects_rejected(self, monkeypatch, reload_config):
        monkeypatch.setenv("TIKTOKTRIM_MAX_REDIRECTS", "2.5")

        with pytest.raises(ValueError, match="TIKTOKTRIM_MAX_REDIRECTS must be a number of type int"):
            reload_config()

    def test_invalid_max_redirects_rejected(self, monkeypatch, reload_config):
        monkeypatch.setenv("TIKTOKTRIM_MAX_REDIRECTS", "0")

        with pytest.raises(ValueError, match="MAX_REDIRECTS must be a positive integer"):
            reload_config()
