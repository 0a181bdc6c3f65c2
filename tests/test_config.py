"""Unit tests for environment configuration."""

import logging

import pytest

from hyper_types import config
from hyper_types.codec import DecodingError, decode
from hyper_types.images import ImageDelete


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Start every test from an empty cache and environment."""
    for var in (config.ENV_STRICT, config.ENV_INDENT, config.ENV_LOG_LEVEL):
        monkeypatch.delenv(var, raising=False)
    config.reset_config()
    yield
    config.reset_config()


class TestDefaults:
    """Test values without environment overrides."""

    def test_defaults(self):
        assert config.strict_decoding() is False
        assert config.output_indent() == 2
        assert config.log_level() == "WARNING"


class TestEnvironment:
    """Test environment variable overrides."""

    def test_env_var_overrides(self, monkeypatch):
        monkeypatch.setenv("HYPER_TYPES_STRICT", "yes")
        monkeypatch.setenv("HYPER_TYPES_INDENT", "4")
        monkeypatch.setenv("HYPER_TYPES_LOG_LEVEL", "debug")

        assert config.strict_decoding() is True
        assert config.output_indent() == 4
        assert config.log_level() == "DEBUG"

    def test_invalid_values_fall_back(self, monkeypatch, caplog):
        monkeypatch.setenv("HYPER_TYPES_STRICT", "maybe")
        monkeypatch.setenv("HYPER_TYPES_INDENT", "wide")
        monkeypatch.setenv("HYPER_TYPES_LOG_LEVEL", "loud")

        with caplog.at_level(logging.WARNING, logger="hyper_types.config"):
            assert config.strict_decoding() is False
            assert config.output_indent() == 2
            assert config.log_level() == "WARNING"

        assert "HYPER_TYPES_STRICT" in caplog.text
        assert "HYPER_TYPES_INDENT" in caplog.text

    def test_values_are_cached(self, monkeypatch):
        assert config.strict_decoding() is False
        monkeypatch.setenv("HYPER_TYPES_STRICT", "1")
        assert config.strict_decoding() is False

        config.reset_config()
        assert config.strict_decoding() is True

    def test_strict_env_reaches_decoder(self, monkeypatch):
        monkeypatch.setenv("HYPER_TYPES_STRICT", "true")

        with pytest.raises(DecodingError):
            decode(ImageDelete, {"Deleted": "sha256:abc", "Extra": 1})

        # An explicit argument wins over the environment
        value = decode(ImageDelete, {"Deleted": "sha256:abc", "Extra": 1}, strict=False)
        assert value.deleted == "sha256:abc"


class TestParsers:
    """Test value parsers."""

    @pytest.mark.parametrize("raw", ["1", "true", "Yes", " on "])
    def test_true(self, raw):
        assert config.parse_bool(raw) is True

    @pytest.mark.parametrize("raw", ["0", "false", "NO", "off", ""])
    def test_false(self, raw):
        assert config.parse_bool(raw) is False

    def test_bad_bool(self):
        with pytest.raises(ValueError):
            config.parse_bool("maybe")

    def test_log_level(self):
        assert config.parse_log_level("info") == "INFO"
        with pytest.raises(ValueError):
            config.parse_log_level("chatty")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
