"""Tests for configuration module."""

import pytest
import os
import sys
from datetime import timedelta
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from config import Config, parse_duration

TIDES_ENV = [
    "DATA_DIR",
    "TIDES_ENABLED",
    "TIDES_STATION",
    "TIDES_API_URL",
    "TIDES_CACHE_FILE",
    "TIDES_RECENCY",
    "TIDES_INTERVAL",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove tides settings from the environment."""
    for key in TIDES_ENV:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestParseDuration:
    """Test duration parsing."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("5 minutes", timedelta(minutes=5)),
            ("1 hour", timedelta(hours=1)),
            ("+2 days", timedelta(days=2)),
            ("90", timedelta(seconds=90)),
            ("30s", timedelta(seconds=30)),
            (" 1.5 Hours ", timedelta(minutes=90)),
        ],
    )
    def test_valid(self, value, expected):
        """Test accepted duration strings."""
        assert parse_duration(value) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["", "soon", "5 fortnights", "0 minutes", "-5 minutes"])
    def test_invalid(self, value):
        """Test rejected duration strings."""
        with pytest.raises(ValueError):
            parse_duration(value)


class TestConfig:
    """Test configuration loading."""

    @pytest.mark.unit
    def test_config_defaults(self, clean_env, tmp_path):
        """Test default configuration values."""
        clean_env.chdir(tmp_path)
        config = Config(env_path=str(tmp_path / "missing.env"))

        assert config.tides["enabled"] is True
        assert config.tides["station"] == "8452660"
        assert config.tides["recency"] == timedelta(minutes=5)
        assert config.tides["interval"] == timedelta(minutes=10)
        assert config.tides["cache_file"] == "tides_cache.json"
        assert config.cache_path.name == "tides_cache.json"

    @pytest.mark.unit
    def test_config_from_env(self, clean_env, tmp_path):
        """Test configuration from environment variables."""
        clean_env.setenv("DATA_DIR", str(tmp_path))
        clean_env.setenv("TIDES_STATION", "8454049")
        clean_env.setenv("TIDES_RECENCY", "15 minutes")
        clean_env.setenv("TIDES_INTERVAL", "1 hour")
        clean_env.setenv("TIDES_CACHE_FILE", "newport.json")

        config = Config(env_path=str(tmp_path / "missing.env"))

        assert config.tides["station"] == "8454049"
        assert config.tides["recency"] == timedelta(minutes=15)
        assert config.tides["interval"] == timedelta(hours=1)
        assert config.cache_path == Path(tmp_path) / "newport.json"

    @pytest.mark.unit
    def test_config_from_env_file(self, clean_env, tmp_path):
        """Test loading settings from a .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("TIDES_STATION=8447930\nTIDES_RECENCY=2 minutes\n")

        config = Config(env_path=str(env_file))

        assert config.tides["station"] == "8447930"
        assert config.tides["recency"] == timedelta(minutes=2)

        # load_dotenv writes straight to os.environ
        for key in ("TIDES_STATION", "TIDES_RECENCY"):
            os.environ.pop(key, None)

    @pytest.mark.unit
    def test_invalid_recency_falls_back(self, clean_env, tmp_path):
        """Test that a bad duration uses the default."""
        clean_env.setenv("TIDES_RECENCY", "whenever")

        config = Config(env_path=str(tmp_path / "missing.env"))

        assert config.tides["recency"] == timedelta(minutes=5)

    @pytest.mark.unit
    def test_provider_enabled_check(self, clean_env, tmp_path):
        """Test checking if providers are enabled."""
        clean_env.setenv("TIDES_ENABLED", "false")

        config = Config(env_path=str(tmp_path / "missing.env"))

        assert config.is_provider_enabled("tides") is False
        assert config.is_provider_enabled("unknown") is False

    @pytest.mark.unit
    def test_get_provider_config(self, clean_env, tmp_path):
        """Test getting provider-specific configuration."""
        config = Config(env_path=str(tmp_path / "missing.env"))

        tides_config = config.get_provider_config("tides")
        assert "station" in tides_config
        assert "recency" in tides_config

        assert config.get_provider_config("unknown") == {}
