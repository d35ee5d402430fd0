"""
Tests for configuration loading.
"""

import os
from pathlib import Path

import pytest

from stationpref.env import (
    DEFAULT_POSTAL_API,
    DEFAULT_STATION_API,
    Settings,
    load_env,
    load_settings,
)


class TestLoadSettings:
    """Test building Settings from environment variables."""

    def test_defaults(self):
        """Empty environment should give the documented defaults."""
        settings = load_settings({})
        assert settings == Settings()
        assert settings.workers == 10
        assert settings.timeout == 15.0
        assert settings.station_api == DEFAULT_STATION_API
        assert settings.postal_api == DEFAULT_POSTAL_API
        assert settings.log_dir == Path("logs")

    def test_overrides(self):
        settings = load_settings({
            "STATIONPREF_WORKERS": "4",
            "STATIONPREF_TIMEOUT": "2.5",
            "STATIONPREF_STATION_API": "http://localhost:8000/api/json",
            "STATIONPREF_POSTAL_API": "http://localhost:8001/v1/",
            "STATIONPREF_LOG_LEVEL": "debug",
            "STATIONPREF_LOG_DIR": "/tmp/stationpref",
        })
        assert settings.workers == 4
        assert settings.timeout == 2.5
        assert settings.station_api == "http://localhost:8000/api/json"
        assert settings.postal_api == "http://localhost:8001/v1"
        assert settings.log_level == "DEBUG"
        assert settings.log_dir == Path("/tmp/stationpref")

    def test_blank_values_fall_back(self):
        settings = load_settings({"STATIONPREF_WORKERS": " ", "STATIONPREF_TIMEOUT": ""})
        assert settings.workers == 10
        assert settings.timeout == 15.0

    def test_invalid_integer(self):
        """Bad integer should name the offending variable."""
        with pytest.raises(ValueError, match="STATIONPREF_WORKERS"):
            load_settings({"STATIONPREF_WORKERS": "ten"})

    def test_invalid_float(self):
        with pytest.raises(ValueError, match="STATIONPREF_TIMEOUT"):
            load_settings({"STATIONPREF_TIMEOUT": "soon"})


class TestLoadEnv:
    """Test .env loading."""

    def test_loads_dotenv(self, tmp_path, monkeypatch):
        monkeypatch.delenv("STATIONPREF_WORKERS", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("STATIONPREF_WORKERS=3\n", encoding="utf-8")

        load_env(env_file)

        assert os.environ["STATIONPREF_WORKERS"] == "3"
        monkeypatch.delenv("STATIONPREF_WORKERS")

    def test_existing_environment_wins(self, tmp_path, monkeypatch):
        """Variables already exported should not be overwritten by .env."""
        monkeypatch.setenv("STATIONPREF_WORKERS", "7")
        env_file = tmp_path / ".env"
        env_file.write_text("STATIONPREF_WORKERS=3\n", encoding="utf-8")

        load_env(env_file)

        assert os.environ["STATIONPREF_WORKERS"] == "7"

    def test_missing_file_ignored(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        load_env()
