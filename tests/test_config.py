"""Tests for environment configuration."""

import os
from unittest.mock import patch

from talent_directory.config import Config, load_config


class TestConfig:
    """Test cases for Config."""

    def test_defaults(self, monkeypatch):
        for name in (
            "TALENT_DB_PATH",
            "TALENT_LOG_LEVEL",
            "TALENT_PREVIEW_ROWS",
            "TALENT_ERROR_DISPLAY_LIMIT",
            "TALENT_HTTP_TIMEOUT",
            "TALENT_DEFAULT_RATING",
        ):
            monkeypatch.delenv(name, raising=False)

        config = Config()

        assert config.db_path == "talent.db"
        assert config.log_level == "INFO"
        assert config.preview_rows == 5
        assert config.error_display_limit == 10
        assert config.http_timeout == 30
        assert config.default_rating == 4.5

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("TALENT_DB_PATH", " /data/talent.db ")
        monkeypatch.setenv("TALENT_LOG_LEVEL", "debug")
        monkeypatch.setenv("TALENT_DEFAULT_RATING", "4.0")

        config = Config()

        assert config.db_path == "/data/talent.db"
        assert config.log_level == "DEBUG"
        assert config.default_rating == 4.0

    def test_load_config_reads_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("TALENT_ERROR_DISPLAY_LIMIT", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("TALENT_ERROR_DISPLAY_LIMIT=3\n", encoding="utf-8")

        with patch.dict(os.environ):
            config = load_config(str(env_file))

        assert config.error_display_limit == 3
