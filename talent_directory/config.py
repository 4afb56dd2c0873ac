"""
Configuration management for the talent directory
"""

import os

from dotenv import load_dotenv


class Config:
    """Configuration read from environment variables"""

    def __init__(self):
        # Record store
        self.db_path = self._get_env_var("TALENT_DB_PATH", "talent.db")

        # Logging
        self.log_level = self._get_env_var("TALENT_LOG_LEVEL", "INFO").upper()

        # Import behaviour
        self.preview_rows = int(self._get_env_var("TALENT_PREVIEW_ROWS", "5"))
        self.error_display_limit = int(self._get_env_var("TALENT_ERROR_DISPLAY_LIMIT", "10"))
        self.http_timeout = int(self._get_env_var("TALENT_HTTP_TIMEOUT", "30"))

        # Rating shown for candidates without survey responses
        self.default_rating = float(self._get_env_var("TALENT_DEFAULT_RATING", "4.5"))

    def _get_env_var(self, var_name: str, default: str | None = None) -> str | None:
        """Get environment variable with optional default"""
        value = os.getenv(var_name, default)
        return value.strip() if value else default


def load_config(env_file: str | None = None) -> Config:
    """Load a .env file (if present) and build the configuration"""
    load_dotenv(env_file)
    return Config()
