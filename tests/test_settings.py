"""
Tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from config.settings import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("DATABASE_URL", "DB_CONNECT", "TOKEN_SECRET", "BCRYPT_ROUNDS", "API_PREFIX"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings(_env_file=None)

        assert settings.database_url.startswith("sqlite+aiosqlite://")
        assert settings.bcrypt_rounds == 10
        assert settings.token_expiry_seconds == 0
        assert settings.api_prefix == ""

    def test_db_connect_alias(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("DB_CONNECT", "postgresql+asyncpg://u:p@db/users")

        assert Settings(_env_file=None).database_url == "postgresql+asyncpg://u:p@db/users"

    def test_token_secret_from_env(self, monkeypatch):
        monkeypatch.setenv("TOKEN_SECRET", "from-env")
        assert Settings(_env_file=None).token_secret == "from-env"

    def test_bcrypt_rounds_bounds(self, monkeypatch):
        monkeypatch.setenv("BCRYPT_ROUNDS", "2")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)
