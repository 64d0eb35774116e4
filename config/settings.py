"""
Application settings loaded from environment variables.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = Field(
        default="sqlite+aiosqlite:///./users.db",
        validation_alias=AliasChoices("database_url", "db_connect"),
    )

    # ── Security Secrets ──────────────────────────────────────────────────
    token_secret: str = "change-me-token-secret"   # HMAC secret for auth tokens
    token_expiry_seconds: int = 0                  # 0 = tokens never expire
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # ── Server ───────────────────────────────────────────────────────────
    api_prefix: str = ""
    port: int = 3000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: list = ["*"]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore",
    }


config = Settings()
