import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


class Settings(BaseSettings):
    """
    Bizdesk settings, read from the environment or a .env file.

    Tokens are issued by an external identity provider and verified here
    with the same SECRET_KEY, so only HMAC algorithms are accepted.
    """

    # Persistence
    DATABASE_URL: str
    DB_POOL_SIZE: int = Field(default=10, ge=1)
    DB_MAX_OVERFLOW: int = Field(default=20, ge=0)

    # Token verification
    SECRET_KEY: str = Field(..., min_length=1)
    JWT_ALGORITHM: str = "HS256"

    APP_NAME: str = "Bizdesk API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Comma-separated list of allowed origins; empty disables CORS
    CORS_ORIGINS: str = ""
    CORS_ALLOW_CREDENTIALS: bool = True

    # Stock below this (and above zero) is reported as low
    LOW_STOCK_THRESHOLD: int = Field(default=10, ge=1)
    # 0 = new tenants never expire
    TRIAL_PERIOD_DAYS: int = Field(default=0, ge=0)
    # Re-seed default currencies of every active tenant at startup
    SEED_DEFAULTS_ON_STARTUP: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def _hmac_only(cls, value: str) -> str:
        value = value.upper()
        if value not in _HMAC_ALGORITHMS:
            raise ValueError(f"JWT_ALGORITHM must be one of {', '.join(_HMAC_ALGORITHMS)}")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown LOG_LEVEL {value}")
        return value

    @property
    def cors_origins_list(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return []
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
