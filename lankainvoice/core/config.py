from __future__ import annotations

import os
from decimal import Decimal
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_TRACKING_SECRET = "default-secret"


class BaseAppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "LankaInvoice"
    ENV: str = "dev"
    DATABASE_URL: str | None = None

    # Tax defaults (Sri Lanka, IRD rates as of 2024)
    DEFAULT_VAT_RATE: Decimal = Decimal("0.15")
    SSCL_RATE: Decimal = Decimal("0.025")

    # Invoice numbering
    INVOICE_NUMBER_PADDING: int = 6
    DEFAULT_INVOICE_PREFIX: str = "INV"

    # Engagement tracking (email open pixel / link click)
    TRACKING_SECRET: str = _DEFAULT_TRACKING_SECRET
    TRACKING_ALLOWED_DOMAINS: list[str] = ["localhost", "127.0.0.1"]
    TRACKING_RATE_LIMIT: str = "120/minute"
    FRONTEND_URL: str = "http://localhost:3000"

    CORS_ALLOW_ORIGINS: list[str] = ["*"]
    CORS_ALLOW_METHODS: list[str] = ["*"]
    CORS_ALLOW_HEADERS: list[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "plain"
    SENTRY_DSN: str | None = None

    @field_validator("DEFAULT_INVOICE_PREFIX", mode="before")
    @classmethod
    def normalise_prefix(cls, v):
        """Invoice prefixes are stored upper-case without a trailing dash."""
        if v is None:
            return v
        return str(v).strip().rstrip("-").upper()

    @model_validator(mode="after")
    def _validate_required_fields(self) -> BaseAppSettings:
        # Convert Heroku's postgres:// URL to postgresql://
        if self.DATABASE_URL and self.DATABASE_URL.startswith("postgres://"):
            self.DATABASE_URL = self.DATABASE_URL.replace("postgres://", "postgresql://", 1)

        if self.ENV.lower() == "prod":
            missing = [name for name in ("DATABASE_URL", "TRACKING_SECRET") if not getattr(self, name)]
            if missing:
                raise ValueError(f"Missing required production settings: {', '.join(missing)}")
            if self.TRACKING_SECRET == _DEFAULT_TRACKING_SECRET:
                raise ValueError("Insecure default secrets in production: TRACKING_SECRET uses default placeholder")
        return self


class DevSettings(BaseAppSettings):
    ENV: str = "dev"
    DATABASE_URL: str = "sqlite:///./storage/dev.db"


class TestSettings(BaseAppSettings):
    ENV: str = "test"
    DATABASE_URL: str = "sqlite:///:memory:"
    TRACKING_SECRET: str = "test-tracking-secret"


class ProdSettings(BaseAppSettings):
    ENV: str = "prod"
    CORS_ALLOW_ORIGINS: list[str] = []
    LOG_FORMAT: str = "json"


_ENV_TO_SETTINGS: dict[str, type[BaseAppSettings]] = {
    "dev": DevSettings,
    "development": DevSettings,
    "test": TestSettings,
    "testing": TestSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
}


@lru_cache
def get_settings() -> BaseAppSettings:
    env_name = os.getenv("APP_ENV") or os.getenv("ENV") or "dev"
    env = env_name.lower()
    settings_cls = _ENV_TO_SETTINGS.get(env, DevSettings)
    return settings_cls()


settings = get_settings()
