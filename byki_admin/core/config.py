"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (SECRET_KEY) are validated at load time.
"""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Firebase credentials are optional: without them the app starts, health
    checks pass, and every data route answers 503.
    """

    # App
    app_name: str = "byki-admin"
    app_version: str = "1.0.0"
    debug: bool = False

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Firebase / Firestore: use key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None
    # Identity Toolkit key used for email/password sign-in.
    firebase_web_api_key: SecretStr | None = None
    # Cloud Storage bucket for product images (e.g. "oxhub.firebasestorage.app").
    firebase_storage_bucket: str | None = None

    # Calendar boundaries ("today", "this month") are computed in this zone.
    business_timezone: str = "Asia/Kuala_Lumpur"

    # Live queries
    realtime_poll_interval_seconds: float = 2.0
    emergency_alert_sound_url: str = "/sounds/emergency-alert.mp3"

    # Catalog / listing
    low_stock_threshold: int = 10
    default_page_size: int = 50

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env and value ranges."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        try:
            ZoneInfo(self.business_timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(
                f"BUSINESS_TIMEZONE is not a known IANA zone: {self.business_timezone!r}"
            ) from e
        if self.realtime_poll_interval_seconds <= 0:
            raise ValueError("REALTIME_POLL_INTERVAL_SECONDS must be positive")
        return self

    @property
    def tz(self) -> ZoneInfo:
        """Business timezone as a tzinfo."""
        return ZoneInfo(self.business_timezone)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
