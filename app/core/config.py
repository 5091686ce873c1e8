"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY) are validated at
load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

REPORT_LOCALES = ("en", "tr")
TELEMETRY_EXPORTERS = ("console", "otlp", "none")


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except SECRET_KEY, and the S3
    bucket when the s3 storage backend is selected.
    """

    # App
    app_name: str = "taskboard"
    app_version: str = "1.0.0"
    debug: bool = False

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days
    bcrypt_rounds: int = 12
    # Registration with this token creates an admin; empty disables admin sign-up.
    admin_invite_token: SecretStr | None = None

    # Firebase / Firestore: use key (env, full JSON string) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None
    firestore_timeout_seconds: float = 30.0

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Storage (profile images)
    storage_backend: str = "local"
    storage_root: str = "./storage"
    storage_base_url: str | None = None
    s3_bucket: str | None = None
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    s3_access_key: str | None = None
    s3_secret_key: SecretStr | None = None
    max_upload_size: int = 10 * 1024 * 1024  # 10MB request body
    max_avatar_size: int = 5 * 1024 * 1024  # 5MB per image
    allowed_image_types: str = "image/jpeg,image/png,image/jpg"

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"
    correlation_id_header: str = "X-Correlation-ID"
    rate_limit_enabled: bool = True

    # Reports
    report_locale: str = "en"

    # Logging
    log_level: str = "INFO"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def allowed_origins_list(self) -> list[str]:
        return _split_csv(self.allowed_origins)

    @property
    def allowed_image_types_list(self) -> list[str]:
        return _split_csv(self.allowed_image_types)

    @property
    def firestore_configured(self) -> bool:
        has_key = (
            self.firebase_service_account_key is not None
            and bool(self.firebase_service_account_key.get_secret_value())
        )
        return has_key or bool(self.firebase_service_account_path)

    @model_validator(mode="after")
    def validate_required_and_storage(self) -> "Settings":
        """Validate required secrets, storage backend and enumerated options."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.storage_backend == "s3":
            if not self.s3_bucket:
                raise ValueError(
                    "s3_bucket is required when storage_backend is 's3'. "
                    "Set S3_BUCKET environment variable or update .env file."
                )
        elif self.storage_backend != "local":
            raise ValueError(
                f"Invalid storage_backend '{self.storage_backend}'. "
                "Must be one of: 'local', 's3'"
            )
        if self.report_locale not in REPORT_LOCALES:
            raise ValueError(
                f"report_locale must be one of {REPORT_LOCALES}, got: {self.report_locale!r}"
            )
        if self.telemetry_exporter not in TELEMETRY_EXPORTERS:
            raise ValueError(
                f"telemetry_exporter must be one of {TELEMETRY_EXPORTERS}, "
                f"got: {self.telemetry_exporter!r}"
            )
        if self.max_avatar_size > self.max_upload_size:
            raise ValueError("MAX_AVATAR_SIZE cannot exceed MAX_UPLOAD_SIZE")
        return self


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
