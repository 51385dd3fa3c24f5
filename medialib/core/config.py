"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Cross-field rules (delay range, error rate) are
validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Every setting has a default so the service starts with no environment;
    validate_ranges rejects inconsistent fault-injection values.
    """

    # App
    app_name: str = "medialib"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # Data model
    folder_path_separator: str = "/"
    default_page_size: int = 20
    max_page_size: int = 500
    recent_items_capacity: int = 10
    current_user_id: str = "current"

    # Fault injection / artificial latency (applied before each API operation)
    mock_enabled: bool = True
    mock_error_rate: float = 0.0
    mock_delay_min_ms: int = 200
    mock_delay_max_ms: int = 800
    # Fixed delay overrides min/max when set; 0 disables latency entirely.
    mock_delay_fixed_ms: int | None = None

    # Login (fixed demo credential pair; not enforced on data endpoints)
    demo_user_email: str = "jamie.smith@example.com"
    demo_user_password: SecretStr = SecretStr("password")
    secret_key: SecretStr = SecretStr("medialib-dev-secret-change-me")
    algorithm: str = "HS256"
    access_token_expire_seconds: int = 86400  # 24 hours

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_ranges(self) -> "Settings":
        """Validate fault-injection and paging settings.

        - mock_error_rate must be within [0, 1].
        - mock_delay_min_ms <= mock_delay_max_ms, both non-negative.
        - default_page_size within [1, max_page_size].
        """
        if not 0.0 <= self.mock_error_rate <= 1.0:
            raise ValueError(
                f"mock_error_rate must be between 0 and 1, got: {self.mock_error_rate!r}"
            )
        if self.mock_delay_min_ms < 0 or self.mock_delay_max_ms < 0:
            raise ValueError("mock delay bounds must be non-negative")
        if self.mock_delay_min_ms > self.mock_delay_max_ms:
            raise ValueError(
                "mock_delay_min_ms must not exceed mock_delay_max_ms "
                f"({self.mock_delay_min_ms} > {self.mock_delay_max_ms})"
            )
        if self.mock_delay_fixed_ms is not None and self.mock_delay_fixed_ms < 0:
            raise ValueError("mock_delay_fixed_ms must be non-negative")
        if not 1 <= self.default_page_size <= self.max_page_size:
            raise ValueError(
                f"default_page_size must be between 1 and {self.max_page_size}"
            )
        if not self.folder_path_separator:
            raise ValueError("folder_path_separator must be a non-empty string")
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
