"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match the field app behavior (poll cadence, storage keys)

Collaborators:
  - container.py: reads settings to pick the session store and timer cadence
  - crosscutting/logger.py: reads log_level / log_json
  - application/usecases/auth/session_holder.py: token size and default messages

Constraints:
  - No business logic, configuration only

Notes:
  - Uses pydantic-settings for env parsing and validation
  - Singleton via lru_cache for performance
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SESSION_STORE_BACKENDS = {"memory", "file", "redis"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/test/production)
        log_level: Root level for the structured logger (default: INFO)
        log_json: Emit JSON log lines (default: True)
        session_store_backend: memory|file|redis (default: file)
        session_store_path: JSON file used by the file backend
        redis_url: Redis connection string (required for the redis backend)
        session_user_key: Storage key for the user snapshot
        session_token_key: Storage key for the opaque session token
        session_token_bytes: Entropy of generated session tokens
        validity_poll_interval_seconds: Validity Poller cadence (default: 30)
        activity_stamp_interval_seconds: Activity Stamper cadence (default: 60)
        simulated_latency_seconds: Artificial delay applied to login calls
        default_deactivation_message: Reason shown when none was recorded
        seed_demo_users: Load the bundled demo users into the Directory
    """

    # Environment
    app_env: str = "development"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Session persistence
    session_store_backend: str = "file"
    session_store_path: str = ".fieldforce/session.json"
    redis_url: str = ""
    session_user_key: str = "pharma_user"
    session_token_key: str = "pharma_session_token"
    session_token_bytes: int = 24

    # Session watch timers
    validity_poll_interval_seconds: float = 30.0
    activity_stamp_interval_seconds: float = 60.0

    # Mock transport
    simulated_latency_seconds: float = 0.8

    # Messages
    default_deactivation_message: str = "Your account has been deactivated"

    # Seed data
    seed_demo_users: bool = True

    @field_validator(
        "validity_poll_interval_seconds", "activity_stamp_interval_seconds"
    )
    @classmethod
    def interval_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timer intervals must be greater than 0")
        return v

    @field_validator("simulated_latency_seconds")
    @classmethod
    def latency_must_be_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("simulated_latency_seconds must be >= 0")
        return v

    @field_validator("session_token_bytes")
    @classmethod
    def token_bytes_minimum(cls, v: int) -> int:
        if v < 8:
            raise ValueError("session_token_bytes must be at least 8")
        return v

    @field_validator("session_store_backend")
    @classmethod
    def session_store_backend_valid(cls, v: str) -> str:
        backend = (v or "file").strip().lower()
        if backend not in SESSION_STORE_BACKENDS:
            raise ValueError("session_store_backend must be memory, file, or redis")
        return backend

    @model_validator(mode="after")
    def validate_store_requirements(self):
        if self.session_store_backend == "redis" and not self.redis_url.strip():
            raise ValueError("REDIS_URL is required when SESSION_STORE_BACKEND=redis")
        if self.session_user_key == self.session_token_key:
            raise ValueError("session_user_key and session_token_key must differ")
        return self

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in {"test", "testing", "ci"}

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
