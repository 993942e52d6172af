"""
Environment-driven configuration for the stock opname service.

Each group reads its own prefix (``STORAGE_``, ``API_``, ``AUTH_``,
``LIFECYCLE_``, ``LOG_``). Top-level fields come from the plain environment
or a ``.env`` file next to the process.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Where the SQLite database lives and how connections to it behave."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "stock_opname.db"
    pool_size: int = Field(default=5, ge=1)
    busy_timeout: int = Field(default=30000, ge=0, description="milliseconds")
    backup_on_migrate: bool = True

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class APISettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 2022
    debug: bool = False
    cors_origins: list[str] = ["*"]


class AuthSettings(BaseSettings):
    """Password policy and bcrypt cost."""

    model_config = SettingsConfigDict(env_prefix="AUTH_")

    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    min_password_length: int = Field(default=6, ge=1)


class LifecycleSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LIFECYCLE_")

    # completed_at is also stamped on cancel when the patch omits it
    stamp_on_cancel: bool = True


class LogSettings(BaseSettings):
    """Log level, renderer choice and the event keys that never reach output."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    # None picks console output in development and JSON elsewhere
    json_output: bool | None = None
    redact_keys: list[str] = ["password", "password_hash", "signature_data"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Stock Opname Service"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"

    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    lifecycle: LifecycleSettings = Field(default_factory=LifecycleSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    @model_validator(mode="after")
    def _create_data_dir(self) -> "Settings":
        self.storage.data_dir.mkdir(parents=True, exist_ok=True)
        return self

    @property
    def renders_json(self) -> bool:
        if self.log.json_output is not None:
            return self.log.json_output
        return self.environment != "development"


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
