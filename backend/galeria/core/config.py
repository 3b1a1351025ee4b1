"""Application settings."""
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """App config from env (GALERIA_*)."""

    model_config = SettingsConfigDict(
        env_prefix="GALERIA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Galeria"
    host: str = "0.0.0.0"
    port: int = 3001
    # Structured logging: set GALERIA_LOG_JSON=1 for one-JSON-object-per-line
    log_json: bool = False
    log_level: str = "INFO"
    metrics_enabled: bool = True

    # CORS allowlist (comma-separated); "*" allows any origin
    cors_origins: str = "*"

    # Storage: created at startup beside the running service, absolute after validation
    storage_dir: Path = Field(default=Path("images"), validate_default=True)
    # Variant flag: accept PDF documents alongside images
    allow_pdf: bool = True
    max_upload_mb: int = 50  # 0 = no cap
    # Cap on the sanitized custom name (extension excluded); 0 = no cap
    max_name_length: int = 100
    # Also sanitize the original filename on the auto-naming path
    sanitize_auto_names: bool = False

    @field_validator("storage_dir")
    @classmethod
    def _absolute_storage_dir(cls, v: Path) -> Path:
        return Path(v).expanduser().resolve()

    @property
    def max_upload_bytes(self) -> int | None:
        return self.max_upload_mb * 1024 * 1024 if self.max_upload_mb > 0 else None

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
