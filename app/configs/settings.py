"""Application settings and configuration constants.

This module contains application settings, constants, and configuration
values for the Himatikom blog backend. A single `Settings` instance is
built at startup and handed to each component.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

DEFAULT_SECRET_KEY = "dev-secret-change-me"  # noqa: S105

# --- Constants ---
RECENT_BLOGS_LIMIT = 3
LOGIN_RATE_LIMIT = "5/minute"
ALLOWED_IMAGE_TYPES = ["image/jpeg", "image/png", "image/webp", "image/gif"]

# Response constants
DEFAULT_ERROR_MESSAGE = "An unexpected server error occurred."


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Himatikom Blog Backend"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE: str = "logs/app.log"
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    FRONTEND_URL: str | None = None

    # Session token
    SECRET_KEY: SecretStr = SecretStr(DEFAULT_SECRET_KEY)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    COOKIE_NAME: str = "token"

    # Document store
    DOCUMENT_STORE: Literal["local", "jsonbin"] = "local"
    DATA_FILE: Path = Path("data/blog.json")
    JSONBIN_BIN_ID: str | None = None
    JSONBIN_MASTER_KEY: SecretStr = SecretStr("")
    JSONBIN_BASE_URL: str = "https://api.jsonbin.io/v3"

    # Image storage
    STORAGE_PROVIDER: Literal["local", "cloudinary"] = "local"
    UPLOADS_DIR: Path = Path("public/uploads")
    UPLOADS_URL_PREFIX: str = "/uploads"
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: SecretStr = SecretStr("")
    CLOUDINARY_FOLDER: str = "blog"
    MAX_IMAGE_SIZE_MB: int = 5

    @model_validator(mode="after")
    def check_production_secrets(self) -> "Settings":
        """Refuse to run in production with the development signing key."""
        if (
            self.ENVIRONMENT == "production"
            and self.SECRET_KEY.get_secret_value() == DEFAULT_SECRET_KEY
        ):
            mssg = "SECRET_KEY must be set in production"
            raise ValueError(mssg)
        if self.DOCUMENT_STORE == "jsonbin" and not self.JSONBIN_MASTER_KEY.get_secret_value():
            mssg = "JSONBIN_MASTER_KEY is required when DOCUMENT_STORE=jsonbin"
            raise ValueError(mssg)
        return self

    @property
    def max_image_size_bytes(self) -> int:
        return self.MAX_IMAGE_SIZE_MB * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return Settings()
