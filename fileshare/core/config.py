# fileshare/core/config.py
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite:///./fileshare.db"

    # Tokens
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    token_expire_minutes: int | None = None  # no expiry unless configured

    # werkzeug hash method, e.g. "scrypt:32768:8:1" or "pbkdf2:sha256:600000"
    password_hash_method: str = "scrypt:32768:8:1"

    # Blob storage
    storage_backend: Literal["local", "s3"] = "local"
    storage_dir: str = "uploads"
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    aws_region: str | None = None
    aws_s3_bucket_name: str | None = None

    cors_origins: list[str] = ["http://localhost:3000"]
    port: int = 5000
    log_level: str = "INFO"

    # Tell pydantic-settings to load from .env at project root
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # ignore any extra stuff in .env
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
