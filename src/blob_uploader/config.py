"""Configuration for the blob uploader."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from environment."""

    upload_base_url: str = "/blobs"
    default_agent: str = ""
    filename_header: str = "X-File-Name"
    location_origin: str | None = None

    connect_timeout: float = 10.0
    read_timeout: float = 60.0
    write_timeout: float = 60.0
    pool_timeout: float = 10.0

    model_config = SettingsConfigDict(env_prefix="BLOB_UPLOADER_", env_file=".env")
