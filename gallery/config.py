# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Application configuration.

Every value can be overridden with an ``RD_SIMPLE_GALLERY_*`` environment
variable (or an entry in ``.env``).
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the gallery service."""

    model_config = SettingsConfigDict(
        env_prefix="RD_SIMPLE_GALLERY_",
        env_file=".env",
        extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 3456

    # Storage
    data_dir: Path = Path("data")

    # Admin
    password: str = "changeme"
    session_max_age_seconds: int = 24 * 60 * 60

    # Pagination
    default_page_limit: int = 24
    max_page_limit: int = 100

    # Upload
    max_upload_files: int = 50
    max_file_size_bytes: int = 50 * 1024 * 1024
    allowed_mime_types: list[str] = Field(
        default=["image/jpeg", "image/png", "image/webp", "image/gif"]
    )
    default_image_ext: str = ".jpg"

    # Image processing
    default_max_resolution: int = 1920
    max_resolution_min: int = 100
    max_resolution_max: int = 10000
    jpeg_quality: int = 85
    webp_quality: int = 85

    # EXIF
    gps_coord_decimals: int = 6

    # Tokens and generated filenames
    token_bytes: int = 24
    filename_random_bytes: int = 16

    log_level: str = "INFO"


settings = Settings()
