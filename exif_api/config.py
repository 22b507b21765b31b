"""
Central application configuration.

Every tunable value lives here as a typed, documented field.
Any field can be overridden at runtime via an environment variable of the
same name (case-insensitive), e.g.:

    PORT=8080 python -m exif_api.main          # listen elsewhere
    export MAX_UPLOAD_MB=10                     # tighter upload ceiling

A `.env` file at the project root is loaded automatically.
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,   # PORT == port
        extra="ignore",         # silently drop unknown env vars
    )

    # ------------------------------------------------------------------ #
    # Server                                                              #
    # ------------------------------------------------------------------ #
    host: str = Field(
        "0.0.0.0", description="Interface uvicorn binds to"
    )
    port: int = Field(
        3000, description="Listening port"
    )
    log_level: str = Field(
        "INFO", description="Root logging level"
    )

    # ------------------------------------------------------------------ #
    # Upload intake                                                       #
    # ------------------------------------------------------------------ #
    uploads_dir: str = Field(
        "uploads", description="Directory for in-flight uploads (created at startup)"
    )
    max_upload_mb: int = Field(
        50, description="Max MB for a single multipart image upload"
    )
    allowed_mime_types: List[str] = Field(
        ["image/jpeg", "image/jpg"],
        description="Declared Content-Type prefixes accepted for upload",
    )
    upload_chunk_size_kb: int = Field(
        1024, description="Chunk size (KB) when streaming an upload to disk"
    )

    # ------------------------------------------------------------------ #
    # ExifTool                                                            #
    # ------------------------------------------------------------------ #
    exiftool_executable: Optional[str] = Field(
        None, description="Path to the exiftool binary (None → resolve from PATH)"
    )

    # ------------------------------------------------------------------ #
    # Derived byte-level properties (computed from MB/KB fields)          #
    # ------------------------------------------------------------------ #
    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @property
    def upload_chunk_size_bytes(self) -> int:
        return self.upload_chunk_size_kb * 1024


# Single shared instance — import this everywhere.
settings = Settings()
