"""
Response assembly for the two upload endpoints.

Pure functions: they only combine what they are given. `processed_at`
defaults to the current time so routes need not pass it; tests do.
"""

from datetime import datetime, timezone
from typing import Optional

from exif_api.schemas.metadata import (
    NO_MAKERNOTES,
    BasicInfo,
    FileInfo,
    FullMetadataResponse,
    MetadataResult,
    ReadableMetadataResponse,
)
from exif_api.schemas.upload import UploadedFile


def format_file_size(size_bytes: int) -> str:
    return f"{size_bytes / 1024 / 1024:.2f} MB"


def iso_timestamp(dt: datetime) -> str:
    """UTC ISO-8601 with milliseconds and a trailing Z."""
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def readable_timestamp(dt: datetime) -> str:
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    return dt.strftime("%c")


def build_full(
    file: UploadedFile,
    metadata: MetadataResult,
    makernotes: Optional[MetadataResult],
    processed_at: Optional[datetime] = None,
) -> FullMetadataResponse:
    processed_at = processed_at or datetime.now(timezone.utc)
    return FullMetadataResponse(
        basic_info=BasicInfo(
            filename=file.original_name,
            filesize=file.size_bytes,
            mimetype=file.declared_mime_type,
            processed_at=iso_timestamp(processed_at),
        ),
        metadata=metadata,
        makernotes=makernotes if makernotes is not None else NO_MAKERNOTES,
    )


def build_readable(
    file: UploadedFile,
    metadata: MetadataResult,
    processed_at: Optional[datetime] = None,
) -> ReadableMetadataResponse:
    processed_at = processed_at or datetime.now()
    return ReadableMetadataResponse(
        file_info=FileInfo(
            original_filename=file.original_name,
            file_size=format_file_size(file.size_bytes),
            mime_type=file.declared_mime_type,
            processed_at=readable_timestamp(processed_at),
        ),
        metadata=metadata,
    )
