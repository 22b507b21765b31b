from exif_api.schemas.upload import UploadedFile
from exif_api.schemas.metadata import (
    NO_MAKERNOTES,
    BasicInfo,
    ErrorResponse,
    FileInfo,
    FullMetadataResponse,
    MetadataResult,
    ReadableMetadataResponse,
)

__all__ = [
    "UploadedFile",
    "NO_MAKERNOTES",
    "BasicInfo",
    "ErrorResponse",
    "FileInfo",
    "FullMetadataResponse",
    "MetadataResult",
    "ReadableMetadataResponse",
]
