from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Tag identifier (optionally group-qualified, e.g. "EXIF:Make") → value
MetadataResult = Dict[str, Any]

NO_MAKERNOTES = "No makernotes found or not readable"


class _CamelModel(BaseModel):
    # Wire names are camelCase; Python code builds them by field name.
    model_config = ConfigDict(populate_by_name=True)


class BasicInfo(_CamelModel):
    filename: str
    filesize: int
    mimetype: str
    processed_at: str = Field(alias="processedAt")  # ISO-8601, UTC


class FullMetadataResponse(_CamelModel):
    basic_info: BasicInfo = Field(alias="basicInfo")
    metadata: MetadataResult
    makernotes: Union[MetadataResult, str]  # mapping, or NO_MAKERNOTES


class FileInfo(_CamelModel):
    original_filename: str = Field(alias="originalFilename")
    file_size: str = Field(alias="fileSize")      # e.g. "2.00 MB"
    mime_type: str = Field(alias="mimeType")
    processed_at: str = Field(alias="processedAt")  # locale-formatted, local time


class ReadableMetadataResponse(_CamelModel):
    file_info: FileInfo = Field(alias="fileInfo")
    metadata: MetadataResult


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
