"""
Client-visible error kinds.

Each kind carries the HTTP status and the user-facing message it maps to.
The handlers in exif_api/main.py turn them into `{"error": ..., "details": ...}`
bodies. Maker-notes failures are deliberately absent from this list: they are
reported as data, never as an error.
"""

from typing import Optional


class UploadError(Exception):
    """Base class for errors that translate directly into an HTTP response."""

    status_code: int = 500
    message: str = "An unexpected error occurred."

    def __init__(self, message: Optional[str] = None, details: Optional[str] = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class NoFileProvided(UploadError):
    status_code = 400
    message = "No file uploaded."


class UnsupportedMediaType(UploadError):
    status_code = 400
    message = "Only JPEG files are allowed!"


class PayloadTooLarge(UploadError):
    status_code = 400

    def __init__(self, limit_mb: int):
        super().__init__(f"File too large. Maximum size is {limit_mb}MB.")
        self.limit_mb = limit_mb


class ExtractionFailed(UploadError):
    status_code = 500
    message = "Error processing image"

    def __init__(self, details: str):
        super().__init__(details=details)
