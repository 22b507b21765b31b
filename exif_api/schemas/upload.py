from pydantic import BaseModel


class UploadedFile(BaseModel):
    """An accepted upload, persisted in the temporary store for one request."""
    original_name: str
    declared_mime_type: str
    size_bytes: int
    storage_path: str
