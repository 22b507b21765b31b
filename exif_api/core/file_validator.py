"""
Upload intake: MIME allow-list and size ceiling.

Only the client-declared Content-Type is checked; there is no content
sniffing. The allow-list keeps obviously wrong uploads away from ExifTool,
it is not a security boundary.
"""

import logging

from fastapi import UploadFile

from exif_api.config import settings
from exif_api.core import upload_store
from exif_api.core.errors import PayloadTooLarge, UnsupportedMediaType
from exif_api.schemas.upload import UploadedFile

logger = logging.getLogger(__name__)


def is_allowed_mime_type(mime_type: str) -> bool:
    """Prefix match, so parameters such as "image/jpeg; q=1" still pass."""
    mime_type = (mime_type or "").strip().lower()
    return any(mime_type.startswith(allowed) for allowed in settings.allowed_mime_types)


async def accept_upload(upload: UploadFile) -> UploadedFile:
    """
    Validate `upload` and stream it into the temporary store.

    Raises UnsupportedMediaType before anything touches disk, and
    PayloadTooLarge as soon as the running size passes the ceiling (the
    partial file is removed first).
    """
    declared_type = upload.content_type or ""
    if not is_allowed_mime_type(declared_type):
        logger.info(f"[INTAKE] Rejected {upload.filename!r}: declared type {declared_type!r}")
        raise UnsupportedMediaType()

    storage_path = upload_store.new_storage_path()
    size = 0
    try:
        with open(storage_path, "wb") as out:
            while True:
                chunk = await upload.read(settings.upload_chunk_size_bytes)
                if not chunk:
                    break
                size += len(chunk)
                if size > settings.max_upload_bytes:
                    logger.info(
                        f"[INTAKE] Rejected {upload.filename!r}: exceeds {settings.max_upload_mb}MB"
                    )
                    raise PayloadTooLarge(settings.max_upload_mb)
                out.write(chunk)
    except BaseException:
        upload_store.remove_upload(storage_path)
        raise

    return UploadedFile(
        original_name=upload.filename or "",
        declared_mime_type=declared_type,
        size_bytes=size,
        storage_path=storage_path,
    )
