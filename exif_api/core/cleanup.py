"""
Scoped ownership of a stored upload.

The stored file lives exactly as long as the `upload_scope` block. Responses
are built from in-memory metadata, so removing the file when the handler
exits can never race with sending the body.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import UploadFile

from exif_api.core import upload_store
from exif_api.core.file_validator import accept_upload
from exif_api.schemas.upload import UploadedFile

logger = logging.getLogger(__name__)


def release_upload(stored: UploadedFile) -> None:
    upload_store.remove_upload(stored.storage_path)


@asynccontextmanager
async def upload_scope(upload: UploadFile) -> AsyncIterator[UploadedFile]:
    """
    Accept `upload` into the temporary store and release it on exit.

    Release happens on success, on error and on cancellation (client gone
    mid-extraction). If intake itself fails, nothing is yielded and intake
    has already removed any partial file.
    """
    stored = await accept_upload(upload)
    logger.info(
        f"[UPLOAD] File stored: name={stored.original_name!r} "
        f"type={stored.declared_mime_type} size={stored.size_bytes} path={stored.storage_path}"
    )
    try:
        yield stored
    finally:
        release_upload(stored)
