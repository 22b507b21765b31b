"""
Upload routes: /upload and /upload-readable

Both accept multipart/form-data with a single `image` field (JPEG only).
The stored file is released when the handler exits, whatever the outcome.
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.concurrency import run_in_threadpool

from exif_api.core.cleanup import upload_scope
from exif_api.core.dependencies import get_extractor
from exif_api.core.errors import NoFileProvided
from exif_api.integrations.exiftool import READABLE_OPTIONS, ExifToolExtractor
from exif_api.schemas.metadata import (
    ErrorResponse,
    FullMetadataResponse,
    ReadableMetadataResponse,
)
from exif_api.services.metadata_service import build_full, build_readable

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Upload"])

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@router.post("/upload", response_model=FullMetadataResponse, responses=ERROR_RESPONSES)
async def upload(
    image: Optional[UploadFile] = File(None),
    extractor: ExifToolExtractor = Depends(get_extractor),
):
    """
    Extract every tag plus a separate maker-notes pass.

    A missing or unreadable maker-notes section is reported as a placeholder
    string in `makernotes`, never as an error.
    """
    logger.info("[UPLOAD] Received a file upload request.")
    if image is None:
        logger.info("[UPLOAD] No file was uploaded.")
        raise NoFileProvided()

    async with upload_scope(image) as stored:
        logger.info(f"[UPLOAD] Processing file: {stored.storage_path}")
        metadata, makernotes = await asyncio.gather(
            run_in_threadpool(extractor.extract_full, stored.storage_path),
            run_in_threadpool(extractor.extract_maker_notes, stored.storage_path),
        )
        result = build_full(stored, metadata, makernotes)

    logger.info(f"[UPLOAD] Successfully extracted EXIF data for {stored.original_name!r}")
    return result


@router.post("/upload-readable", response_model=ReadableMetadataResponse, responses=ERROR_RESPONSES)
async def upload_readable(
    image: Optional[UploadFile] = File(None),
    extractor: ExifToolExtractor = Depends(get_extractor),
):
    """Extract tags once, with human-readable values and a formatted file block."""
    logger.info("[UPLOAD] Received a file upload request for readable format.")
    if image is None:
        logger.info("[UPLOAD] No file was uploaded.")
        raise NoFileProvided()

    async with upload_scope(image) as stored:
        logger.info(f"[UPLOAD] Processing file for readable format: {stored.storage_path}")
        metadata = await run_in_threadpool(
            extractor.extract_full, stored.storage_path, READABLE_OPTIONS
        )
        result = build_readable(stored, metadata)

    logger.info(f"[UPLOAD] Successfully extracted readable EXIF data for {stored.original_name!r}")
    return result
