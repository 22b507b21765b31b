"""
Temporary store for in-flight uploads.

Every upload gets its own randomly named file under `settings.uploads_dir`,
so concurrent requests never share a path. Deletion is best-effort: failures
are logged, never raised, because by the time a file is released the
response is already decided.
"""

import logging
import os
import uuid

from exif_api.config import settings

logger = logging.getLogger(__name__)


def ensure_uploads_dir() -> str:
    """Create the uploads directory if it does not exist and return its path."""
    os.makedirs(settings.uploads_dir, exist_ok=True)
    return settings.uploads_dir


def new_storage_path() -> str:
    return os.path.join(settings.uploads_dir, uuid.uuid4().hex)


def remove_upload(path: str) -> bool:
    """Delete a stored upload. Returns True if the file was removed."""
    try:
        os.remove(path)
    except OSError as e:
        logger.error(f"[CLEANUP] Error deleting temporary file {path}: {e}")
        return False
    logger.info(f"[CLEANUP] Successfully deleted temporary file: {path}")
    return True
