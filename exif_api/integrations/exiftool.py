"""
ExifTool integration (wraps pyexiftool's ExifToolHelper).

One `exiftool -stay_open` process serves the whole application. It is
started lazily on the first extraction and terminated by `close()`, which
the FastAPI lifespan calls on shutdown. A single process reads one command
at a time from its pipe, so calls are serialized by a lock; callers run them
through the threadpool.

Two extraction calls with different failure contracts:

    extract_full(path)         -> MetadataResult, raises ExtractionFailed
    extract_maker_notes(path)  -> MetadataResult | None, never raises
"""

import logging
import threading
from dataclasses import dataclass
from typing import List, Optional

from exiftool import ExifToolHelper
from exiftool.exceptions import ExifToolException

from exif_api.core.errors import ExtractionFailed
from exif_api.schemas.metadata import MetadataResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionOptions:
    """Ordered ExifTool directives for one call."""
    tags: str = "-all"                        # scope, e.g. "-makernotes:all"
    short_names: bool = True                  # -s: tag names, not descriptions
    group_names: bool = True                  # -G: "EXIF:Make" style keys
    structured: bool = True                   # -struct: nested composite tags
    filename_charset: Optional[str] = "utf8"  # -charset filename=...
    large_file_support: bool = True           # -api largefilesupport=1

    def as_params(self) -> List[str]:
        params = [self.tags]
        if self.short_names:
            params.append("-s")
        if self.group_names:
            params.append("-G")
        if self.structured:
            params.append("-struct")
        if self.filename_charset:
            params += ["-charset", f"filename={self.filename_charset}"]
        if self.large_file_support:
            params += ["-api", "largefilesupport=1"]
        return params


FULL_OPTIONS = ExtractionOptions()
MAKERNOTES_OPTIONS = ExtractionOptions(
    tags="-makernotes:all",
    structured=False,
    filename_charset=None,
    large_file_support=False,
)
READABLE_OPTIONS = ExtractionOptions(short_names=False, large_file_support=False)


def _error_details(exc: Exception) -> str:
    stderr = getattr(exc, "stderr", None)
    if isinstance(stderr, bytes):
        stderr = stderr.decode("utf-8", errors="replace")
    if stderr and stderr.strip():
        return stderr.strip()
    return str(exc)


class ExifToolExtractor:
    """Process-wide ExifTool handle. Create once, `close()` on shutdown."""

    def __init__(self, executable: Optional[str] = None):
        self._executable = executable
        self._helper: Optional[ExifToolHelper] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._helper is not None and self._helper.running

    def _get_helper(self) -> ExifToolHelper:
        # The helper auto-starts the process on its first execute.
        if self._helper is None:
            kwargs = {"common_args": []}
            if self._executable:
                kwargs["executable"] = self._executable
            self._helper = ExifToolHelper(**kwargs)
            logger.info("[EXIFTOOL] Helper created (process starts on first use)")
        return self._helper

    def _read(self, path: str, options: ExtractionOptions) -> MetadataResult:
        with self._lock:
            records = self._get_helper().execute_json(*options.as_params(), path)
        record = dict(records[0]) if records else {}
        record.pop("SourceFile", None)
        return record

    def extract_full(self, path: str, options: ExtractionOptions = FULL_OPTIONS) -> MetadataResult:
        try:
            tags = self._read(path, options)
        except (ExifToolException, OSError, ValueError) as e:
            logger.error(f"[EXIFTOOL] Extraction failed for {path}: {e}")
            raise ExtractionFailed(_error_details(e)) from e
        logger.info(f"[EXIFTOOL] Number of tags extracted: {len(tags)}")
        return tags

    def extract_maker_notes(self, path: str) -> Optional[MetadataResult]:
        try:
            tags = self._read(path, MAKERNOTES_OPTIONS)
        except Exception as e:
            logger.debug(f"[EXIFTOOL] Maker notes not readable for {path}: {e}")
            return None
        if not tags:
            logger.debug(f"[EXIFTOOL] No maker notes in {path}")
            return None
        return tags

    def close(self) -> None:
        with self._lock:
            if self._helper is not None and self._helper.running:
                self._helper.terminate()
                logger.info("[SHUTDOWN] ExifTool process terminated")
            self._helper = None
