"""
Pure unit tests for exif_api/core/file_validator.py and exif_api/core/cleanup.py.

Uploads are built in memory as Starlette UploadFile objects; the temporary
store points at tmp_path via the `uploads_dir` fixture.
"""

import asyncio
import io
import os

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from exif_api.config import settings
from exif_api.core.cleanup import upload_scope
from exif_api.core.errors import PayloadTooLarge, UnsupportedMediaType
from exif_api.core.file_validator import accept_upload, is_allowed_mime_type
from tests.conftest import make_tiny_jpeg, stored_files


def _upload(data: bytes, filename="photo.jpg", mime="image/jpeg") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": mime}),
    )


@pytest.fixture
def store(uploads_dir):
    uploads_dir.mkdir(parents=True, exist_ok=True)
    return uploads_dir


# ---------------------------------------------------------------------------
# MIME allow-list
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("mime", ["image/jpeg", "image/jpg", "IMAGE/JPEG", "image/jpeg; charset=binary"])
def test_jpeg_variants_allowed(mime):
    assert is_allowed_mime_type(mime) is True


@pytest.mark.parametrize("mime", ["image/png", "application/octet-stream", "text/plain", "", None])
def test_other_types_rejected(mime):
    assert is_allowed_mime_type(mime) is False


# ---------------------------------------------------------------------------
# accept_upload
# ---------------------------------------------------------------------------


async def test_accept_upload_persists_file(store):
    data = make_tiny_jpeg()
    stored = await accept_upload(_upload(data))

    assert stored.original_name == "photo.jpg"
    assert stored.declared_mime_type == "image/jpeg"
    assert stored.size_bytes == len(data)
    assert os.path.dirname(stored.storage_path) == settings.uploads_dir
    with open(stored.storage_path, "rb") as f:
        assert f.read() == data


async def test_accept_upload_rejects_type_before_writing(store):
    with pytest.raises(UnsupportedMediaType) as exc:
        await accept_upload(_upload(b"\x89PNG....", filename="x.png", mime="image/png"))

    assert exc.value.status_code == 400
    assert exc.value.message == "Only JPEG files are allowed!"
    assert stored_files(store) == []


async def test_accept_upload_oversize_removes_partial_file(store, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_mb", 1)
    monkeypatch.setattr(settings, "upload_chunk_size_kb", 256)

    with pytest.raises(PayloadTooLarge) as exc:
        await accept_upload(_upload(b"\xff" * (1024 * 1024 + 10)))

    assert exc.value.status_code == 400
    assert exc.value.message == "File too large. Maximum size is 1MB."
    assert stored_files(store) == []


async def test_accept_upload_gives_unique_paths(store):
    first = await accept_upload(_upload(make_tiny_jpeg()))
    second = await accept_upload(_upload(make_tiny_jpeg()))
    assert first.storage_path != second.storage_path


# ---------------------------------------------------------------------------
# upload_scope
# ---------------------------------------------------------------------------


async def test_upload_scope_releases_on_success(store):
    async with upload_scope(_upload(make_tiny_jpeg())) as stored:
        assert os.path.exists(stored.storage_path)
    assert not os.path.exists(stored.storage_path)


async def test_upload_scope_releases_on_error(store):
    with pytest.raises(RuntimeError):
        async with upload_scope(_upload(make_tiny_jpeg())) as stored:
            raise RuntimeError("extraction blew up")
    assert not os.path.exists(stored.storage_path)
    assert stored_files(store) == []


async def test_upload_scope_propagates_intake_rejection(store):
    with pytest.raises(UnsupportedMediaType):
        async with upload_scope(_upload(b"GIF89a", mime="image/gif")):
            pytest.fail("scope body must not run for a rejected upload")
    assert stored_files(store) == []


async def test_upload_scope_releases_on_cancellation(store):
    entered = asyncio.Event()
    seen = {}

    async def handler():
        async with upload_scope(_upload(make_tiny_jpeg())) as stored:
            seen["path"] = stored.storage_path
            entered.set()
            await asyncio.sleep(60)

    task = asyncio.create_task(handler())
    await entered.wait()
    assert os.path.exists(seen["path"])

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert not os.path.exists(seen["path"])
    assert stored_files(store) == []
