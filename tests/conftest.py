"""
Shared pytest fixtures for all test modules.

The ExifTool process is never started: routes receive a MockExtractor via
`app.dependency_overrides`, and the uploads directory points at tmp_path.
"""

import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from exif_api.config import settings
from exif_api.core.dependencies import get_extractor
from exif_api.main import app
from tests.mocks.exiftool_mock import MockExtractor


# ---------------------------------------------------------------------------
# Core infrastructure fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def uploads_dir(tmp_path, monkeypatch):
    """Point the temporary store at a per-test directory."""
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "uploads_dir", str(path))
    return path


@pytest.fixture
def fake_extractor():
    return MockExtractor()


@pytest.fixture
def client(uploads_dir, fake_extractor):
    """
    FastAPI TestClient with the extractor dependency replaced.

    The lifespan still runs, so the uploads directory is created the same way
    it is in production.
    """
    app.dependency_overrides[get_extractor] = lambda: fake_extractor
    try:
        with TestClient(app, raise_server_exceptions=False) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Shared test-data helpers
# ---------------------------------------------------------------------------


def make_tiny_jpeg() -> bytes:
    """Create a minimal 10×10 JPEG in memory — fast and valid."""
    buf = io.BytesIO()
    Image.new("RGB", (10, 10), color=(128, 128, 128)).save(buf, format="JPEG")
    return buf.getvalue()


def make_tiny_png() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (10, 10), color=(0, 128, 255)).save(buf, format="PNG")
    return buf.getvalue()


def make_jpeg_of_size(size: int) -> bytes:
    """A real JPEG padded with trailing bytes up to exactly `size` bytes."""
    data = make_tiny_jpeg()
    return data + b"\x00" * (size - len(data))


def stored_files(uploads_dir) -> list:
    return list(uploads_dir.iterdir()) if uploads_dir.exists() else []
