"""EXIF upload service: upload a JPEG, get its metadata back as JSON."""

__version__ = "1.0.0"
