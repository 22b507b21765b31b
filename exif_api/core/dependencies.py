"""
Request-scoped access to process-wide collaborators.

The ExifTool handle is created by the lifespan and stored on `app.state`;
routes receive it through `Depends(get_extractor)` so tests can swap it with
`app.dependency_overrides`.
"""

from fastapi import Request

from exif_api.integrations.exiftool import ExifToolExtractor


def get_extractor(request: Request) -> ExifToolExtractor:
    return request.app.state.extractor
