import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load environment variables at the very beginning
load_dotenv()

from exif_api.api import system, upload  # noqa: E402
from exif_api.config import settings  # noqa: E402
from exif_api.core.errors import NoFileProvided, UploadError  # noqa: E402
from exif_api.core.upload_store import ensure_uploads_dir  # noqa: E402
from exif_api.integrations.exiftool import ExifToolExtractor  # noqa: E402

# Set up logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    uploads_dir = ensure_uploads_dir()
    logger.info(f"[STARTUP] Uploads directory ready: {uploads_dir}")

    app.state.extractor = ExifToolExtractor(settings.exiftool_executable)
    logger.info("[STARTUP] ExifTool extractor initialized")

    yield

    logger.info("[SHUTDOWN] Closing exiftool...")
    app.state.extractor.close()


app = FastAPI(title="EXIF Metadata Extraction API", lifespan=lifespan)


@app.exception_handler(UploadError)
async def upload_error_handler(request: Request, exc: UploadError):
    logger.info(f"[ERROR HANDLER] Returning {exc.status_code} to client: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # A non-file `image` part is the only body field that can fail validation.
    if any(tuple(err.get("loc", ()))[:2] == ("body", "image") for err in exc.errors()):
        logger.info(f"[ERROR HANDLER] Non-file image part on {request.url.path}")
        return JSONResponse(status_code=400, content=NoFileProvided().to_dict())
    logger.error(f"[ERROR HANDLER] Request validation failed on {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=500, content={"error": "An unexpected error occurred."})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"[ERROR HANDLER] Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "An unexpected error occurred."})


# ---- CORS ----
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(system.router)
app.include_router(upload.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("exif_api.main:app", host=settings.host, port=settings.port, log_level="info")
