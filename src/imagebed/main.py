"""imagebed – FastAPI application entry-point."""

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.cors import CORSMiddleware

from src.imagebed.config import STATIC_ROUTE, Settings, settings
from src.imagebed.errors import UploadError
from src.imagebed.router import health, pages, upload
from src.imagebed.schemas.upload import ErrorResponse
from src.imagebed.services.upload_service import UploadService

# Configure logging from settings
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def upload_error_handler(_request: Request, exc: UploadError) -> JSONResponse:
    """Render every upload failure as ``{"error": message}``."""
    if exc.status_code >= 500:
        logger.error("Upload failed (%d): %s", exc.status_code, exc.message)
    else:
        logger.warning("Upload rejected (%d): %s", exc.status_code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


# ──────────────────────────────────────────────
# Application factory
# ──────────────────────────────────────────────
def create_app(app_settings: Settings) -> FastAPI:
    """Build the application around an already-loaded, read-only ``Settings``."""
    application = FastAPI(
        title="imagebed",
        description="Upload images and get back a public URL.",
        version="1.0.0",
    )
    application.state.settings = app_settings
    application.state.upload_service = UploadService(app_settings)

    # ── CORS middleware (configured from environment variables) ──
    application.add_middleware(
        middleware_class=CORSMiddleware,
        allow_origins=app_settings.allow_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Origin"],
        expose_headers=["Content-Length"],
        max_age=12 * 60 * 60,
    )
    logger.info("CORS configured with origins: %s", app_settings.allow_origins_list)

    application.add_exception_handler(UploadError, upload_error_handler)

    # ── register routers ──
    application.include_router(health.router)
    application.include_router(upload.router)
    if app_settings.serve_frontend:
        application.include_router(pages.router)

    # ── serve stored images statically ──
    app_settings.storage_dir.mkdir(parents=True, exist_ok=True)
    application.mount(
        STATIC_ROUTE,
        StaticFiles(directory=str(app_settings.storage_dir)),
        name="static",
    )
    logger.info("Serving %s at %s", app_settings.storage_dir, STATIC_ROUTE)
    return application


app = create_app(settings)


def main() -> None:
    """Run the service on ``0.0.0.0:<PORT>``."""
    logger.info("🚀 Listening on port %s, public URL %s", settings.port, settings.public_url)
    uvicorn.run(app, host="0.0.0.0", port=int(settings.port))


if __name__ == "__main__":
    main()
