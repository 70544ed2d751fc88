"""Router – image upload."""

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from src.imagebed.errors import ExtractionError
from src.imagebed.schemas.upload import ErrorResponse, UploadResponse
from src.imagebed.services.upload_service import UploadService

router = APIRouter(tags=["Upload"])

FILE_FIELD = "file"


def get_upload_service(request: Request) -> UploadService:
    """The service built by ``create_app`` with the app's settings."""
    return request.app.state.upload_service


@router.post(
    "/upload",
    response_model=UploadResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_image(
    request: Request,
    service: UploadService = Depends(get_upload_service),
) -> UploadResponse:
    """
    Upload an image and return where it can be fetched.

    The multipart field ``file`` is stored under
    ``/static/<year>/<month>/<day>/<filename>``.

    Returns
    -------
    UploadResponse with:
        - message : success text
        - data    : ``{name, url}`` unless URL reporting is turned off

    Failures answer ``{"error": "..."}`` with 400 for oversize or non-image
    payloads and 500 for a missing field or I/O trouble.
    """
    # ── extract the form (parsed by hand so a missing field is ours to report) ──
    try:
        form = await request.form()
    except StarletteHTTPException as exc:
        raise ExtractionError(str(exc.detail)) from exc
    except MultiPartException as exc:
        raise ExtractionError(exc.message) from exc

    try:
        # first part wins when the field is repeated
        upload = next(iter(form.getlist(FILE_FIELD)), None)
        if not isinstance(upload, UploadFile):
            raise ExtractionError(f"no multipart file field named '{FILE_FIELD}'")
        return await service.handle(upload)
    finally:
        await form.close()
