from pydantic import BaseModel


class UploadedImage(BaseModel):
    """Where a stored image can be fetched from."""
    name: str
    url: str


class UploadResponse(BaseModel):
    """Response schema for POST /upload."""
    message: str
    data: UploadedImage | None = None


class ErrorResponse(BaseModel):
    """Body of every failed POST /upload."""
    error: str
