"""Service layer – validate an uploaded image and store it by date.

The handler runs these steps in order.  Any failure ends the request:

1. reject declared sizes above ``settings.max_upload_size``,
2. rewind the upload stream (closed again on every exit path),
3. sniff the first ``SNIFF_LENGTH`` bytes and reject non-images,
4. build ``<storage_dir>/<year>/<month>/<day>/<filename>``,
5. write the whole stream there,
6. answer with the public URL.
"""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import date
from typing import Any

from starlette.concurrency import run_in_threadpool

from src.imagebed.config import STATIC_ROUTE, Settings
from src.imagebed.errors import ImageTooLargeError, NotAnImageError, UploadIOError
from src.imagebed.schemas.upload import UploadedImage, UploadResponse
from src.imagebed.services.signature_service import SNIFF_LENGTH, detect
from src.imagebed.services.storage_service import build_relative_path, save_stream

logger = logging.getLogger(__name__)


def declared_size(upload: Any) -> int:
    """Size reported by the multipart parser, measured from the stream if absent."""
    if upload.size is not None:
        return upload.size
    stream = upload.file
    position = stream.tell()
    size = stream.seek(0, os.SEEK_END)
    stream.seek(position)
    return size


@asynccontextmanager
async def opened(upload: Any) -> AsyncIterator[Any]:
    """
    Yield *upload* rewound to its first byte and close it on the way out.

    A failure to close is logged and swallowed: a read handle that will not
    close must not take the request (or the process) down with it.
    """
    try:
        try:
            await upload.seek(0)
        except (OSError, ValueError) as exc:
            raise UploadIOError(str(exc)) from exc
        yield upload
    finally:
        try:
            await upload.close()
        except (OSError, ValueError) as exc:
            logger.error("Failed to close upload stream for %r: %s", upload.filename, exc)


class UploadService:
    """Runs the upload path for one request at a time; holds no per-request state."""

    def __init__(self, settings: Settings, today: Callable[[], date] = date.today) -> None:
        self.settings = settings
        self.today = today

    async def handle(self, upload: Any) -> UploadResponse:
        filename = upload.filename or ""

        # ── size check (before the stream is touched) ──
        size = declared_size(upload)
        if size > self.settings.max_upload_size:
            logger.info("Rejected %r: %d bytes over limit", filename, size)
            raise ImageTooLargeError(self.settings.too_large_message)

        async with opened(upload) as stream:
            # ── sniff content type ──
            try:
                head = await stream.read(SNIFF_LENGTH)
            except (OSError, ValueError) as exc:
                raise UploadIOError(str(exc)) from exc

            kind = detect(head)
            if kind is None:
                logger.info("Rejected %r: not an image", filename)
                raise NotAnImageError(self.settings.not_image_message)

            # ── destination ──
            relative = build_relative_path(filename, self.today())
            destination = self.settings.storage_dir / relative

            # ── persist the full content, not just the sniffed head ──
            try:
                await stream.seek(0)
                await run_in_threadpool(save_stream, stream.file, destination)
            except (OSError, ValueError) as exc:
                logger.error("Failed to store %r at %s: %s", filename, destination, exc)
                raise UploadIOError(str(exc)) from exc

        logger.info("✅ Uploaded %s image %r → %s", kind.extension, filename, destination)

        data = None
        if self.settings.return_url:
            data = UploadedImage(
                name=filename,
                url=f"{self.settings.public_url}{STATIC_ROUTE}/{relative}",
            )
        return UploadResponse(message=self.settings.success_message, data=data)
