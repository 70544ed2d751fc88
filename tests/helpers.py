"""Payload builders and fakes shared by the test modules."""

import io
from datetime import date

from PIL import Image

UPLOAD_DAY = date(2024, 3, 5)
PUBLIC_URL = "http://img.example.test"


def make_image(fmt: str = "PNG", size: tuple[int, int] = (32, 32)) -> bytes:
    """Encode a small solid image with Pillow."""
    buf = io.BytesIO()
    Image.new("RGB", size, color="red").save(buf, format=fmt)
    return buf.getvalue()


def tiny_png(length: int = 100) -> bytes:
    """A PNG magic header padded with zeros to *length* bytes."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * (length - 8)


class FakeUpload:
    """Minimal stand-in for ``UploadFile`` that records how it was used."""

    def __init__(self, data: bytes, filename: str = "pic.png", size: int | None = None) -> None:
        self.file = io.BytesIO(data)
        self.filename = filename
        self.size = len(data) if size is None else size
        self.seeks: list[int] = []
        self.reads: list[int] = []
        self.closed = False

    async def seek(self, offset: int) -> None:
        self.seeks.append(offset)
        self.file.seek(offset)

    async def read(self, size: int = -1) -> bytes:
        self.reads.append(size)
        return self.file.read(size)

    async def close(self) -> None:
        self.closed = True
