"""Service layer – image signature sniffing.

Classifies a buffer by the magic bytes at its start, independent of the
filename extension.  Only the leading ``SNIFF_LENGTH`` bytes are needed; a
shorter buffer is checked the same way and simply fails rules it is too short
to satisfy.
"""

from __future__ import annotations

from dataclasses import dataclass

# Enough to reach every signature in the table below (DICOM sits at 128).
SNIFF_LENGTH = 261


@dataclass(frozen=True)
class ImageKind:
    extension: str
    mime: str


@dataclass(frozen=True)
class _Rule:
    kind: ImageKind
    signature: bytes
    offset: int = 0
    # optional second signature that must also match
    extra: bytes = b""
    extra_offset: int = 0

    def matches(self, head: bytes) -> bool:
        if head[self.offset:self.offset + len(self.signature)] != self.signature:
            return False
        if self.extra:
            return head[self.extra_offset:self.extra_offset + len(self.extra)] == self.extra
        return True


JPEG = ImageKind("jpg", "image/jpeg")
JPEG2000 = ImageKind("jpx", "image/jpx")
APNG = ImageKind("apng", "image/apng")
PNG = ImageKind("png", "image/png")
GIF = ImageKind("gif", "image/gif")
WEBP = ImageKind("webp", "image/webp")
CR2 = ImageKind("cr2", "image/x-canon-cr2")
TIFF = ImageKind("tif", "image/tiff")
BMP = ImageKind("bmp", "image/bmp")
JXR = ImageKind("jxr", "image/vnd.ms-photo")
PSD = ImageKind("psd", "image/vnd.adobe.photoshop")
ICO = ImageKind("ico", "image/vnd.microsoft.icon")
HEIF = ImageKind("heif", "image/heif")
AVIF = ImageKind("avif", "image/avif")
DICOM = ImageKind("dcm", "application/dicom")
JXL = ImageKind("jxl", "image/jxl")
DWG = ImageKind("dwg", "image/vnd.dwg")
EXR = ImageKind("exr", "image/x-exr")

_PNG_MAGIC = b"\x89PNG\r\n\x1a\n"

# Order matters: more specific rules come before the ones they overlap with.
_RULES: tuple[_Rule, ...] = (
    _Rule(JPEG, b"\xff\xd8\xff"),
    _Rule(JPEG2000, b"\x00\x00\x00\x0cjP  \r\n\x87\n"),
    _Rule(APNG, _PNG_MAGIC, extra=b"acTL", extra_offset=37),
    _Rule(PNG, _PNG_MAGIC),
    _Rule(GIF, b"GIF87a"),
    _Rule(GIF, b"GIF89a"),
    _Rule(WEBP, b"RIFF", extra=b"WEBP", extra_offset=8),
    _Rule(CR2, b"II*\x00", extra=b"CR", extra_offset=8),
    _Rule(CR2, b"MM\x00*", extra=b"CR", extra_offset=8),
    _Rule(TIFF, b"II*\x00"),
    _Rule(TIFF, b"MM\x00*"),
    _Rule(BMP, b"BM"),
    _Rule(JXR, b"II\xbc"),
    _Rule(PSD, b"8BPS"),
    _Rule(ICO, b"\x00\x00\x01\x00"),
    _Rule(AVIF, b"ftypavif", offset=4),
    _Rule(AVIF, b"ftypavis", offset=4),
    _Rule(HEIF, b"ftypheic", offset=4),
    _Rule(HEIF, b"ftypheix", offset=4),
    _Rule(HEIF, b"ftypmif1", offset=4),
    _Rule(HEIF, b"ftypmsf1", offset=4),
    _Rule(DICOM, b"DICM", offset=128),
    _Rule(JXL, b"\xff\x0a"),
    _Rule(JXL, b"\x00\x00\x00\x0cJXL \r\n\x87\n"),
    _Rule(DWG, b"AC10"),
    _Rule(EXR, b"\x76\x2f\x31\x01"),
)


def detect(head: bytes) -> ImageKind | None:
    """Return the image kind whose signature *head* starts with, or ``None``."""
    for rule in _RULES:
        if rule.matches(head):
            return rule.kind
    return None


def classify(head: bytes) -> bool:
    """True when *head* carries a known image signature."""
    return detect(head) is not None
