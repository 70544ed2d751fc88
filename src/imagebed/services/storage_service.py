"""Service layer – date-partitioned storage of uploaded files."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from datetime import date
from pathlib import Path, PurePosixPath
from typing import BinaryIO

from src.imagebed.errors import InvalidFilenameError

logger = logging.getLogger(__name__)

_FORBIDDEN_NAMES = {"", ".", ".."}
_FORBIDDEN_CHARS = ("/", "\\", "\x00")


def check_filename(filename: str) -> str:
    """Return *filename* unchanged, or raise if it would leave its directory."""
    if filename in _FORBIDDEN_NAMES or any(c in filename for c in _FORBIDDEN_CHARS):
        raise InvalidFilenameError(f"invalid filename: {filename!r}")
    return filename


def build_relative_path(filename: str, day: date) -> PurePosixPath:
    """``{year}/{month}/{day}/{filename}`` with no zero padding."""
    return PurePosixPath(str(day.year), str(day.month), str(day.day), check_filename(filename))


def save_stream(source: BinaryIO, destination: Path) -> int:
    """
    Copy *source* into *destination* and return the number of bytes written.

    The content goes to a temporary file next to *destination* which is then
    renamed into place, so readers never see a half-written file.  Concurrent
    writers to the same destination are not coordinated: the last rename wins.
    """
    destination.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=".upload-", suffix=".part", dir=destination.parent,
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as out:
            shutil.copyfileobj(source, out)
            written = out.tell()
        # mkstemp creates 0600; stored images are meant to be served
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, destination)
    except BaseException:
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Failed to remove partial file %s: %s", tmp_path, exc)
        raise

    logger.info("💾 Stored %s (%d bytes)", destination, written)
    return written
