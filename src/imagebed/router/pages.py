"""Router – bundled front-end pages."""

import mimetypes
from pathlib import Path

from fastapi import APIRouter, HTTPException, Response

from src.imagebed.config import HTML_DIR
from src.imagebed.services.signature_service import SNIFF_LENGTH, detect

router = APIRouter(tags=["Pages"])

_SUFFIX_TYPES = {
    ".min.js": "text/javascript;charset=UTF-8",
    ".min.css": "text/css;charset=UTF-8",
}


def content_type_for(path: str, data: bytes) -> str:
    """Pick a Content-Type: fixed for minified assets, otherwise sniffed."""
    for suffix, content_type in _SUFFIX_TYPES.items():
        if path.endswith(suffix):
            return content_type

    kind = detect(data[:SNIFF_LENGTH])
    if kind is not None:
        return kind.mime

    head = data[:SNIFF_LENGTH].lstrip().lower()
    if head.startswith((b"<!doctype html", b"<html", b"<head", b"<body")):
        return "text/html; charset=utf-8"

    guessed, _ = mimetypes.guess_type(path)
    if guessed is not None:
        return guessed
    return "application/octet-stream"


def _resolve(relative: str) -> Path:
    root = HTML_DIR.resolve()
    candidate = (root / relative.lstrip("/")).resolve()
    if not candidate.is_relative_to(root) or not candidate.is_file():
        raise HTTPException(status_code=404, detail="Not Found")
    return candidate


def _serve(relative: str) -> Response:
    data = _resolve(relative).read_bytes()
    return Response(content=data, media_type=content_type_for(relative, data))


@router.get("/", include_in_schema=False)
def index() -> Response:
    """The upload page."""
    return _serve("index.html")


@router.get("/html/{filepath:path}", include_in_schema=False)
def html_asset(filepath: str) -> Response:
    return _serve(filepath)
