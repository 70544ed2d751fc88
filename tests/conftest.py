"""Shared fixtures: an app wired to a temporary storage directory."""

from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.imagebed.config import Settings
from src.imagebed.main import create_app
from src.imagebed.router.upload import get_upload_service
from src.imagebed.services.upload_service import UploadService
from helpers import PUBLIC_URL, UPLOAD_DAY


@pytest.fixture
def storage_dir(tmp_path: Path) -> Path:
    return tmp_path / "static"


@pytest.fixture
def settings(storage_dir: Path) -> Settings:
    return Settings(
        _env_file=None,
        storage_dir=storage_dir,
        url=PUBLIC_URL,
        allow_origins="http://localhost:3000",
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """The real application with the upload date pinned to ``UPLOAD_DAY``."""
    application = create_app(settings)
    application.dependency_overrides[get_upload_service] = (
        lambda: UploadService(settings, today=lambda: UPLOAD_DAY)
    )
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
