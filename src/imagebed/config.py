from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ──────────────────────────────────────────────
# Settings (from environment variables / .env)
# ──────────────────────────────────────────────
class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file.

    Built once at process start and treated as read-only afterwards.
    """

    # Server settings
    port: str = "8080"
    url: str | None = None

    # CORS settings
    allow_origins: str = Field(
        default="",
        validation_alias=AliasChoices("AllowOrigins", "allow_origins"),
    )

    # Upload settings
    storage_dir: Path = Path("static")
    max_upload_size: int = 10 * 1024 * 1024  # 10 MB
    return_url: bool = True

    # Response messages
    success_message: str = "image uploaded successfully!"
    too_large_message: str = "please compress the image to at most 10MB"
    not_image_message: str = "only image uploads are allowed."

    # Application settings
    serve_frontend: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    @property
    def allow_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        if self.allow_origins.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.allow_origins.split(",") if origin.strip()]

    @property
    def public_url(self) -> str:
        """URL prefix prepended to stored image paths."""
        if self.url:
            return self.url.rstrip("/")
        return f"http://127.0.0.1:{self.port}"


# Global settings instance
settings = Settings()

# ──────────────────────────────────────────────
# Paths
# ──────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent                  # src/imagebed/
HTML_DIR = BASE_DIR / "html"

# URL prefix under which ``storage_dir`` is served
STATIC_ROUTE = "/static"
