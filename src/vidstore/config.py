"""Configuration management for vidstore."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable overrides.

    All settings can be overridden via environment variables
    prefixed with VIDSTORE_ (e.g. VIDSTORE_DATA_DIR, VIDSTORE_ADMIN_SECRET).
    """

    model_config = {"env_prefix": "VIDSTORE_"}

    # Storage
    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".vidstore",
        description="Root directory for the persisted document",
    )

    # Server
    host: str = "127.0.0.1"
    port: int = 3000

    # Access gate: shared secret for the admin endpoints
    admin_secret: str = "mysecretkey"

    # Upload bridge (Cloudinary)
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    upload_timeout: float = 60.0

    log_level: str = "INFO"

    @property
    def db_path(self) -> Path:
        """JSON document path."""
        return self.data_dir / "db.json"

    def ensure_dirs(self) -> None:
        """Create all required directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)


# Module-level singleton — import this throughout the app
settings = Settings()
