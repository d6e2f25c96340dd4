"""Application settings and configuration.

This module defines all configuration options for the picvoter service.
Settings are loaded from environment variables with sensible defaults.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    Storage locations default to subdirectories of ``PICVOTER_STORAGE_DIR``
    unless individually overridden.
    """

    # Application metadata
    app_name: str = Field(default="picvoter", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="PICVOTER_LOG")

    # Database configuration
    database_url: str = Field(default="sqlite:///./picvoter.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Storage locations
    storage_dir: Path = Field(default=Path("./storage"), alias="PICVOTER_STORAGE_DIR")
    imports_dir_override: Path | None = Field(default=None, alias="PICVOTER_IMPORTS_DIR")
    raws_dir_override: Path | None = Field(default=None, alias="PICVOTER_RAWS_DIR")
    resized_dir_override: Path | None = Field(default=None, alias="PICVOTER_RESIZED_DIR")

    # Ingestion
    import_enabled: bool = Field(default=True, alias="PICVOTER_IMPORT_ENABLED")
    import_interval_seconds: float = Field(
        default=5.0,
        alias="PICVOTER_IMPORT_INTERVAL_SECONDS",
    )
    import_recursive: bool = Field(default=False, alias="PICVOTER_IMPORT_RECURSIVE")
    # An empty list accepts every extension the decoder understands.
    import_extensions: list[str] = Field(
        default=["jpg", "jpeg", "png", "gif", "webp", "bmp", "tiff"],
        alias="PICVOTER_IMPORT_EXTENSIONS",
    )

    # Renditions
    rendition_size: int = Field(default=1080, alias="PICVOTER_RENDITION_SIZE")
    jpeg_quality: int = Field(default=85, alias="PICVOTER_JPEG_QUALITY")

    # Rotation
    suppression_threshold: float = Field(
        default=-3.0,
        alias="PICVOTER_SUPPRESSION_THRESHOLD",
    )
    max_next_count: int = Field(default=10, alias="PICVOTER_MAX_NEXT_COUNT")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("import_extensions")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        return [ext.lower().lstrip(".") for ext in value if ext.strip(". ")]

    @property
    def imports_dir(self) -> Path:
        """Inbound directory scanned by the import watcher."""
        return self.imports_dir_override or self.storage_dir / "imports"

    @property
    def raws_dir(self) -> Path:
        """Content-addressed originals, named ``{hash}.{ext}``."""
        return self.raws_dir_override or self.storage_dir / "raws"

    @property
    def resized_dir(self) -> Path:
        """Display renditions, named ``{hash}.jpg``."""
        return self.resized_dir_override or self.storage_dir / "resized"

    def ensure_storage_dirs(self) -> None:
        """Create the storage directories if they do not exist yet."""
        for path in (self.imports_dir, self.raws_dir, self.resized_dir):
            path.mkdir(parents=True, exist_ok=True)
