"""Centralized configuration management using Pydantic Settings.

Every environment variable the service reads is declared here, grouped by
concern, each group with its own prefix.
"""

import multiprocessing
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class ContentConfig(BaseSettings):
    """Upload, download and print settings for converted documents."""

    # 5MB is far beyond any hand-written Markdown document
    max_upload_size: int = Field(
        default=5 * 1024 * 1024,
        ge=1024,
        le=100 * 1024 * 1024,
        description="Maximum uploaded file size in bytes (default: 5MB)"
    )
    allowed_extensions: Annotated[list[str], NoDecode] = Field(
        default=[".md", ".txt"],
        description="File extensions accepted by the upload endpoint"
    )
    download_filename: str = Field(
        default="converted-text.txt",
        description="Suggested filename for downloaded plain text"
    )
    print_title: str = Field(
        default="Converted Markdown Text",
        description="Title of the printable HTML document"
    )

    model_config = SettingsConfigDict(env_prefix="CONTENT_")

    @field_validator("allowed_extensions", mode="before")
    @classmethod
    def parse_extensions(cls, v):
        """Parse comma-separated extensions and normalize to lowercase with a leading dot."""
        if isinstance(v, str):
            v = [ext.strip() for ext in v.split(",") if ext.strip()]
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]


class PDFConfig(BaseSettings):
    """PDF rendering configuration settings.

    Rendering a print document is cheap compared to loading a web page, but each
    Chromium instance still costs ~100MB, so the pool stays small.
    """

    enabled: bool = Field(
        default=True,
        description="Start the Playwright browser pool on startup"
    )

    def _get_default_concurrency():
        cpu_count = multiprocessing.cpu_count()
        return min(cpu_count * 2, 8)

    concurrency: int = Field(
        default_factory=_get_default_concurrency,
        ge=1,
        le=50,
        description="Max concurrent PDF renders (default: 2x CPU cores, max 8)"
    )
    pool_size: int = Field(
        default=2,
        ge=1,
        le=10,
        description="Number of browser instances to maintain in the pool"
    )
    render_timeout: int = Field(
        default=10000,
        ge=1000,
        le=60000,
        description="Playwright set_content timeout in milliseconds"
    )
    page_format: Literal["A4", "A3", "A5", "Letter", "Legal"] = Field(
        default="A4",
        description="Paper format for generated PDFs"
    )
    margin: str = Field(
        default="0cm",
        description="Page margin on all sides; the print document already pads its body by 2cm"
    )

    model_config = SettingsConfigDict(env_prefix="PDF_")


class LoggingConfig(BaseSettings):
    """Logging configuration with structured logging support."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Application log level"
    )
    access_log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Uvicorn access log level"
    )
    json_logs: bool = Field(
        default=False,
        description="Enable JSON formatted logs (recommended for production)"
    )
    access_log_file: str | None = Field(
        default=None,
        description="Path to access log file (None = stdout)"
    )
    error_log_file: str | None = Field(
        default=None,
        description="Path to error log file (None = stderr)"
    )
    log_rotation_size: int = Field(
        default=10 * 1024 * 1024,  # 10MB
        ge=1024 * 1024,
        description="Log file size before rotation (bytes)"
    )
    log_rotation_count: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Number of rotated log files to keep"
    )

    model_config = SettingsConfigDict(env_prefix="LOG_")


class CORSConfig(BaseSettings):
    """CORS configuration."""

    allowed_origins: Annotated[list[str], NoDecode] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific domains in production)"
    )

    model_config = SettingsConfigDict(env_prefix="CORS_")

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_origins(cls, v):
        """Parse comma-separated origins from environment variable."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v


class Settings(BaseSettings):
    """Main application settings combining all configuration sections."""

    app_name: str = Field(
        default="Markdown Plain Text Converter",
        description="Application name"
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version"
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Runtime environment"
    )

    content: ContentConfig = Field(default_factory=ContentConfig)
    pdf: PDFConfig = Field(default_factory=PDFConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    cors: CORSConfig = Field(default_factory=CORSConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def validate_settings(self) -> list[str]:
        """Validate settings and return list of warnings/info messages."""
        messages = []

        if self.environment == "production":
            if "*" in self.cors.allowed_origins:
                messages.append("WARNING: CORS allows all origins in production")

            if not self.logging.json_logs:
                messages.append("INFO: JSON logs recommended for production")

        messages.append(f"INFO: Max upload size: {self.content.max_upload_size / 1024 / 1024:.1f}MB")
        messages.append(f"INFO: Upload extensions: {', '.join(self.content.allowed_extensions)}")
        messages.append(f"INFO: PDF rendering: {'enabled' if self.pdf.enabled else 'disabled'}")
        messages.append(f"INFO: PDF concurrency: {self.pdf.concurrency}")

        return messages


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment (useful for testing)."""
    global _settings
    _settings = Settings()
    return _settings
