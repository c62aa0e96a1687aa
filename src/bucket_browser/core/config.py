"""Configuration management for bucket-browser."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from bucket_browser.schemas import S3SourceConfig


class Settings(BaseSettings):
    """Application settings with environment variable support.

    Sources are read from nested variables, for example
    ``BUCKET_BROWSER_SOURCES__ARCHIVE__DEFAULT_BUCKET=photos``.
    """

    log_level: str = "INFO"
    otel_enabled: bool = False
    otel_service_name: str = "bucket-browser"
    otel_exporter_endpoint: str = "http://localhost:4317"

    page_size: int = Field(
        default=200, ge=1, le=1000, description="Entries per page and per result list"
    )
    search_page_limit: int = Field(
        default=10, ge=1, description="Maximum pages scanned for one search query"
    )
    default_source: Optional[str] = None
    sources: dict[str, S3SourceConfig] = Field(default_factory=dict)

    model_config = {
        "env_prefix": "BUCKET_BROWSER_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
    }


settings = Settings()
