"""Tests for settings and source configuration schemas."""

import pytest
from pydantic import ValidationError

from bucket_browser.core.config import Settings
from bucket_browser.schemas import S3SourceConfig


class TestSettings:
    """Test application settings."""

    def test_defaults(self, monkeypatch):
        """Test default limits."""
        monkeypatch.delenv("BUCKET_BROWSER_PAGE_SIZE", raising=False)
        monkeypatch.delenv("BUCKET_BROWSER_SEARCH_PAGE_LIMIT", raising=False)
        settings = Settings()

        assert settings.page_size == 200
        assert settings.search_page_limit == 10

    @pytest.mark.parametrize("page_size", [0, 1001])
    def test_page_size_range(self, page_size):
        """Test page size is limited to [1, 1000]."""
        with pytest.raises(ValidationError):
            Settings(page_size=page_size)

    def test_page_size_bounds_accepted(self):
        """Test both ends of the page size range."""
        assert Settings(page_size=1).page_size == 1
        assert Settings(page_size=1000).page_size == 1000

    def test_search_page_limit_minimum(self):
        """Test search page limit must be at least one."""
        with pytest.raises(ValidationError):
            Settings(search_page_limit=0)

    def test_limits_from_environment(self, monkeypatch):
        """Test limits are read from prefixed variables."""
        monkeypatch.setenv("BUCKET_BROWSER_PAGE_SIZE", "50")
        monkeypatch.setenv("BUCKET_BROWSER_SEARCH_PAGE_LIMIT", "3")

        settings = Settings()

        assert settings.page_size == 50
        assert settings.search_page_limit == 3

    def test_sources_from_environment(self, monkeypatch):
        """Test nested source variables build source configs."""
        monkeypatch.setenv("BUCKET_BROWSER_SOURCES__ARCHIVE__REGION", "eu-west-1")
        monkeypatch.setenv("BUCKET_BROWSER_SOURCES__ARCHIVE__DEFAULT_BUCKET", "photos")
        monkeypatch.setenv("BUCKET_BROWSER_SOURCES__ARCHIVE__ACCESS_KEY", "key")
        monkeypatch.setenv("BUCKET_BROWSER_SOURCES__ARCHIVE__SECRET_KEY", "secret")
        monkeypatch.setenv(
            "BUCKET_BROWSER_SOURCES__ARCHIVE__ENDPOINT_URL", "http://localhost:9000"
        )

        settings = Settings()

        source = settings.sources["archive"]
        assert source.region == "eu-west-1"
        assert source.default_bucket == "photos"
        assert source.endpoint_url == "http://localhost:9000"
        assert source.path_style_access is True


class TestS3SourceConfig:
    """Test source configuration schema."""

    def test_required_fields(self):
        """Test region and default bucket are required."""
        with pytest.raises(ValidationError):
            S3SourceConfig(region="us-east-1")
        with pytest.raises(ValidationError):
            S3SourceConfig(default_bucket="photos")

    def test_blank_bucket_rejected(self):
        """Test blank values are rejected."""
        with pytest.raises(ValidationError):
            S3SourceConfig(region="us-east-1", default_bucket="")

    def test_unknown_field_rejected(self):
        """Test extra keys are forbidden."""
        with pytest.raises(ValidationError):
            S3SourceConfig(region="us-east-1", default_bucket="b", bucket_name="x")

    def test_defaults(self):
        """Test optional fields."""
        config = S3SourceConfig(region="us-east-1", default_bucket="photos")

        assert config.endpoint_url is None
        assert config.display_name is None
        assert config.path_style_access is True
