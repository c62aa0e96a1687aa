"""Tests for folder aggregation."""

from datetime import datetime, timezone

import boto3
import pytest
from moto import mock_aws

from bucket_browser.core.exceptions import AccessDeniedError
from bucket_browser.objectstorage.analysis import FolderAnalyzer
from bucket_browser.objectstorage.clients import S3ObjectStore
from bucket_browser.objectstorage.models import (
    BackendSource,
    FolderStats,
    ListPage,
    ObjectSummary,
)

EARLY = datetime(2024, 6, 1, tzinfo=timezone.utc)
LATE = datetime(2025, 3, 1, tzinfo=timezone.utc)


class TestFolderAnalyzer:
    """Test aggregation against a scripted store."""

    def test_sums_across_pages(self, source, fake_store):
        """Test sizes and newest timestamp over every page."""
        fake_store.recursive_pages[("docs/", None)] = ListPage(
            objects=(
                ObjectSummary("docs/a.txt", 100, EARLY),
                ObjectSummary("docs/", 0, LATE),
            ),
            truncated=True,
            next_token="p2",
        )
        fake_store.recursive_pages[("docs/", "p2")] = ListPage(
            objects=(
                ObjectSummary("docs/deep/b.txt", 50, LATE),
                ObjectSummary("docs/deep/c.txt", 25, None),
            ),
        )
        analyzer = FolderAnalyzer(source, page_size=2)

        stats = analyzer.aggregate("bucket", "docs")

        assert stats == FolderStats(size=175, last_modified=LATE)
        assert [call.continuation_token for call in fake_store.list_calls] == [None, "p2"]
        assert all(call.delimiter is None for call in fake_store.list_calls)
        assert all(call.max_keys == 2 for call in fake_store.list_calls)

    def test_blank_prefix_short_circuits(self, source, fake_store):
        """Test a blank prefix returns empty stats without a backend call."""
        analyzer = FolderAnalyzer(source, page_size=10)

        assert analyzer.aggregate("bucket", "") == FolderStats(0, None)
        assert analyzer.aggregate("bucket", "   ") == FolderStats(0, None)
        assert fake_store.list_calls == []

    def test_repeated_token_stops(self, source, fake_store):
        """Test the loop ends when the backend repeats the token just used."""
        fake_store.recursive_pages[("loop/", None)] = ListPage(
            objects=(ObjectSummary("loop/a", 1, EARLY),), truncated=True, next_token="x"
        )
        fake_store.recursive_pages[("loop/", "x")] = ListPage(
            objects=(ObjectSummary("loop/b", 2, EARLY),), truncated=True, next_token="x"
        )
        analyzer = FolderAnalyzer(source, page_size=10)

        stats = analyzer.aggregate("bucket", "loop/")

        assert stats.size == 3
        assert len(fake_store.list_calls) == 2

    def test_missing_next_token_stops(self, source, fake_store):
        """Test a truncated page without a token ends the listing."""
        fake_store.recursive_pages[("a/", None)] = ListPage(
            objects=(ObjectSummary("a/1", 4, EARLY),), truncated=True, next_token=None
        )
        analyzer = FolderAnalyzer(source, page_size=10)

        assert analyzer.aggregate("bucket", "a/").size == 4
        assert len(fake_store.list_calls) == 1

    def test_cached_aggregation(self, source, fake_store):
        """Test aggregate_cached computes each prefix once per cache."""
        fake_store.recursive_pages[("a/", None)] = ListPage(
            objects=(ObjectSummary("a/1", 4, EARLY),)
        )
        analyzer = FolderAnalyzer(source, page_size=10)
        cache: dict[str, FolderStats] = {}

        first = analyzer.aggregate_cached("bucket", "a/", cache)
        second = analyzer.aggregate_cached("bucket", "a/", cache)

        assert first == second == FolderStats(4, EARLY)
        assert len(fake_store.list_calls) == 1
        assert cache == {"a/": first}

    def test_access_denied(self, source, fake_store, client_error):
        """Test backend 403 is translated."""
        fake_store.list_error = client_error(403, "AccessDenied")
        analyzer = FolderAnalyzer(source, page_size=10)

        with pytest.raises(AccessDeniedError):
            analyzer.aggregate("bucket", "a/")


@mock_aws
class TestFolderAnalyzerS3:
    """Test aggregation against mocked S3."""

    def setup_method(self, method):
        """Set up test environment."""
        self.s3_client = boto3.client(
            "s3",
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
        )
        self.s3_client.create_bucket(Bucket="test-bucket")
        self.s3_client.put_object(Bucket="test-bucket", Key="data/", Body=b"")
        self.s3_client.put_object(
            Bucket="test-bucket", Key="data/file1.txt", Body=b"content1"
        )
        self.s3_client.put_object(
            Bucket="test-bucket", Key="data/file2.txt", Body=b"content2content2"
        )
        self.s3_client.put_object(
            Bucket="test-bucket", Key="data/subdir/file3.txt", Body=b"content3"
        )
        self.s3_client.put_object(
            Bucket="test-bucket", Key="other/file4.txt", Body=b"ignored"
        )
        self.source = BackendSource(
            name="mock",
            display_name="mock",
            default_bucket="test-bucket",
            store=S3ObjectStore(self.s3_client),
        )

    def test_aggregate_prefix(self):
        """Test recursive totals with small pages."""
        stats = FolderAnalyzer(self.source, page_size=1).aggregate("test-bucket", "data")

        assert stats.size == 32
        assert stats.last_modified is not None

    def test_aggregate_empty_prefix(self):
        """Test a prefix without objects."""
        stats = FolderAnalyzer(self.source, page_size=10).aggregate(
            "test-bucket", "nonexistent/"
        )

        assert stats == FolderStats(0, None)
