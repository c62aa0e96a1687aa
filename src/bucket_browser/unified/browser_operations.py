"""Request-level browser operations across all configured sources.

Each call resolves the source and effective bucket, then hands over to the
listing, aggregation or export engine. Nothing is kept between calls apart
from the registry and its shared clients.
"""

import zipfile
from typing import BinaryIO, Iterable, Optional

from botocore.exceptions import ClientError

from bucket_browser.core import get_logger, get_tracer
from bucket_browser.core.config import Settings
from bucket_browser.objectstorage.analysis import FolderAnalyzer
from bucket_browser.objectstorage.errors import translate_error
from bucket_browser.objectstorage.export import ArchiveExporter
from bucket_browser.objectstorage.listing import PrefixLister
from bucket_browser.objectstorage.models import (
    BackendSource,
    FolderStats,
    Listing,
    ObjectMetadata,
)
from bucket_browser.path import is_previewable
from bucket_browser.sources import SourceRegistry

logger = get_logger(__name__)
tracer = get_tracer(__name__)


class StorageBrowser:
    """Facade used by the command line and any web layer."""

    def __init__(self, registry: SourceRegistry, settings: Settings):
        self.registry = registry
        self.settings = settings

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorageBrowser":
        return cls(SourceRegistry.from_settings(settings), settings)

    def list_sources(self) -> list[BackendSource]:
        return self.registry.sources

    def resolve_source(self, source_name: Optional[str]) -> BackendSource:
        return self.registry.resolve(source_name)

    def list_buckets(self, source_name: Optional[str] = None) -> list[str]:
        source = self.registry.resolve(source_name)
        with tracer.start_as_current_span("list_buckets"):
            return self.registry.list_buckets(source)

    def list_objects(
        self,
        source_name: Optional[str],
        bucket: Optional[str],
        prefix: str = "",
        token_stack: str = "",
        query: str = "",
        include_folder_details: bool = False,
    ) -> Listing:
        """Browse one page, or search, under ``prefix``.

        See PrefixLister.list_objects for paging and search rules.
        """
        source = self.registry.resolve(source_name)
        effective_bucket = self._effective_bucket(source, bucket)
        with tracer.start_as_current_span("list_objects") as span:
            span.set_attribute("bucket_browser.source", source.name)
            span.set_attribute("bucket_browser.bucket", effective_bucket)
            return self._lister(source).list_objects(
                effective_bucket,
                prefix=prefix,
                token_stack=token_stack,
                query=query,
                include_folder_details=include_folder_details,
            )

    def folder_stats(
        self, source_name: Optional[str], bucket: Optional[str], prefix: str
    ) -> FolderStats:
        source = self.registry.resolve(source_name)
        effective_bucket = self._effective_bucket(source, bucket)
        with tracer.start_as_current_span("folder_stats"):
            return FolderAnalyzer(source, page_size=self.settings.page_size).aggregate(
                effective_bucket, prefix
            )

    def open_object_stream(
        self, source_name: Optional[str], bucket: Optional[str], key: str
    ) -> tuple[BinaryIO, ObjectMetadata]:
        """Open one object for download; the caller closes the stream."""
        source = self.registry.resolve(source_name)
        effective_bucket = self._effective_bucket(source, bucket)
        try:
            return source.store.open_object(effective_bucket, key)
        except ClientError as e:
            raise translate_error(e, effective_bucket, source)

    def supports_inline_preview(self, key: str) -> bool:
        return is_previewable(key)

    def stream_objects_as_zip(
        self,
        source_name: Optional[str],
        bucket: Optional[str],
        keys: Iterable[str],
        archive: zipfile.ZipFile,
    ) -> dict[str, int]:
        source = self.registry.resolve(source_name)
        effective_bucket = self._effective_bucket(source, bucket)
        with tracer.start_as_current_span("stream_objects_as_zip"):
            return self._exporter(source).export_keys(effective_bucket, keys, archive)

    def stream_prefix_as_zip(
        self,
        source_name: Optional[str],
        bucket: Optional[str],
        prefix: str,
        archive: zipfile.ZipFile,
    ) -> dict[str, int]:
        source = self.registry.resolve(source_name)
        effective_bucket = self._effective_bucket(source, bucket)
        with tracer.start_as_current_span("stream_prefix_as_zip"):
            return self._exporter(source).export_prefix(effective_bucket, prefix, archive)

    def _effective_bucket(self, source: BackendSource, bucket: Optional[str]) -> str:
        if bucket and bucket.strip():
            return bucket
        return source.default_bucket

    def _lister(self, source: BackendSource) -> PrefixLister:
        return PrefixLister(
            source,
            page_size=self.settings.page_size,
            search_page_limit=self.settings.search_page_limit,
        )

    def _exporter(self, source: BackendSource) -> ArchiveExporter:
        return ArchiveExporter(source, page_size=self.settings.page_size)
