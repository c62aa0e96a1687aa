"""Folder aggregation: total size and latest modification below a prefix."""

from datetime import datetime
from typing import Optional

from botocore.exceptions import ClientError

from bucket_browser.core import get_logger, settings
from bucket_browser.objectstorage.errors import translate_error
from bucket_browser.objectstorage.models import BackendSource, FolderStats
from bucket_browser.path import is_directory_marker, normalize_prefix

logger = get_logger(__name__)


class FolderAnalyzer:
    """Sums object sizes under a folder by paging its whole sub-tree."""

    def __init__(self, source: BackendSource, page_size: Optional[int] = None):
        """Initialize folder analyzer.

        Args:
            source: Backend source to list from
            page_size: Keys requested per page, defaults to the configured page size
        """
        self.source = source
        self.page_size = max(1, page_size if page_size is not None else settings.page_size)

    def aggregate(self, bucket: str, folder_prefix: str) -> FolderStats:
        """Compute folder statistics with a full recursive listing.

        Paging stops when the backend reports no more pages, or when it hands
        back the token that was just used.

        Args:
            bucket: Bucket name
            folder_prefix: Folder prefix; blank returns empty stats without a
                backend call

        Returns:
            FolderStats with the summed size and newest modification time

        Raises:
            AccessDeniedError: On a backend 403
            NotFoundError: On a backend 404
        """
        if not folder_prefix or not folder_prefix.strip():
            return FolderStats()

        prefix = normalize_prefix(folder_prefix)
        continuation_token: Optional[str] = None
        total_size = 0
        most_recent: Optional[datetime] = None
        page_count = 0

        while True:
            try:
                page = self.source.store.list_page(
                    bucket, prefix, None, self.page_size, continuation_token
                )
            except ClientError as e:
                raise translate_error(e, bucket, self.source)
            page_count += 1

            for obj in page.objects:
                if is_directory_marker(obj.key):
                    continue
                total_size += obj.size
                if obj.last_modified is not None and (
                    most_recent is None or obj.last_modified > most_recent
                ):
                    most_recent = obj.last_modified

            if not page.truncated:
                break

            next_token = page.next_token
            if not next_token or not next_token.strip():
                break
            if next_token == continuation_token:
                logger.warning(
                    "Repeated continuation token, stopping aggregation",
                    bucket=bucket,
                    prefix=prefix,
                    pages=page_count,
                )
                break
            continuation_token = next_token

        logger.info(
            "Folder aggregation completed",
            bucket=bucket,
            prefix=prefix,
            pages=page_count,
            total_bytes=total_size,
        )
        return FolderStats(size=total_size, last_modified=most_recent)

    def aggregate_cached(
        self, bucket: str, folder_prefix: str, cache: dict[str, FolderStats]
    ) -> FolderStats:
        """Aggregate once per prefix, reusing ``cache`` for repeats.

        The cache belongs to the caller and should live for one request only.
        """
        stats = cache.get(folder_prefix)
        if stats is None:
            stats = self.aggregate(bucket, folder_prefix)
            cache[folder_prefix] = stats
        return stats
