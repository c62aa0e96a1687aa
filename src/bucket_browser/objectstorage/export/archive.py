"""Streaming export of objects into a zip archive.

Entries are written one after another: each object is opened, copied in
full into its archive entry and closed before the next one starts. The zip
writer accepts non-seekable sinks such as HTTP response bodies.
"""

import shutil
import time
import zipfile
from contextlib import closing
from typing import Iterable, Iterator, Optional

from botocore.exceptions import BotoCoreError, ClientError

from bucket_browser.core import get_logger, settings
from bucket_browser.core.exceptions import TransferFailureError
from bucket_browser.objectstorage.errors import translate_error
from bucket_browser.objectstorage.models import BackendSource, ObjectSummary
from bucket_browser.path import is_directory_marker, normalize_prefix, sanitize_entry_name

logger = get_logger(__name__)

COPY_CHUNK_SIZE = 64 * 1024


class ArchiveExporter:
    """Streams selected objects or a whole sub-tree into a ZipFile."""

    def __init__(self, source: BackendSource, page_size: Optional[int] = None):
        """Initialize archive exporter.

        Args:
            source: Backend source to read from
            page_size: Keys requested per page when walking a prefix
        """
        self.source = source
        self.page_size = max(1, page_size if page_size is not None else settings.page_size)

    def export_keys(
        self, bucket: str, keys: Iterable[str], archive: zipfile.ZipFile
    ) -> dict[str, int]:
        """Write one entry per key, named after the key itself.

        Blank keys are dropped and duplicates written once, in first-seen
        order. Keys that sanitize to an empty or folder-like entry name
        are skipped.

        Returns:
            Transferred byte count per key, ``-1`` when the length was unknown

        Raises:
            AccessDeniedError: On a backend 403
            NotFoundError: On a backend 404
            TransferFailureError: If copying an object into the archive fails
        """
        unique_keys = list(dict.fromkeys(key for key in keys if key and key.strip()))
        logger.info("Exporting objects", bucket=bucket, key_count=len(unique_keys))

        transferred: dict[str, int] = {}
        for key in unique_keys:
            size = self._write_entry(bucket, key, archive)
            if size is not None:
                transferred[key] = size

        logger.info("Objects exported", bucket=bucket, entry_count=len(transferred))
        return transferred

    def export_prefix(
        self, bucket: str, prefix: str, archive: zipfile.ZipFile
    ) -> dict[str, int]:
        """Write every object below ``prefix``, entry names relative to it.

        Directory markers are skipped. So are keys that sanitize to an empty or
        folder-like entry name. The original key is always fetched;
        only the entry name is sanitized.

        Returns:
            Transferred byte count per key, ``-1`` when the length was unknown
        """
        normalized_prefix = normalize_prefix(prefix)
        logger.info("Exporting prefix", bucket=bucket, prefix=normalized_prefix)

        transferred: dict[str, int] = {}
        for summary in self._iter_objects(bucket, normalized_prefix):
            size = self._write_entry(
                bucket, summary.key, archive, prefix_to_trim=normalized_prefix
            )
            if size is not None:
                transferred[summary.key] = size

        logger.info(
            "Prefix exported",
            bucket=bucket,
            prefix=normalized_prefix,
            entry_count=len(transferred),
        )
        return transferred

    def _iter_objects(self, bucket: str, prefix: str) -> Iterator[ObjectSummary]:
        continuation_token: Optional[str] = None
        while True:
            try:
                page = self.source.store.list_page(
                    bucket, prefix, None, self.page_size, continuation_token
                )
            except ClientError as e:
                raise translate_error(e, bucket, self.source)

            for summary in page.objects:
                if not is_directory_marker(summary.key):
                    yield summary

            next_token = page.next_token
            if not page.truncated or not next_token or not next_token.strip():
                return
            if next_token == continuation_token:
                logger.warning(
                    "Repeated continuation token, stopping export listing",
                    bucket=bucket,
                    prefix=prefix,
                )
                return
            continuation_token = next_token

    def _write_entry(
        self,
        bucket: str,
        key: str,
        archive: zipfile.ZipFile,
        prefix_to_trim: str = "",
    ) -> Optional[int]:
        entry_name = sanitize_entry_name(key, prefix_to_trim)
        if not entry_name or is_directory_marker(entry_name):
            # nothing usable is left of the key once sanitized
            logger.warning(
                "Skipping object without a usable entry name", bucket=bucket, key=key
            )
            return None

        try:
            body, metadata = self.source.store.open_object(bucket, key)
        except ClientError as e:
            raise translate_error(e, bucket, self.source)

        content_length = metadata.content_length
        known_length = content_length is not None and content_length >= 0

        with closing(body):
            info = zipfile.ZipInfo(entry_name, date_time=time.localtime()[:6])
            info.compress_type = archive.compression
            if known_length:
                info.file_size = content_length
            try:
                with archive.open(info, mode="w", force_zip64=not known_length) as entry:
                    shutil.copyfileobj(body, entry, COPY_CHUNK_SIZE)
            except (OSError, BotoCoreError) as e:
                logger.error(
                    "Archive transfer failed", bucket=bucket, key=key, error=str(e)
                )
                raise TransferFailureError(key, e) from e

        logger.debug("Archive entry written", key=key, entry=entry_name)
        return content_length if known_length else -1
