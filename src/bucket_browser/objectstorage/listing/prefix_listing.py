"""Paged browsing and bounded search over a delimiter-aware listing."""

from dataclasses import replace
from typing import Callable, Optional

from botocore.exceptions import ClientError

from bucket_browser.core import get_logger, settings
from bucket_browser.core.exceptions import ValidationError
from bucket_browser.objectstorage.analysis import FolderAnalyzer
from bucket_browser.objectstorage.errors import translate_error
from bucket_browser.objectstorage.models import (
    BackendSource,
    Folder,
    FolderStats,
    Listing,
    ObjectSummary,
    StorageObject,
)
from bucket_browser.objectstorage.tokens import (
    append_to_stack,
    decode_token_stack,
    drop_last_from_stack,
    encode_token_stack,
)
from bucket_browser.path import (
    DELIMITER,
    file_name,
    folder_name,
    is_directory_marker,
    is_previewable,
    normalize_prefix,
)

logger = get_logger(__name__)

MAX_PAGE_SIZE = 1000


def _build_matcher(query: Optional[str]) -> Callable[[str], bool]:
    if not query or not query.strip():
        return lambda value: True

    normalized_query = query.lower()
    return lambda value: value is not None and normalized_query in value.lower()


def _to_storage_object(summary: ObjectSummary) -> StorageObject:
    return StorageObject(
        key=summary.key,
        name=file_name(summary.key),
        size=summary.size,
        last_modified=summary.last_modified,
        etag=summary.etag,
        previewable=is_previewable(summary.key),
    )


class PrefixLister:
    """Turns token-paginated listing pages into a folder/file view."""

    def __init__(
        self,
        source: BackendSource,
        page_size: Optional[int] = None,
        search_page_limit: Optional[int] = None,
        analyzer: Optional[FolderAnalyzer] = None,
    ):
        """Initialize prefix lister.

        Args:
            source: Backend source to browse
            page_size: Keys per backend page and cap on each result list
            search_page_limit: Maximum pages scanned for one search query
            analyzer: Folder analyzer used when folder details are requested

        Raises:
            ValidationError: If a limit is out of range
        """
        self.source = source
        self.page_size = page_size if page_size is not None else settings.page_size
        self.search_page_limit = (
            search_page_limit
            if search_page_limit is not None
            else settings.search_page_limit
        )

        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ValidationError(
                f"page_size must be between 1 and {MAX_PAGE_SIZE}, got: {self.page_size}"
            )
        if self.search_page_limit < 1:
            raise ValidationError(
                f"search_page_limit must be at least 1, got: {self.search_page_limit}"
            )

        self.analyzer = analyzer or FolderAnalyzer(source, page_size=self.page_size)

    def list_objects(
        self,
        bucket: str,
        prefix: str = "",
        token_stack: str = "",
        query: str = "",
        include_folder_details: bool = False,
    ) -> Listing:
        """List one page of folders and files, or search across several pages.

        Without a query exactly one backend page is read. With a query,
        pages are read until the backend runs out, the object matches fill a
        page, or the search page limit is reached.

        Args:
            bucket: Bucket name
            prefix: Folder prefix, ``""`` for the bucket root
            token_stack: Encoded token stack of the page to show
            query: Case-insensitive substring matched against entry names
            include_folder_details: Aggregate size and modification time of
                every returned folder

        Returns:
            Listing with entries and the current/next/previous token stacks

        Raises:
            AccessDeniedError: On a backend 403
            NotFoundError: On a backend 404
            ValidationError: If the token stack cannot be decoded
        """
        normalized_prefix = normalize_prefix(prefix)
        tokens = decode_token_stack(token_stack)
        current_token = tokens[-1] if tokens else None
        searching = bool(query and query.strip())
        matches = _build_matcher(query)

        logger.info(
            "Listing prefix",
            bucket=bucket,
            prefix=normalized_prefix,
            depth=len(tokens),
            searching=searching,
        )

        folders: list[Folder] = []
        objects: list[StorageObject] = []
        page_count = 0
        truncated = False
        next_token: Optional[str] = None

        while True:
            try:
                page = self.source.store.list_page(
                    bucket, normalized_prefix, DELIMITER, self.page_size, current_token
                )
            except ClientError as e:
                raise translate_error(e, bucket, self.source)
            page_count += 1

            page_folders = (
                Folder(name=folder_name(folder_prefix), prefix=folder_prefix)
                for folder_prefix in page.folders
            )
            folders.extend(folder for folder in page_folders if matches(folder.name))

            page_objects = (
                _to_storage_object(summary)
                for summary in page.objects
                if not is_directory_marker(summary.key)
            )
            objects.extend(obj for obj in page_objects if matches(obj.name))

            truncated = page.truncated
            next_token = page.next_token

            if not searching:
                break
            if (
                not truncated
                or len(objects) >= self.page_size
                or page_count >= self.search_page_limit
            ):
                break
            if not next_token or not next_token.strip():
                break
            if next_token == current_token:
                logger.warning(
                    "Repeated continuation token, stopping search",
                    bucket=bucket,
                    prefix=normalized_prefix,
                    pages=page_count,
                )
                break
            current_token = next_token

        folders = folders[: self.page_size]
        objects = objects[: self.page_size]

        if include_folder_details:
            folders = self._with_folder_details(bucket, folders)

        # a repeated token would lead straight back to this page
        has_next = (
            truncated
            and bool(next_token and next_token.strip())
            and next_token != current_token
        )
        encoded_current = encode_token_stack(tokens)
        encoded_next = append_to_stack(encoded_current, next_token) if has_next else ""
        encoded_previous = drop_last_from_stack(encoded_current) if tokens else ""

        logger.info(
            "Prefix listed",
            bucket=bucket,
            prefix=normalized_prefix,
            pages=page_count,
            folder_count=len(folders),
            object_count=len(objects),
            has_next=has_next,
        )
        return Listing(
            bucket=bucket,
            prefix=normalized_prefix,
            folders=tuple(folders),
            objects=tuple(objects),
            has_next=has_next,
            continuation_token=encoded_current,
            next_continuation_token=encoded_next,
            previous_continuation_token=encoded_previous,
        )

    def _with_folder_details(self, bucket: str, folders: list[Folder]) -> list[Folder]:
        # one aggregation per distinct prefix within this call
        cache: dict[str, FolderStats] = {}
        detailed = []
        for folder in folders:
            stats = self.analyzer.aggregate_cached(bucket, folder.prefix, cache)
            detailed.append(
                replace(folder, size=stats.size, last_modified=stats.last_modified)
            )
        return detailed
