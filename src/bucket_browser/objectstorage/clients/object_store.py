"""Capability interface consumed by listing, aggregation and export."""

from typing import BinaryIO, Optional, Protocol

from bucket_browser.objectstorage.models import ListPage, ObjectMetadata


class ObjectStore(Protocol):
    """Protocol for a flat, prefix-addressed object store.

    Implementations must be safe to share between concurrent requests.
    """

    def list_page(
        self,
        bucket: str,
        prefix: str,
        delimiter: Optional[str],
        max_keys: int,
        continuation_token: Optional[str] = None,
    ) -> ListPage:
        """Fetch one listing page; ``delimiter=None`` lists recursively."""
        ...

    def open_object(self, bucket: str, key: str) -> tuple[BinaryIO, ObjectMetadata]:
        """Open a streaming read of one object. The caller closes the stream."""
        ...

    def get_metadata(self, bucket: str, key: str) -> ObjectMetadata:
        """Fetch object headers without the body."""
        ...

    def list_all_buckets(self) -> list[str]:
        """Return every bucket name visible to the credentials."""
        ...
