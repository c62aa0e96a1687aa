"""Data models for listings, folder statistics and backend pages."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from bucket_browser.objectstorage.clients import ObjectStore


@dataclass(frozen=True)
class ObjectSummary:
    """One object as reported by a backend listing page."""

    key: str
    size: int = 0
    last_modified: Optional[datetime] = None
    etag: Optional[str] = None


@dataclass(frozen=True)
class ListPage:
    """One page returned by ``ObjectStore.list_page``.

    Attributes:
        folders: Common prefixes grouped by the delimiter
        objects: Objects on this page, directory markers included
        truncated: Whether the backend holds more entries after this page
        next_token: Continuation token for the following page, if any
    """

    folders: tuple[str, ...] = ()
    objects: tuple[ObjectSummary, ...] = ()
    truncated: bool = False
    next_token: Optional[str] = None


@dataclass(frozen=True)
class ObjectMetadata:
    """Headers of a single object read."""

    content_length: Optional[int] = None
    content_type: Optional[str] = None


@dataclass(frozen=True)
class Folder:
    """A folder entry; size and last_modified are only set when aggregated."""

    name: str
    prefix: str
    size: int = 0
    last_modified: Optional[datetime] = None


@dataclass(frozen=True)
class StorageObject:
    """A file entry under the browsed prefix."""

    key: str
    name: str
    size: int
    last_modified: Optional[datetime]
    etag: Optional[str]
    previewable: bool


@dataclass(frozen=True)
class FolderStats:
    """Aggregated size and most recent modification below a folder prefix."""

    size: int = 0
    last_modified: Optional[datetime] = None


@dataclass(frozen=True)
class Listing:
    """Result of one browse call.

    ``continuation_token``, ``next_continuation_token`` and
    ``previous_continuation_token`` are encoded token stacks; an empty string
    means the first page.
    """

    bucket: str
    prefix: str
    folders: tuple[Folder, ...] = field(default_factory=tuple)
    objects: tuple[StorageObject, ...] = field(default_factory=tuple)
    has_next: bool = False
    continuation_token: str = ""
    next_continuation_token: str = ""
    previous_continuation_token: str = ""


@dataclass(frozen=True)
class BackendSource:
    """A configured backend: identity plus the store used to reach it.

    Resolved once per request and treated as read-only context.
    """

    name: str
    display_name: str
    default_bucket: str
    store: "ObjectStore"
