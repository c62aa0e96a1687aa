"""Browse S3-compatible object stores as folders and files.

This package turns flat, token-paginated object listings into a navigable
folder view with stateless back/forward paging, bounded substring search,
per-request folder size aggregation and streaming zip export.

Recommended Usage:
    Use the StorageBrowser facade with the environment settings:

    >>> from bucket_browser import StorageBrowser, settings
    >>> browser = StorageBrowser.from_settings(settings)
    >>> listing = browser.list_objects(None, None, prefix="docs/")

Advanced Usage:
    Drive the engines directly against any ObjectStore:

    >>> from bucket_browser.objectstorage import PrefixLister, ArchiveExporter
"""

__version__ = "0.1.0"

from .core import settings
from .core.exceptions import (
    AccessDeniedError,
    BucketBrowserError,
    ConfigurationError,
    NotFoundError,
    StorageAccessError,
    TransferFailureError,
    ValidationError,
)
from .objectstorage import (
    ArchiveExporter,
    BackendSource,
    Folder,
    FolderAnalyzer,
    FolderStats,
    Listing,
    PrefixLister,
    S3ObjectStore,
    StorageObject,
)
from .schemas import S3SourceConfig
from .sources import SourceRegistry
from .unified import StorageBrowser

__all__ = [
    "settings",
    # Errors
    "AccessDeniedError",
    "BucketBrowserError",
    "ConfigurationError",
    "NotFoundError",
    "StorageAccessError",
    "TransferFailureError",
    "ValidationError",
    # Engines and models
    "ArchiveExporter",
    "BackendSource",
    "Folder",
    "FolderAnalyzer",
    "FolderStats",
    "Listing",
    "PrefixLister",
    "S3ObjectStore",
    "StorageObject",
    # Sources
    "S3SourceConfig",
    "SourceRegistry",
    "StorageBrowser",
]
