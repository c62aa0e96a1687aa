"""Object storage browsing, aggregation and export for S3-compatible services."""

from .analysis import FolderAnalyzer
from .clients import ObjectStore, S3ClientManager, S3ObjectStore
from .export import ArchiveExporter
from .listing import PrefixLister
from .models import (
    BackendSource,
    Folder,
    FolderStats,
    Listing,
    ListPage,
    ObjectMetadata,
    ObjectSummary,
    StorageObject,
)
from .tokens import (
    append_to_stack,
    decode_token_stack,
    drop_last_from_stack,
    encode_token_stack,
)

__all__ = [
    "ArchiveExporter",
    "BackendSource",
    "Folder",
    "FolderAnalyzer",
    "FolderStats",
    "Listing",
    "ListPage",
    "ObjectMetadata",
    "ObjectStore",
    "ObjectSummary",
    "PrefixLister",
    "S3ClientManager",
    "S3ObjectStore",
    "StorageObject",
    "append_to_stack",
    "decode_token_stack",
    "drop_last_from_stack",
    "encode_token_stack",
]
