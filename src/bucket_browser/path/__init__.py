"""Helpers for keys, prefixes and archive entry names."""

from .keys import (
    DELIMITER,
    Breadcrumb,
    breadcrumbs,
    file_name,
    folder_name,
    format_bytes,
    is_directory_marker,
    is_previewable,
    normalize_prefix,
    parent_prefix,
    sanitize_entry_name,
)

__all__ = [
    "DELIMITER",
    "Breadcrumb",
    "breadcrumbs",
    "file_name",
    "folder_name",
    "format_bytes",
    "is_directory_marker",
    "is_previewable",
    "normalize_prefix",
    "parent_prefix",
    "sanitize_entry_name",
]
