"""Folder size and modification time aggregation."""

from .folder_stats import FolderAnalyzer

__all__ = ["FolderAnalyzer"]
