"""Archive export of objects and prefixes."""

from .archive import ArchiveExporter

__all__ = ["ArchiveExporter"]
