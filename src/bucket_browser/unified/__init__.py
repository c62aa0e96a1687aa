"""Request-level interface over all configured sources."""

from .browser_operations import StorageBrowser

__all__ = ["StorageBrowser"]
