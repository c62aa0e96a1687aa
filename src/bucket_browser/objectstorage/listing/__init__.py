"""Object storage listing and search."""

from .prefix_listing import PrefixLister

__all__ = ["PrefixLister"]
