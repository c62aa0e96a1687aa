"""Core utilities and shared components for bucket-browser."""

from .config import settings
from .exceptions import BucketBrowserError, ValidationError
from .observability import get_logger, get_tracer

__all__ = ["settings", "BucketBrowserError", "ValidationError", "get_logger", "get_tracer"]
