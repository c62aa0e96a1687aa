"""Exception hierarchy for bucket-browser."""

from typing import Optional


class BucketBrowserError(Exception):
    """Base exception for all bucket-browser errors."""

    pass


class ValidationError(BucketBrowserError):
    """Raised when validation fails."""

    pass


class ConfigurationError(BucketBrowserError):
    """Raised when no usable storage source is configured."""

    pass


class StorageAccessError(BucketBrowserError):
    """Raised when the backend refuses or cannot find a bucket."""

    def __init__(self, message: str, bucket: str, source_name: str):
        super().__init__(message)
        self.bucket = bucket
        self.source_name = source_name


class AccessDeniedError(StorageAccessError):
    """Raised on a backend 403 for a bucket."""

    required_permissions = ("list", "read")


class NotFoundError(StorageAccessError):
    """Raised on a backend 404 for a bucket or key."""

    pass


class TransferFailureError(BucketBrowserError):
    """Raised when copying an object into an archive fails mid-stream."""

    def __init__(self, key: str, cause: Optional[BaseException] = None):
        message = f"Failed to add object '{key}' to archive"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.key = key
