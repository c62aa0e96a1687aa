"""Translation of backend status codes into storage errors."""

from typing import TYPE_CHECKING, Optional

from botocore.exceptions import ClientError

from bucket_browser.core import get_logger
from bucket_browser.core.exceptions import AccessDeniedError, NotFoundError

if TYPE_CHECKING:
    from bucket_browser.objectstorage.models import BackendSource

logger = get_logger(__name__)


def backend_status_code(error: BaseException) -> Optional[int]:
    """Return the HTTP status of a backend error, or None when it has none."""
    if not isinstance(error, ClientError):
        return None
    status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    try:
        return int(status) if status is not None else None
    except (TypeError, ValueError):
        return None


def translate_error(
    error: Exception, bucket: str, source: "BackendSource"
) -> Exception:
    """Map a backend error to AccessDeniedError/NotFoundError.

    Any other error is returned unchanged so the caller re-raises it as is.
    """
    status = backend_status_code(error)
    if status == 403:
        logger.warning("Backend access denied", bucket=bucket, source=source.name)
        return AccessDeniedError(
            f"Access denied while accessing bucket '{bucket}' in source "
            f"'{source.name}'. Ensure the credentials include list and read "
            f"permissions.",
            bucket=bucket,
            source_name=source.name,
        )
    if status == 404:
        logger.warning("Backend bucket not found", bucket=bucket, source=source.name)
        return NotFoundError(
            f"Bucket '{bucket}' in source '{source.name}' was not found. "
            f"Confirm the bucket name and region.",
            bucket=bucket,
            source_name=source.name,
        )
    return error
