"""Object store capability and its S3 implementation."""

from .object_store import ObjectStore
from .s3_client import S3ClientManager, S3ObjectStore

__all__ = ["ObjectStore", "S3ClientManager", "S3ObjectStore"]
