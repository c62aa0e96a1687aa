"""S3 client management and the boto3-backed object store.

The S3ClientManager handles boto3 client creation for one configured source
and S3ObjectStore exposes the narrow list/get/head capability the listing,
aggregation and export code is written against.

Authentication Methods Supported:
    1. Explicit credentials (access_key, secret_key, optional session_token)
    2. AWS CLI profiles (aws_profile)
    3. IAM roles / environment variables (no explicit credentials)

S3-Compatible Services:
    Custom endpoints such as MinIO are supported through endpoint_url, with
    path-style addressing enabled by default.
"""

from typing import Any, BinaryIO, Dict, Optional

import boto3
from botocore.config import Config

from bucket_browser.core import get_logger
from bucket_browser.objectstorage.models import (
    ListPage,
    ObjectMetadata,
    ObjectSummary,
)
from bucket_browser.schemas import S3SourceConfig

logger = get_logger(__name__)


class S3ClientManager:
    """Manages the S3 client connection for one source."""

    def __init__(self, config: S3SourceConfig):
        """Initialize S3 client manager.

        Args:
            config: Source configuration
        """
        self.config = config
        self._client = None
        logger.info("S3 client manager initialized", region=config.region)

    @property
    def client(self):
        """Get or create S3 client instance."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self):
        """Create boto3 S3 client with the configured settings."""
        addressing_style = "path" if self.config.path_style_access else "auto"
        kwargs: Dict[str, Any] = {
            "region_name": self.config.region,
            "config": Config(
                signature_version="s3v4", s3={"addressing_style": addressing_style}
            ),
        }

        if self.config.endpoint_url:
            kwargs["endpoint_url"] = self.config.endpoint_url

        if self.config.aws_profile:
            session = boto3.Session(profile_name=self.config.aws_profile)
            client = session.client("s3", **kwargs)  # type: ignore
            logger.info(
                "S3 client created with profile", profile=self.config.aws_profile
            )
        else:
            if self.config.access_key and self.config.secret_key:
                kwargs.update(
                    {
                        "aws_access_key_id": self.config.access_key,
                        "aws_secret_access_key": self.config.secret_key,
                    }
                )
                if self.config.session_token:
                    kwargs["aws_session_token"] = self.config.session_token
                logger.info("S3 client created with explicit credentials")
            else:
                logger.info("S3 client created with default credential chain")

            client = boto3.client("s3", **kwargs)  # type: ignore

        return client


class S3ObjectStore:
    """ObjectStore implementation over a boto3 S3 client.

    Backend failures surface as botocore ``ClientError`` and are left for the
    caller to translate.
    """

    def __init__(self, client):
        self._client = client

    @classmethod
    def from_config(cls, config: S3SourceConfig) -> "S3ObjectStore":
        return cls(S3ClientManager(config).client)

    def list_page(
        self,
        bucket: str,
        prefix: str,
        delimiter: Optional[str],
        max_keys: int,
        continuation_token: Optional[str] = None,
    ) -> ListPage:
        params: Dict[str, Any] = {"Bucket": bucket, "Prefix": prefix, "MaxKeys": max_keys}
        if delimiter:
            params["Delimiter"] = delimiter
        if continuation_token:
            params["ContinuationToken"] = continuation_token

        response = self._client.list_objects_v2(**params)
        return ListPage(
            folders=tuple(
                common["Prefix"] for common in response.get("CommonPrefixes", [])
            ),
            objects=tuple(
                ObjectSummary(
                    key=obj["Key"],
                    size=obj.get("Size", 0),
                    last_modified=obj.get("LastModified"),
                    etag=obj.get("ETag"),
                )
                for obj in response.get("Contents", [])
            ),
            truncated=response.get("IsTruncated", False),
            next_token=response.get("NextContinuationToken"),
        )

    def open_object(self, bucket: str, key: str) -> tuple[BinaryIO, ObjectMetadata]:
        response = self._client.get_object(Bucket=bucket, Key=key)
        return response["Body"], ObjectMetadata(
            content_length=response.get("ContentLength"),
            content_type=response.get("ContentType"),
        )

    def get_metadata(self, bucket: str, key: str) -> ObjectMetadata:
        response = self._client.head_object(Bucket=bucket, Key=key)
        return ObjectMetadata(
            content_length=response.get("ContentLength"),
            content_type=response.get("ContentType"),
        )

    def list_all_buckets(self) -> list[str]:
        response = self._client.list_buckets()
        return [bucket["Name"] for bucket in response.get("Buckets", [])]
