"""Test configuration and fixtures for bucket-browser."""

import io
from dataclasses import dataclass
from typing import Optional

import pytest
from botocore.exceptions import ClientError

from bucket_browser.objectstorage.models import (
    BackendSource,
    ListPage,
    ObjectMetadata,
)


_UNSET = object()


@dataclass(frozen=True)
class ListCall:
    """One recorded list_page invocation."""

    bucket: str
    prefix: str
    delimiter: Optional[str]
    max_keys: int
    continuation_token: Optional[str]


class FakeObjectStore:
    """Scripted ObjectStore returning canned pages and bodies.

    Delimited listings are looked up by continuation token, recursive
    listings by ``(prefix, continuation_token)``.
    """

    def __init__(self):
        self.delimited_pages: dict[Optional[str], ListPage] = {}
        self.recursive_pages: dict[tuple[str, Optional[str]], ListPage] = {}
        self.bodies: dict[str, io.IOBase] = {}
        self.lengths: dict[str, Optional[int]] = {}
        self.buckets: list[str] = []
        self.list_error: Optional[Exception] = None
        self.open_error: Optional[Exception] = None
        self.buckets_error: Optional[Exception] = None
        self.list_calls: list[ListCall] = []
        self.opened_keys: list[str] = []

    def add_body(self, key: str, content: bytes, length=_UNSET) -> None:
        self.bodies[key] = io.BytesIO(content)
        self.lengths[key] = len(content) if length is _UNSET else length

    def list_page(self, bucket, prefix, delimiter, max_keys, continuation_token=None):
        self.list_calls.append(
            ListCall(bucket, prefix, delimiter, max_keys, continuation_token)
        )
        if self.list_error is not None:
            raise self.list_error
        if delimiter is None:
            return self.recursive_pages.get((prefix, continuation_token), ListPage())
        return self.delimited_pages.get(continuation_token, ListPage())

    def open_object(self, bucket, key):
        self.opened_keys.append(key)
        if self.open_error is not None:
            raise self.open_error
        return self.bodies[key], ObjectMetadata(
            content_length=self.lengths.get(key), content_type="application/octet-stream"
        )

    def get_metadata(self, bucket, key):
        return ObjectMetadata(content_length=self.lengths.get(key))

    def list_all_buckets(self):
        if self.buckets_error is not None:
            raise self.buckets_error
        return list(self.buckets)

    def delimited_calls(self) -> list[ListCall]:
        return [call for call in self.list_calls if call.delimiter is not None]

    def recursive_calls(self) -> list[ListCall]:
        return [call for call in self.list_calls if call.delimiter is None]


def build_client_error(status: int, code: str = "Error", operation: str = "ListObjectsV2"):
    return ClientError(
        {
            "Error": {"Code": code, "Message": f"{code} message"},
            "ResponseMetadata": {"HTTPStatusCode": status},
        },
        operation,
    )


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never reaches a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def fake_store():
    """Empty scripted object store."""
    return FakeObjectStore()


@pytest.fixture
def source(fake_store):
    """Backend source wrapping the fake store."""
    return BackendSource(
        name="primary",
        display_name="Primary",
        default_bucket="default-bucket",
        store=fake_store,
    )


@pytest.fixture
def client_error():
    """Factory for botocore ClientError with a given HTTP status."""
    return build_client_error


@pytest.fixture
def other_store():
    """Second scripted store for multi-source tests."""
    return FakeObjectStore()
