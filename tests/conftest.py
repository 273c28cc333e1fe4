"""
Pytest configuration and fixtures for image pipeline tests.
Provides AWS mocking, S3 fixtures with cleanup, an in-memory storage
double and Pillow-generated images.
"""

import io
import os
from collections.abc import Callable
from typing import Any

# Must be set before any module builds boto3 clients or powertools objects
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["AWS_SECURITY_TOKEN"] = "testing"
os.environ["AWS_SESSION_TOKEN"] = "testing"
os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("IMAGE_S3_BUCKET_NAME", "storefront-images-test")
os.environ.setdefault("IMAGE_DOWNLOAD_BASE_URL", "https://images.storefront.test")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "storefront-images")

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws
from PIL import Image

from core.repositories.storage_repository import BytesSentCallback, ImageStorageRepository
from core.utils.storage_urls import build_download_url

TEST_BUCKET = os.environ["IMAGE_S3_BUCKET_NAME"]


class InMemoryImageStorage(ImageStorageRepository):
    """Storage double that reports progress in fixed-size chunks."""

    def __init__(
        self,
        *,
        chunk_size: int = 64 * 1024,
        write_exc: Exception | None = None,
        url_exc: Exception | None = None,
        remove_exc: Exception | None = None,
    ) -> None:
        self.chunk_size = chunk_size
        self.write_exc = write_exc
        self.url_exc = url_exc
        self.remove_exc = remove_exc
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.removed: list[str] = []
        self.url_requests: list[str] = []

    def write_image(
        self,
        *,
        key: str,
        file_data: bytes,
        mime_type: str,
        on_bytes_sent: BytesSentCallback | None = None,
    ) -> None:
        if self.write_exc:
            raise self.write_exc

        for start in range(0, len(file_data), self.chunk_size):
            if on_bytes_sent:
                on_bytes_sent(len(file_data[start : start + self.chunk_size]))

        self.objects[key] = (file_data, mime_type)

    def get_download_url(self, *, key: str) -> str:
        self.url_requests.append(key)
        if self.url_exc:
            raise self.url_exc
        return build_download_url(key, f"token-{len(self.url_requests)}", bucket=TEST_BUCKET)

    def remove_image(self, *, key: str) -> None:
        self.removed.append(key)
        if self.remove_exc:
            raise self.remove_exc
        self.objects.pop(key, None)


@pytest.fixture
def memory_storage() -> InMemoryImageStorage:
    return InMemoryImageStorage()


@pytest.fixture
def storage_factory() -> type[InMemoryImageStorage]:
    """Build storage doubles with injected failures."""
    return InMemoryImageStorage


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """
    Factory for encoded test images.

    Usage:
        data = make_image(1600, 1200, "JPEG")
    """

    def _make(
        width: int = 10,
        height: int = 10,
        image_format: str = "JPEG",
        mode: str = "RGB",
        **save_kwargs: Any,
    ) -> bytes:
        color: Any = (200, 80, 40, 128) if mode == "RGBA" else (200, 80, 40)
        img = Image.new(mode, (width, height), color=color)
        buffer = io.BytesIO()
        img.save(buffer, format=image_format, **save_kwargs)
        return buffer.getvalue()

    return _make


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


def _cleanup_s3_objects(s3_client, bucket_name):
    """Helper to delete all objects from S3 bucket efficiently."""
    try:
        paginator = s3_client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket_name):
            objects = page.get("Contents", [])
            if objects:
                delete_keys = [{"Key": obj["Key"]} for obj in objects]
                s3_client.delete_objects(
                    Bucket=bucket_name, Delete={"Objects": delete_keys}
                )
    except ClientError as e:
        if e.response["Error"]["Code"] != "NoSuchBucket":
            raise


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """
    Create and manage S3 bucket for testing.

    Cleanup Strategy:
    - Objects are deleted after each test (teardown)
    - Bucket is NOT deleted (moto cleans up on context exit)
    """
    try:
        s3_client.head_bucket(Bucket=TEST_BUCKET)
    except ClientError:
        s3_client.create_bucket(Bucket=TEST_BUCKET)

    yield s3_client

    _cleanup_s3_objects(s3_client, TEST_BUCKET)


@pytest.fixture
def s3_put_object(s3_client) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        response = s3_put_object("categories/1_a.jpg", image_bytes, "image/jpeg")
    """

    def _put(
        key: str,
        body: bytes,
        content_type: str = "application/octet-stream",
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        return s3_client.put_object(
            Bucket=TEST_BUCKET,
            Key=key,
            Body=body,
            ContentType=content_type,
            Metadata=metadata or {},
        )

    return _put


@pytest.fixture
def s3_get_object(s3_client) -> Callable[[str], dict[str, Any]]:
    """
    Helper to get an object (body bytes plus headers) from S3.

    Usage:
        obj = s3_get_object("categories/1_a.jpg")
        obj["Body"], obj["ContentType"]
    """

    def _get(key: str) -> dict[str, Any]:
        response: dict[str, Any] = s3_client.get_object(Bucket=TEST_BUCKET, Key=key)
        return {**response, "Body": response["Body"].read()}

    return _get


@pytest.fixture
def s3_object_exists(s3_client) -> Callable[[str], bool]:
    def _exists(key: str) -> bool:
        try:
            s3_client.head_object(Bucket=TEST_BUCKET, Key=key)
        except ClientError as e:
            if e.response["Error"]["Code"] in ("404", "NoSuchKey"):
                return False
            raise
        return True

    return _exists
