"""Thin adapter for interacting with Amazon S3."""

from collections.abc import Callable, Mapping
import os
from typing import Any, BinaryIO, Protocol

import boto3
from boto3.s3.transfer import TransferConfig

from core.utils.constants import (
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_IMAGE_S3_BUCKET_NAME,
    MULTIPART_CHUNKSIZE,
    MULTIPART_THRESHOLD,
)


class _Boto3S3Client(Protocol):
    """Internal typing for boto3 S3 client (AWS-facing only)."""

    def upload_fileobj(
        self,
        Fileobj: BinaryIO,
        Bucket: str,
        Key: str,
        ExtraArgs: Mapping[str, Any] | None = None,
        Callback: Callable[[int], None] | None = None,
        Config: TransferConfig | None = None,
    ) -> None: ...

    def head_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Mapping[str, Any]: ...

    def delete_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Any: ...


class S3AdapterProtocol(Protocol):
    """Minimal S3 adapter protocol (repository-facing)."""

    @property
    def bucket(self) -> str: ...

    def upload_fileobj(
        self,
        *,
        key: str,
        fileobj: BinaryIO,
        content_type: str,
        metadata: dict[str, str],
        callback: Callable[[int], None] | None = None,
    ) -> None: ...

    def head_object(self, *, key: str) -> Mapping[str, Any]: ...

    def delete_object(self, *, key: str) -> None: ...


class S3Adapter:
    """Low-level S3 operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 S3 client and its managed transfer
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self) -> None:
        """Create S3 client from environment configuration."""
        bucket_name = os.getenv(ENV_IMAGE_S3_BUCKET_NAME)
        if not bucket_name:
            raise RuntimeError(f"{ENV_IMAGE_S3_BUCKET_NAME} environment variable is not set")

        self._bucket = bucket_name
        self._client: _Boto3S3Client = boto3.client(
            "s3",
            endpoint_url=os.getenv(ENV_AWS_ENDPOINT_URL),
            region_name=os.getenv(ENV_AWS_REGION),
        )
        # Callbacks must fire on the caller's thread, in order
        self._transfer_config = TransferConfig(
            multipart_threshold=MULTIPART_THRESHOLD,
            multipart_chunksize=MULTIPART_CHUNKSIZE,
            use_threads=False,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def upload_fileobj(
        self,
        *,
        key: str,
        fileobj: BinaryIO,
        content_type: str,
        metadata: dict[str, str],
        callback: Callable[[int], None] | None = None,
    ) -> None:
        """Stream a file-like object to S3 through the managed transfer.

        `callback` receives the number of bytes sent since the previous call.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.upload_fileobj(
            fileobj,
            self._bucket,
            key,
            ExtraArgs={"ContentType": content_type, "Metadata": metadata},
            Callback=callback,
            Config=self._transfer_config,
        )

    def head_object(self, *, key: str) -> Mapping[str, Any]:
        """Fetch object metadata from S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        return self._client.head_object(
            Bucket=self._bucket,
            Key=key,
        )

    def delete_object(self, *, key: str) -> None:
        """Delete object from S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.delete_object(
            Bucket=self._bucket,
            Key=key,
        )
