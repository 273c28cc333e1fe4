"""Tests for the low-level S3 adapter against a mocked S3."""

import io

import pytest
from botocore.exceptions import ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter

BUCKET = "storefront-images-test"


def test_missing_bucket_name_is_a_configuration_error(monkeypatch) -> None:
    monkeypatch.delenv("IMAGE_S3_BUCKET_NAME")

    with pytest.raises(RuntimeError, match="IMAGE_S3_BUCKET_NAME"):
        S3Adapter()


def test_bucket_comes_from_environment(aws_mock) -> None:
    assert S3Adapter().bucket == BUCKET


def test_upload_fileobj_stores_body_and_metadata(s3_bucket, s3_get_object) -> None:
    sent: list[int] = []

    S3Adapter().upload_fileobj(
        key="items/1_a.png",
        fileobj=io.BytesIO(b"png-bytes"),
        content_type="image/png",
        metadata={"download-token": "tok"},
        callback=sent.append,
    )

    obj = s3_get_object("items/1_a.png")
    assert obj["Body"] == b"png-bytes"
    assert obj["ContentType"] == "image/png"
    assert obj["Metadata"] == {"download-token": "tok"}
    assert sum(sent) == len(b"png-bytes")


def test_multipart_upload_reports_every_byte(s3_bucket, s3_get_object) -> None:
    payload = b"\x01" * (1024 * 1024)
    sent: list[int] = []

    S3Adapter().upload_fileobj(
        key="items/1_big.jpg",
        fileobj=io.BytesIO(payload),
        content_type="image/jpeg",
        metadata={},
        callback=sent.append,
    )

    assert sum(sent) == len(payload)
    assert s3_get_object("items/1_big.jpg")["Body"] == payload


def test_head_object_returns_metadata(s3_bucket, s3_put_object) -> None:
    s3_put_object("items/1_a.jpg", b"x", "image/jpeg", {"download-token": "abc"})

    response = S3Adapter().head_object(key="items/1_a.jpg")

    assert response["Metadata"] == {"download-token": "abc"}
    assert response["ContentType"] == "image/jpeg"


def test_head_missing_object_raises_client_error(s3_bucket) -> None:
    with pytest.raises(ClientError):
        S3Adapter().head_object(key="items/missing.jpg")


def test_delete_object(s3_bucket, s3_put_object, s3_object_exists) -> None:
    s3_put_object("items/1_a.jpg", b"x")

    S3Adapter().delete_object(key="items/1_a.jpg")

    assert not s3_object_exists("items/1_a.jpg")
