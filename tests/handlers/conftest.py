import base64
import json
from types import SimpleNamespace
from typing import Any

import pytest


@pytest.fixture
def lambda_context(monkeypatch):
    context = SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )

    monkeypatch.setattr(
        "aws_lambda_powertools.utilities.typing.LambdaContext",
        lambda: context,
        raising=False,
    )

    return context


@pytest.fixture
def upload_event():
    """
    Build an upload event around encoded image bytes.

    Usage:
        event = upload_event(png_bytes, file_name="a.png", upload_path="items")
    """

    def _event(file_data: bytes, **fields: Any) -> dict[str, Any]:
        body = {
            "file": base64.b64encode(file_data).decode("utf-8"),
            "file_name": "photo.png",
            "upload_path": "categories",
            **fields,
        }
        return {
            "httpMethod": "POST",
            "path": "/images",
            "body": json.dumps(body),
            "headers": {"Content-Type": "application/json"},
        }

    return _event


@pytest.fixture
def delete_event():
    def _event(image_url: str | None) -> dict[str, Any]:
        return {
            "httpMethod": "DELETE",
            "path": "/images",
            "queryStringParameters": {"image_url": image_url} if image_url is not None else None,
        }

    return _event
