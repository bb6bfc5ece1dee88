import json
from collections.abc import Callable
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
def api_event(auth_headers) -> Callable[..., dict[str, Any]]:
    """
    Build an API Gateway proxy event, authenticated unless headers are given.

    Usage:
        event = api_event("DELETE", body={"id": "..."})
    """

    def _event(
        method: str = "GET",
        *,
        query: dict[str, str] | None = None,
        body: Any = None,
        headers: dict[str, str] | None = None,
        path: str = "/api/gallery",
    ) -> dict[str, Any]:
        return {
            "httpMethod": method,
            "path": path,
            "queryStringParameters": query,
            "headers": auth_headers if headers is None else headers,
            "body": json.dumps(body) if body is not None and not isinstance(body, str) else body,
            "isBase64Encoded": False,
        }

    return _event
