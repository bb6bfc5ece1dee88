"""
Lambda handler responsible for listing and deleting gallery items.
"""

import base64
import binascii
import json
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.infrastructure.adapters.mongodb_adapter import MongoDBSession
from core.infrastructure.mongo.gallery_store import MongoGalleryStore
from core.models.errors import ValidationError
from core.models.gallery import GalleryItemView
from core.models.pagination import CursorPage, ListMode
from core.utils.auth import verify_bearer_token
from core.utils.constants import GALLERY_METHODS, LIST_CACHE_CONTROL, METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import DeleteGalleryItemRequest, DeleteGalleryItemResponse, ListGalleryRequest
from .service import GalleryService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


def _parse_json_body(event: dict[str, Any]) -> dict[str, Any]:
    """Best-effort JSON object from the request body; anything else is empty."""
    raw = event.get("body")
    if not raw:
        return {}

    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw).decode("utf-8")
        body = json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError):
        logger.debug("Ignoring unparseable request body")
        return {}

    return body if isinstance(body, dict) else {}


def _extract_delete_id(event: dict[str, Any]) -> Any:
    query_params = event.get("queryStringParameters") or {}
    return _parse_json_body(event).get("id") or query_params.get("id")


def _legacy_response(items: list[GalleryItemView]) -> dict[str, Any]:
    return ResponseBuilder.ok(
        [item.model_dump(mode="json") for item in items],
        cache_control=LIST_CACHE_CONTROL,
    )


def _cursor_response(page: CursorPage) -> dict[str, Any]:
    return ResponseBuilder.ok(
        page.model_dump(mode="json", by_alias=True),
        cache_control=LIST_CACHE_CONTROL,
    )


def _list(event: dict[str, Any]) -> dict[str, Any]:
    params = event.get("queryStringParameters") or {}
    request = validate_request(ListGalleryRequest, params)

    with MongoDBSession.from_env() as collection:
        service = GalleryService(MongoGalleryStore(collection))

        if request.mode is ListMode.CURSOR:
            return _cursor_response(service.list_page(limit=request.limit, cursor=request.cursor))

        return _legacy_response(service.list_legacy(limit=request.limit))


def _delete(event: dict[str, Any]) -> dict[str, Any]:
    item_id = _extract_delete_id(event)
    if not item_id:
        raise ValidationError(message="Missing id")

    request = validate_request(DeleteGalleryItemRequest, {"id": item_id})

    with MongoDBSession.from_env() as collection:
        service = GalleryService(MongoGalleryStore(collection))
        deleted_id = service.delete_item(request.id)

    response = DeleteGalleryItemResponse(deleted_id=deleted_id)
    return ResponseBuilder.ok(response.model_dump(by_alias=True))


@api_gateway_handler(methods=GALLERY_METHODS)
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle gallery list and delete requests.

    This function:
    - Rejects requests without a valid bearer token before touching the store
    - GET: cursor page when `limit` or `cursor` is given, legacy array otherwise
    - DELETE: removes the item named by the body or query `id`

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info(
        "Received gallery request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "query_params": event.get("queryStringParameters"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    verify_bearer_token(event.get("headers"))

    if (event.get("httpMethod") or "GET").upper() == "DELETE":
        return _delete(event)

    return _list(event)
