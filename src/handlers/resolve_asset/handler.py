"""
Lambda handler responsible for resolving Telegram assets.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.asset import AssetUrlResponse
from core.models.errors import ValidationError
from core.utils.constants import (
    ASSET_CACHE_CONTROL,
    ASSET_METHODS,
    ASSET_FORMAT_URL,
    METRIC_ASSET_RESOLVED,
    METRIC_PROVIDER_FALLBACK,
    METRICS_NAMESPACE,
    PROVIDER_PRIMARY,
)
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import ResolveAssetRequest
from .service import AssetResolverService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


def _record_resolution(provider: str) -> None:
    metrics.add_dimension(name="provider", value=provider)
    metrics.add_metric(name=METRIC_ASSET_RESOLVED, unit=MetricUnit.Count, value=1)
    if provider != PROVIDER_PRIMARY:
        metrics.add_metric(name=METRIC_PROVIDER_FALLBACK, unit=MetricUnit.Count, value=1)


@api_gateway_handler(methods=ASSET_METHODS)
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle asset resolution requests.

    This function:
     - Default (format=raw): relay the media bytes with a long-lived cache header
     - format=url: return the resolved file URL as JSON
    Args:
        event: API Gateway event payload.
        context: AWS Lambda runtime context.

    Returns:
        API Gateway-compatible response dictionary.
    """
    query_params = event.get("queryStringParameters") or {}

    logger.info(
        "Received asset resolution request",
        extra={
            "http_method": event.get("httpMethod"),
            "file_id": query_params.get("file_id"),
            "format": query_params.get("format"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    if not query_params.get("file_id"):
        raise ValidationError(message="file_id required")

    request = validate_request(ResolveAssetRequest, query_params)
    with AssetResolverService() as service:
        if request.format == ASSET_FORMAT_URL:
            resolved_url = service.resolve_url(request.file_id)
            _record_resolution(resolved_url.provider)
            return ResponseBuilder.ok(AssetUrlResponse(url=resolved_url.url).model_dump())

        resolved = service.resolve_content(request.file_id)

    _record_resolution(resolved.provider)

    return ResponseBuilder.binary_response(
        resolved.content,
        content_type=resolved.content_type,
        cache_control=ASSET_CACHE_CONTROL,
    )
