"""
Response aggregation.

Folds the outcome of every delivery attempt into one status code using the
max-status rule and encodes the result for each transport.
"""

import json
import logging
from typing import Dict, Sequence

from aiohttp import web
from pydantic_core import PydanticSerializationError
from starlette.responses import Response

from ..models.aws_v1 import APIGatewayProxyResponse
from ..models.hook_data import HookData
from ..models.response import ErrorInfo, ResponseInfo

logger = logging.getLogger("webhook_proxy.aggregator")

STATUS_OK = 200
JSON_HEADERS: Dict[str, str] = {"Content-Type": "application/json"}


def max_status_code(errors: Sequence[ErrorInfo]) -> int:
    """
    Overall status for a fan-out.

    No outcome -> 200, a single outcome -> its status, several -> the highest,
    never below 200.
    """
    if not errors:
        return STATUS_OK
    if len(errors) == 1:
        return errors[0].status_code
    return max(STATUS_OK, *(error.status_code for error in errors))


def aggregate(hook_data: HookData, errors: Sequence[ErrorInfo]) -> ResponseInfo:
    return ResponseInfo(
        hook_data=hook_data,
        responses=list(errors),
        status_code=max_status_code(errors),
    )


def encode_response_body(info: ResponseInfo) -> bytes:
    """
    JSON body for a ResponseInfo, b"" if it cannot be serialized.
    """
    try:
        data = info.model_dump(mode="json", by_alias=True, exclude_defaults=True)
        return json.dumps(data, ensure_ascii=False).encode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as e:
        logger.error(
            f"Failed to serialize webhook response: {e}",
            extra={"status_code": info.status_code},
        )
        return b""


def to_api_gateway_response(info: ResponseInfo) -> Dict[str, object]:
    """Lambda proxy integration response dict."""
    return APIGatewayProxyResponse(
        statusCode=info.status_code,
        body=encode_response_body(info).decode("utf-8"),
        headers=dict(JSON_HEADERS),
    ).model_dump()


def to_starlette_response(info: ResponseInfo) -> Response:
    return Response(
        content=encode_response_body(info),
        status_code=info.status_code,
        media_type="application/json",
    )


def to_aiohttp_response(info: ResponseInfo) -> web.Response:
    return web.Response(
        body=encode_response_body(info),
        status=info.status_code,
        content_type="application/json",
    )
