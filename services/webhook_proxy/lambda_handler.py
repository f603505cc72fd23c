"""
Webhook Proxy - AWS Lambda host

API Gateway v1 proxy integration entrypoint. The provider key is taken from
the {provider} path parameter.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

from services.common.core.request_context import (
    TRACE_ID_HEADER,
    clear_request_id,
    clear_trace_id,
    set_request_id,
    set_trace_id,
)

from .config import config
from .core.adapters import GatewayEventRequest, adapt
from .core.aggregator import JSON_HEADERS, to_api_gateway_response
from .core.exceptions import ProviderNotFoundError
from .core.logging_config import setup_logging
from .lifecycle import webhook_service
from .models.aws_v1 import APIGatewayProxyEvent, APIGatewayProxyResponse

setup_logging()
logger = logging.getLogger("webhook_proxy.lambda")


async def handle_event(event: APIGatewayProxyEvent) -> Dict[str, Any]:
    provider_name = (event.pathParameters or {}).get("provider", "")

    async with webhook_service(config) as service:
        try:
            handler = service.handler_for(provider_name)
        except ProviderNotFoundError as e:
            return APIGatewayProxyResponse(
                statusCode=404,
                body=json.dumps({"message": str(e)}),
                headers=dict(JSON_HEADERS),
            ).model_dump()

        raw_request = adapt(GatewayEventRequest(event, handler.provider.body_encoding))
        info = await handler.handle(raw_request)
        return to_api_gateway_response(info)


def _trace_header(event: APIGatewayProxyEvent) -> Optional[str]:
    for name, value in (event.headers or {}).items():
        if name.lower() == TRACE_ID_HEADER.lower():
            return value
    return None


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    gateway_event = APIGatewayProxyEvent.model_validate(event or {})
    set_trace_id(_trace_header(gateway_event))
    set_request_id(getattr(context, "aws_request_id", None))
    try:
        return asyncio.run(handle_event(gateway_event))
    finally:
        clear_trace_id()
        clear_request_id()
