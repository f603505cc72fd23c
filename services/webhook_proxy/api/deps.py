"""
Dependency Injection for the webhook proxy API.

Manage request handler dependencies using FastAPI Depends.
"""

from typing import Annotated
from fastapi import Depends, Request

from ..core.adapters import StarletteRequest, adapt
from ..models.raw_request import RawRequest
from ..services.handler import WebhookService


def get_webhook_service(request: Request) -> WebhookService:
    return request.app.state.webhook_service


async def get_raw_request(request: Request) -> RawRequest:
    """Read the body and reduce the Starlette request to a RawRequest."""
    return adapt(await StarletteRequest.read(request))


WebhookServiceDep = Annotated[WebhookService, Depends(get_webhook_service)]
RawRequestDep = Annotated[RawRequest, Depends(get_raw_request)]
