"""
Webhook Proxy - aiohttp host

Event-loop server exposing the same routes as the FastAPI host.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from aiohttp import web

from services.common.core.request_context import (
    TRACE_ID_HEADER,
    clear_request_id,
    clear_trace_id,
    set_request_id,
    set_trace_id,
)

from .config import WebhookProxyConfig, config
from .core.adapters import AiohttpRequest, adapt
from .core.aggregator import to_aiohttp_response
from .core.exceptions import ProviderNotFoundError
from .lifecycle import webhook_service
from .middleware import REQUEST_ID_HEADER
from .services.handler import WebhookService

logger = logging.getLogger("webhook_proxy.aiohttp")

SERVICE_KEY = web.AppKey("webhook_service", WebhookService)


@web.middleware
async def request_id_middleware(request: web.Request, handler):
    trace_id = set_trace_id(request.headers.get(TRACE_ID_HEADER))
    req_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))
    try:
        response = await handler(request)
        response.headers[TRACE_ID_HEADER] = trace_id
        response.headers[REQUEST_ID_HEADER] = req_id
        logger.info(
            f"{request.method} {request.path} {response.status}",
            extra={"trace_id": trace_id, "request_id": req_id, "path": request.path, "status": response.status},
        )
        return response
    finally:
        clear_trace_id()
        clear_request_id()


async def health_check(request: web.Request) -> web.Response:
    return web.json_response(
        {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}
    )


async def receive_webhook(request: web.Request) -> web.Response:
    provider = request.match_info["provider"]
    service = request.app[SERVICE_KEY]
    raw_request = adapt(await AiohttpRequest.read(request))

    try:
        info = await service.handle(provider, raw_request)
    except ProviderNotFoundError as e:
        return web.json_response({"message": str(e)}, status=404)

    return to_aiohttp_response(info)


def create_aiohttp_app(
    service: Optional[WebhookService] = None,
    proxy_config: WebhookProxyConfig = config,
) -> web.Application:
    """
    Build the aiohttp application.

    Args:
        service: Pre-built WebhookService (tests); built from proxy_config on
            startup when omitted
        proxy_config: Configuration used to build the service
    """
    app = web.Application(middlewares=[request_id_middleware])
    app.router.add_get("/health", health_check)
    app.router.add_post("/webhook/{provider}", receive_webhook)

    if service is not None:
        app[SERVICE_KEY] = service
        return app

    async def service_context(app: web.Application):
        async with webhook_service(proxy_config) as built:
            app[SERVICE_KEY] = built
            yield

    app.cleanup_ctx.append(service_context)
    return app


if __name__ == "__main__":
    from .core.logging_config import setup_logging

    setup_logging()
    web.run_app(create_aiohttp_app(), host=config.host, port=config.port)
