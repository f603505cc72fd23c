"""
Where: services/webhook_proxy/lifecycle.py
What: Startup/shutdown of the shared HTTP client and provider registry.
Why: Keep main.py focused on app assembly; reused by the aiohttp host.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from services.common.core.http_client import HttpClientFactory

from .config import WebhookProxyConfig
from .services.handler import WebhookService
from .services.normalizers import default_registry

logger = logging.getLogger("webhook_proxy.main")


@asynccontextmanager
async def webhook_service(proxy_config: WebhookProxyConfig) -> AsyncIterator[WebhookService]:
    """Yield a WebhookService whose HTTP client is closed on exit."""
    factory = HttpClientFactory(proxy_config)
    client = factory.create_async_client(timeout=proxy_config.DELIVERY_TIMEOUT)
    registry = default_registry(
        proxy_config.PROVIDERS_CONFIG_PATH, proxy_config.DEFAULT_BODY_ENCODING
    )
    logger.info(f"Webhook proxy initialized with providers: {', '.join(registry.names())}")

    try:
        yield WebhookService(registry, client)
    finally:
        await client.aclose()


@asynccontextmanager
async def manage_lifespan(app: FastAPI, proxy_config: WebhookProxyConfig) -> AsyncIterator[None]:
    """Manage application lifecycle."""
    async with webhook_service(proxy_config) as service:
        app.state.webhook_service = service
        yield
        logger.info("Webhook proxy shutting down, closing http client.")
