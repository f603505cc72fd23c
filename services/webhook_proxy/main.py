"""
Webhook Proxy - FastAPI host

Receives webhooks on /webhook/{provider}, normalizes them into canonical
chat messages and fans them out to the requested outputs.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI

from .api.deps import RawRequestDep, WebhookServiceDep
from .config import config
from .core.aggregator import to_starlette_response
from .core.logging_config import setup_logging
from .exceptions import register_exception_handlers
from .lifecycle import manage_lifespan
from .middleware import request_id_middleware

# Logger setup
setup_logging()
logger = logging.getLogger("webhook_proxy.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with manage_lifespan(app, config):
        yield


app = FastAPI(title="Webhook Proxy", version="1.0.0", lifespan=lifespan, root_path=config.root_path)

app.middleware("http")(request_id_middleware)
register_exception_handlers(app)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.post("/webhook/{provider}")
async def receive_webhook(provider: str, raw_request: RawRequestDep, service: WebhookServiceDep):
    """
    Webhook endpoint.

    Unknown providers raise ProviderNotFoundError (404). Every other outcome,
    including malformed payloads, is reported through the aggregated
    ResponseInfo status code.
    """
    info = await service.handle(provider, raw_request)
    return to_starlette_response(info)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.host, port=config.port)
