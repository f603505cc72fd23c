"""
Custom exception classes.

Represent errors raised around the webhook pipeline. The decoding core
itself never raises; these come from normalizers, delivery and routing.
"""

import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("webhook_proxy.exceptions")


class WebhookProxyError(Exception):
    """Base exception class for the webhook proxy."""

    pass


class MalformedPayloadError(WebhookProxyError):
    """Raised by a normalizer when the message bytes are not the expected JSON."""

    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"Malformed {provider} payload: {reason}")


class DeliveryError(WebhookProxyError):
    """Raised when a delivery adapter cannot reach its destination."""

    def __init__(self, adapter: str, cause: Exception):
        self.adapter = adapter
        self.cause = cause
        super().__init__(f"Delivery via {adapter} failed: {cause}")


class ProviderNotFoundError(WebhookProxyError):
    """Raised when no provider is registered under the requested key."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Provider not found: {provider}")


# ===========================================
# Exception Handlers
# ===========================================


async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler for unhandled exceptions.
    """
    logger.error(
        f"Global exception handler caught: {exc}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error", "detail": str(exc)},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Handler for HTTPException.
    """
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for validation errors.
    """
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"message": "Validation Error", "detail": str(exc.errors())},
    )


async def provider_not_found_handler(request: Request, exc: ProviderNotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"message": str(exc)},
    )
