"""
Where: services/webhook_proxy/middleware.py
What: HTTP middleware for trace and request ID propagation and access logging.
Why: Isolate cross-cutting request concerns from app assembly.
"""

import logging
import time

from fastapi import Request

from services.common.core.request_context import (
    TRACE_ID_HEADER,
    clear_request_id,
    clear_trace_id,
    set_request_id,
    set_trace_id,
)

logger = logging.getLogger("webhook_proxy.main")

REQUEST_ID_HEADER = "X-Request-Id"


async def request_id_middleware(request: Request, call_next):
    """Middleware for Trace ID and Request ID propagation and structured access logging."""
    start_time = time.perf_counter()
    trace_id = set_trace_id(request.headers.get(TRACE_ID_HEADER))
    req_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))

    try:
        response = await call_next(request)
        response.headers[TRACE_ID_HEADER] = trace_id
        response.headers[REQUEST_ID_HEADER] = req_id

        process_time_ms = round((time.perf_counter() - start_time) * 1000, 2)

        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "trace_id": trace_id,
                "request_id": req_id,
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "latency_ms": process_time_ms,
                "user_agent": request.headers.get("user-agent"),
                "client_ip": request.client.host if request.client else None,
            },
        )

        return response
    finally:
        clear_trace_id()
        clear_request_id()
