"""
RequestContext management.
Use ContextVar to share the Trace ID and Request ID across async execution.
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Optional

from .trace import TraceId

logger = logging.getLogger(__name__)

TRACE_ID_HEADER = "X-Amzn-Trace-Id"

# Context variable for Trace ID (full header format).
_trace_id_var: ContextVar[Optional[str]] = ContextVar("trace_id", default=None)
# Context variable for Request ID (caller supplied or UUID).
_request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_trace_id() -> Optional[str]:
    """Get the current Trace ID."""
    return _trace_id_var.get()


def get_request_id() -> Optional[str]:
    """Get the current Request ID."""
    return _request_id_var.get()


def set_trace_id(header: Optional[str] = None) -> str:
    """
    Set the Trace ID for the current context.

    Args:
        header: Incoming X-Amzn-Trace-Id value. Missing or unparsable values
            are replaced by a freshly generated trace.

    Returns:
        The full Trace ID string that was set
    """
    trace = None
    if header and header.strip():
        try:
            trace = TraceId.parse(header)
        except ValueError as e:
            logger.warning(f"Failed to parse incoming {TRACE_ID_HEADER}: {e}")
    if trace is None:
        trace = TraceId.generate()

    _trace_id_var.set(str(trace))
    return str(trace)


def set_request_id(request_id: Optional[str] = None) -> str:
    """
    Set the Request ID for the current context.

    Args:
        request_id: Incoming X-Request-Id header value. Blank values are
            replaced by a freshly generated UUID.

    Returns:
        The Request ID that was set
    """
    if request_id is None or not request_id.strip():
        request_id = str(uuid.uuid4())
    else:
        request_id = request_id.strip()
    _request_id_var.set(request_id)
    return request_id


def clear_trace_id() -> None:
    """Clear the Trace ID context."""
    _trace_id_var.set(None)


def clear_request_id() -> None:
    """Clear the Request ID context."""
    _request_id_var.set(None)
