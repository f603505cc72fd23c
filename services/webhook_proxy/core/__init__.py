"""
Core logic package.

Provides transport adaptation, body decoding, query parameter extraction,
HookData assembly and response aggregation.
"""

from .adapters import AiohttpRequest, GatewayEventRequest, RequestSource, StarletteRequest, adapt
from .aggregator import aggregate, encode_response_body, max_status_code
from .assembler import assemble
from .body_decoder import decode_body
from .query_params import extract_query_params

__all__ = [
    "AiohttpRequest",
    "GatewayEventRequest",
    "RequestSource",
    "StarletteRequest",
    "adapt",
    "aggregate",
    "assemble",
    "decode_body",
    "encode_response_body",
    "extract_query_params",
    "max_status_code",
]
