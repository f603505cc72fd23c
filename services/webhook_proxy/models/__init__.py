"""
Data model definitions package.

Aggregates Pydantic models for use in other modules.
"""

from .aws_v1 import APIGatewayProxyEvent, APIGatewayProxyResponse
from .hook_data import BodyEncoding, HookData
from .message import CanonicalMessage, MessageAttachment, MessageField
from .raw_request import RawRequest
from .response import ErrorInfo, ResponseInfo

__all__ = [
    "APIGatewayProxyEvent",
    "APIGatewayProxyResponse",
    "BodyEncoding",
    "CanonicalMessage",
    "ErrorInfo",
    "HookData",
    "MessageAttachment",
    "MessageField",
    "RawRequest",
    "ResponseInfo",
]
