"""
Transport request adapters.

Each supported transport exposes the same small capability set
(headers, query parameters, body, base64 flag) so the rest of the proxy
works on a RawRequest and never touches a transport object:

- GatewayEventRequest: AWS API Gateway v1 proxy event
- StarletteRequest: FastAPI / Starlette request (ASGI server)
- AiohttpRequest: aiohttp web request (event-loop server)

Bodies are read by the host before adaptation, so adapting never awaits.
"""

import json
import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Protocol, Tuple, Union

from aiohttp import web
from starlette.requests import Request

from ..models.aws_v1 import APIGatewayProxyEvent
from ..models.hook_data import BodyEncoding
from ..models.raw_request import RawRequest

logger = logging.getLogger("webhook_proxy.adapters")


class RequestSource(Protocol):
    """Capabilities every transport request provides."""

    def headers(self) -> Dict[str, str]: ...

    def query_params(self) -> Dict[str, str]: ...

    def query_param(self, name: str) -> str: ...

    def body(self) -> bytes: ...

    def is_base64_encoded(self) -> bool: ...


def _last_wins(pairs: Iterable[Tuple[str, str]], lower_keys: bool = False) -> Dict[str, str]:
    collapsed: Dict[str, str] = {}
    for key, value in pairs:
        if lower_keys:
            key = key.lower()
        collapsed[key] = value
    return collapsed


def unwrap_gateway_envelope(body: bytes) -> bytes:
    """
    Return the inner "body" of a JSON envelope, or body unchanged.

    API Gateway mapping templates for form posts wrap the whole request in a
    JSON object whose "body" field carries the original form body.
    """
    try:
        envelope = json.loads(body)
    except (ValueError, RecursionError):
        return body
    if isinstance(envelope, dict) and isinstance(envelope.get("body"), str):
        return envelope["body"].encode("utf-8")
    return body


class GatewayEventRequest:
    """API Gateway v1 proxy event."""

    def __init__(
        self,
        event: Union[APIGatewayProxyEvent, Mapping[str, Any]],
        body_encoding: Optional[BodyEncoding] = None,
    ):
        if not isinstance(event, APIGatewayProxyEvent):
            event = APIGatewayProxyEvent.model_validate(dict(event or {}))
        self.event = event
        self.body_encoding = body_encoding

    def headers(self) -> Dict[str, str]:
        return _last_wins((self.event.headers or {}).items(), lower_keys=True)

    def query_params(self) -> Dict[str, str]:
        params = dict(self.event.queryStringParameters or {})
        for key, values in (self.event.multiValueQueryStringParameters or {}).items():
            if values:
                params[key] = values[-1]
        return params

    def query_param(self, name: str) -> str:
        return self.query_params().get(name, "")

    def body(self) -> bytes:
        body = (self.event.body or "").encode("utf-8")
        if (
            self.body_encoding is not None
            and self.body_encoding.is_url_encoded
            and not self.event.isBase64Encoded
        ):
            unwrapped = unwrap_gateway_envelope(body)
            if unwrapped is not body:
                logger.debug("Unwrapped API Gateway body envelope")
            return unwrapped
        return body

    def is_base64_encoded(self) -> bool:
        return self.event.isBase64Encoded


class StarletteRequest:
    """FastAPI / Starlette request with its body already read."""

    def __init__(self, request: Request, body: bytes = b""):
        self.request = request
        self._body = body or b""

    @classmethod
    async def read(cls, request: Request) -> "StarletteRequest":
        return cls(request, await request.body())

    def headers(self) -> Dict[str, str]:
        return _last_wins(self.request.headers.items(), lower_keys=True)

    def query_params(self) -> Dict[str, str]:
        return _last_wins(self.request.query_params.multi_items())

    def query_param(self, name: str) -> str:
        return self.query_params().get(name, "")

    def body(self) -> bytes:
        return self._body

    def is_base64_encoded(self) -> bool:
        return False


class AiohttpRequest:
    """aiohttp request with its body already read."""

    def __init__(self, request: web.Request, body: bytes = b""):
        self.request = request
        self._body = body or b""

    @classmethod
    async def read(cls, request: web.Request) -> "AiohttpRequest":
        return cls(request, await request.read())

    def headers(self) -> Dict[str, str]:
        return _last_wins(self.request.headers.items(), lower_keys=True)

    def query_params(self) -> Dict[str, str]:
        return _last_wins(self.request.query.items())

    def query_param(self, name: str) -> str:
        return self.query_params().get(name, "")

    def body(self) -> bytes:
        return self._body

    def is_base64_encoded(self) -> bool:
        return False


def adapt(source: RequestSource) -> RawRequest:
    """Reduce any transport request to a RawRequest."""
    return RawRequest(
        headers=source.headers(),
        query_params=source.query_params(),
        body=source.body(),
        is_base64_encoded=source.is_base64_encoded(),
    )
