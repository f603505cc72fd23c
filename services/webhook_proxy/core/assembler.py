"""
HookData assembly.

Composes query parameter extraction and body decoding into the HookData
handed to provider normalizers. One helper per transport builds the
RawRequest first, so every transport goes through the same path.
"""

from typing import Any, Mapping, Union

from aiohttp import web
from starlette.requests import Request

from ..models.aws_v1 import APIGatewayProxyEvent
from ..models.hook_data import BodyEncoding, HookData
from ..models.raw_request import RawRequest
from .adapters import AiohttpRequest, GatewayEventRequest, StarletteRequest, adapt
from .body_decoder import decode_body
from .query_params import extract_query_params


def assemble(raw_request: RawRequest, body_encoding: BodyEncoding) -> HookData:
    """
    Build HookData from a RawRequest.

    Args:
        raw_request: Transport-agnostic request
        body_encoding: Body convention of the provider route

    Returns:
        HookData with fixed fields, custom params and the decoded input body
    """
    fixed, custom = extract_query_params(raw_request.query_params)
    return HookData(
        input_type=fixed.input_type,
        output_type=fixed.output_type,
        output_url=fixed.output_url,
        token=fixed.token,
        output_names=list(fixed.output_names),
        custom_query_params=custom,
        input_body=decode_body(
            body_encoding,
            raw_request.headers,
            raw_request.body,
            raw_request.is_base64_encoded,
        ),
    )


def hook_data_from_gateway_event(
    body_encoding: BodyEncoding, event: Union[APIGatewayProxyEvent, Mapping[str, Any]]
) -> HookData:
    return assemble(adapt(GatewayEventRequest(event, body_encoding)), body_encoding)


async def hook_data_from_starlette(body_encoding: BodyEncoding, request: Request) -> HookData:
    return assemble(adapt(await StarletteRequest.read(request)), body_encoding)


async def hook_data_from_aiohttp(body_encoding: BodyEncoding, request: web.Request) -> HookData:
    return assemble(adapt(await AiohttpRequest.read(request)), body_encoding)
