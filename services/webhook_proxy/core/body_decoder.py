"""
Webhook body decoding.

Turns the raw request body into the message bytes a provider normalizer
parses as JSON. Malformed input never raises: it degrades to b"" and the
normalizer rejects the empty message downstream.
"""

import base64
import binascii
import logging
import re
from typing import Callable, Dict, Mapping
from urllib.parse import parse_qsl

from ..models.hook_data import BodyEncoding

logger = logging.getLogger("webhook_proxy.body_decoder")

PAYLOAD_FIELD = "payload"
JSON_CONTENT_TYPE = "application/json"

# A "%" not followed by two hex digits.
_INVALID_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def header_value(headers: Mapping[str, str], name: str) -> str:
    """Case-insensitive header lookup, "" when absent."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return ""


def parse_form(body: bytes) -> Dict[str, str]:
    """
    Parse an application/x-www-form-urlencoded body.

    Returns:
        name -> first value

    Raises:
        ValueError: body is not UTF-8 or contains an invalid percent escape
    """
    text = body.decode("utf-8")
    if _INVALID_ESCAPE.search(text):
        raise ValueError("invalid percent escape in form body")

    form: Dict[str, str] = {}
    for key, value in parse_qsl(text, keep_blank_values=True, errors="strict"):
        form.setdefault(key, value)
    return form


def _raw(headers: Mapping[str, str], body: bytes) -> bytes:
    return body


def _form_payload(headers: Mapping[str, str], body: bytes) -> bytes:
    try:
        form = parse_form(body)
    except ValueError:
        return b""
    return form.get(PAYLOAD_FIELD, "").encode("utf-8")


def _form_payload_or_json(headers: Mapping[str, str], body: bytes) -> bytes:
    content_type = header_value(headers, "Content-Type").strip().lower()
    if JSON_CONTENT_TYPE in content_type:
        return body
    return _form_payload(headers, body)


_DECODERS: Dict[BodyEncoding, Callable[[Mapping[str, str], bytes], bytes]] = {
    BodyEncoding.JSON: _raw,
    BodyEncoding.URL_ENCODED: _raw,
    BodyEncoding.URL_ENCODED_JSON_PAYLOAD: _form_payload,
    BodyEncoding.URL_ENCODED_JSON_PAYLOAD_OR_JSON: _form_payload_or_json,
    BodyEncoding.URL_ENCODED_RAILS: _form_payload,
}


def decode_body(
    encoding: BodyEncoding,
    headers: Mapping[str, str],
    body: bytes,
    is_base64_encoded: bool = False,
) -> bytes:
    """
    Decode a webhook body into message bytes.

    Args:
        encoding: Body convention configured for the provider route
        headers: Request headers (Content-Type is consulted case-insensitively)
        body: Raw body bytes
        is_base64_encoded: Transport flag, body is base64 text when set

    Returns:
        Message bytes, b"" when the body cannot be decoded
    """
    body = body or b""
    if is_base64_encoded:
        try:
            body = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError):
            logger.debug("Discarding body with invalid base64 encoding")
            return b""

    decoder = _DECODERS.get(encoding, _raw)
    decoded = decoder(headers, body)

    logger.debug(
        "REQUEST_BODY",
        extra={"body": decoded.decode("utf-8", errors="replace"), "encoding": encoding.value},
    )
    return decoded
