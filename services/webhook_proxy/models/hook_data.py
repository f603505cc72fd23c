"""
Webhook input models.

BodyEncoding selects how a provider route wraps its JSON payload;
HookData is the single value handed to a provider normalizer.
"""

import base64
from enum import Enum
from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

from .message import CanonicalMessage

# Standard base64 on the wire, raw bytes in Python.
WireBytes = Annotated[
    bytes,
    PlainSerializer(lambda value: base64.b64encode(value).decode("ascii"), when_used="json"),
]


class BodyEncoding(str, Enum):
    """Body conventions used by webhook producers."""

    JSON = "json"
    URL_ENCODED = "url_encoded"
    URL_ENCODED_JSON_PAYLOAD = "url_encoded_json_payload"
    URL_ENCODED_JSON_PAYLOAD_OR_JSON = "url_encoded_or_json"
    URL_ENCODED_RAILS = "url_encoded_rails"

    @property
    def is_url_encoded(self) -> bool:
        return self in (
            BodyEncoding.URL_ENCODED,
            BodyEncoding.URL_ENCODED_JSON_PAYLOAD,
            BodyEncoding.URL_ENCODED_RAILS,
        )


class HookData(BaseModel):
    """
    Unified webhook input.

    Query parameters adapters, inputType, outputType, token and url fill the
    fixed fields; every other parameter lands in custom_query_params.
    """

    input_type: str = Field(default="", alias="inputType")
    input_body: WireBytes = Field(default=b"", alias="inputBody")
    output_type: str = Field(default="", alias="outputType")
    output_url: str = Field(default="", alias="outputUrl")
    output_names: List[str] = Field(default_factory=list, alias="outputNames")
    token: str = ""
    input_message: WireBytes = Field(default=b"", alias="inputMessage")
    custom_query_params: Dict[str, List[str]] = Field(default_factory=dict, alias="customParams")
    canonical_message: Optional[CanonicalMessage] = Field(default=None, alias="canonicalMessage")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def message_bytes(self) -> bytes:
        """Bytes a normalizer should parse."""
        return self.input_message or self.input_body
