"""
Transport-agnostic request model.

Every inbound webhook call is reduced to a RawRequest before any decoding
happens, so the body decoder never sees a transport object.
"""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class RawRequest(BaseModel):
    """
    Headers, query parameters and body of one inbound call.

    headers: lower-cased header name -> value
    query_params: name -> value (single valued, last write wins)
    body: raw bytes, base64 text when is_base64_encoded is set
    """

    headers: Dict[str, str] = Field(default_factory=dict)
    query_params: Dict[str, str] = Field(default_factory=dict)
    body: bytes = b""
    is_base64_encoded: bool = False

    model_config = ConfigDict(frozen=True)
