"""
Delivery outcome models.

ErrorInfo is produced once per delivery attempt; ResponseInfo is what the
transport host serializes back to the webhook producer.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .hook_data import HookData, WireBytes


class ErrorInfo(BaseModel):
    """Status code and body returned by one downstream delivery."""

    status_code: int = Field(alias="statusCode")
    body: WireBytes = b""

    model_config = ConfigDict(populate_by_name=True)


class ResponseInfo(BaseModel):
    """Aggregated outcome of one inbound call."""

    hook_data: HookData = Field(alias="hookData")
    responses: List[ErrorInfo] = Field(default_factory=list)
    status_code: int = Field(alias="statusCode")

    model_config = ConfigDict(populate_by_name=True)
