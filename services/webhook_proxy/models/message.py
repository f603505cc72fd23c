"""
Canonical chat message.

Produced by provider normalizers and posted as JSON by delivery adapters.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MessageField(BaseModel):
    title: str = ""
    value: str = ""
    short: bool = False


class MessageAttachment(BaseModel):
    title: str = ""
    text: str = ""
    color: Optional[str] = None
    fields: List[MessageField] = Field(default_factory=list)


class CanonicalMessage(BaseModel):
    """Unified chat message shared by every provider."""

    activity: str = ""
    title: str = ""
    text: str = ""
    icon_url: Optional[str] = Field(default=None, alias="iconURL")
    attachments: List[MessageAttachment] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)
