"""
Delivery adapters.

An adapter posts the canonical message to one destination and reports the
outcome as an ErrorInfo. Retries are left to the webhook producer.
"""

import logging
from typing import Protocol

import httpx

from ..core.exceptions import DeliveryError
from ..models.hook_data import HookData
from ..models.message import CanonicalMessage
from ..models.response import ErrorInfo

logger = logging.getLogger("webhook_proxy.delivery")


class DeliveryAdapter(Protocol):
    name: str

    async def send_message(self, hook_data: HookData, message: CanonicalMessage) -> ErrorInfo: ...


class WebhookDeliveryAdapter:
    """Posts the message as JSON to a fixed URL, or to the request's url parameter."""

    def __init__(self, client: httpx.AsyncClient, url: str = "", name: str = "webhook"):
        self.client = client
        self.url = url
        self.name = name

    async def send_message(self, hook_data: HookData, message: CanonicalMessage) -> ErrorInfo:
        """
        Raises:
            DeliveryError: destination unreachable or no URL available
        """
        url = self.url or hook_data.output_url
        if not url:
            raise DeliveryError(self.name, ValueError("no destination url"))

        payload = message.model_dump(mode="json", by_alias=True, exclude_none=True)
        try:
            response = await self.client.post(url, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DeliveryError(self.name, e) from e

        logger.info(
            f"Delivered message via {self.name}",
            extra={"adapter": self.name, "status_code": response.status_code},
        )
        return ErrorInfo(status_code=response.status_code, body=response.content)
