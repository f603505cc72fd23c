"""
Webhook Request Handler - Service Layer

Standardizes the flow: RawRequest -> HookData -> CanonicalMessage ->
deliveries -> ResponseInfo. Shared by the FastAPI, aiohttp and Lambda hosts.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Tuple

import httpx

from ..core.aggregator import aggregate
from ..core.assembler import assemble
from ..core.exceptions import DeliveryError, MalformedPayloadError
from ..models.hook_data import HookData
from ..models.message import CanonicalMessage
from ..models.raw_request import RawRequest
from ..models.response import ErrorInfo, ResponseInfo
from .delivery import DeliveryAdapter, WebhookDeliveryAdapter
from .normalizers import Provider, ProviderRegistry

logger = logging.getLogger("webhook_proxy.handler")


class WebhookHandler:
    """
    Runs one provider route.

    Every selected output is attempted independently; a failing destination
    never stops the others and is reported through its ErrorInfo.
    """

    def __init__(
        self,
        provider: Provider,
        adapters: Optional[Dict[str, DeliveryAdapter]] = None,
        default_adapter: Optional[DeliveryAdapter] = None,
    ):
        self.provider = provider
        self.adapters = adapters or {}
        self.default_adapter = default_adapter

    def hook_data(self, raw_request: RawRequest) -> HookData:
        return assemble(raw_request, self.provider.body_encoding)

    async def handle(self, raw_request: RawRequest) -> ResponseInfo:
        hook_data = self.hook_data(raw_request)

        try:
            message = self.provider.normalizer.normalize(hook_data.message_bytes)
        except MalformedPayloadError as e:
            logger.warning(
                f"Rejected webhook payload: {e}",
                extra={"provider": self.provider.name, "input_type": hook_data.input_type},
            )
            return aggregate(hook_data, [ErrorInfo(status_code=400, body=str(e).encode("utf-8"))])

        hook_data = hook_data.model_copy(update={"canonical_message": message})
        targets, errors = self.select_adapters(hook_data)

        results = await asyncio.gather(
            *(self._deliver(adapter, hook_data, message) for adapter in targets)
        )
        return aggregate(hook_data, errors + list(results))

    def select_adapters(self, hook_data: HookData) -> Tuple[List[DeliveryAdapter], List[ErrorInfo]]:
        """
        Resolve the outputs named by the adapters parameter.

        Falls back to the default adapter when only a url parameter is given.

        Returns:
            (adapters to deliver to, ErrorInfo for names that cannot be resolved)
        """
        targets: List[DeliveryAdapter] = []
        errors: List[ErrorInfo] = []

        for name in hook_data.output_names:
            adapter = self.adapters.get(name)
            if adapter is None:
                errors.append(
                    ErrorInfo(status_code=404, body=f"Unknown output adapter: {name}".encode("utf-8"))
                )
            else:
                targets.append(adapter)

        if not hook_data.output_names:
            if hook_data.output_url and self.default_adapter is not None:
                targets.append(self.default_adapter)
            else:
                errors.append(ErrorInfo(status_code=400, body=b"No output adapter or url given"))

        return targets, errors

    async def _deliver(
        self, adapter: DeliveryAdapter, hook_data: HookData, message: CanonicalMessage
    ) -> ErrorInfo:
        try:
            return await adapter.send_message(hook_data, message)
        except DeliveryError as e:
            logger.error(
                f"Delivery failed: {e}",
                extra={"provider": self.provider.name, "adapter": e.adapter},
            )
            return ErrorInfo(status_code=502, body=str(e).encode("utf-8"))


class WebhookService:
    """Builds a WebhookHandler per provider from the registry and configured outputs."""

    def __init__(self, registry: ProviderRegistry, client: httpx.AsyncClient):
        self.registry = registry
        self.client = client
        self.adapters: Dict[str, DeliveryAdapter] = {
            name: WebhookDeliveryAdapter(client, url=url, name=name)
            for name, url in registry.outputs.items()
        }
        self.default_adapter = WebhookDeliveryAdapter(client)

    def handler_for(self, provider_name: str) -> WebhookHandler:
        """
        Raises:
            ProviderNotFoundError: provider is not registered
        """
        return WebhookHandler(
            self.registry.get(provider_name),
            adapters=self.adapters,
            default_adapter=self.default_adapter,
        )

    async def handle(self, provider_name: str, raw_request: RawRequest) -> ResponseInfo:
        return await self.handler_for(provider_name).handle(raw_request)
