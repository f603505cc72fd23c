import os

import httpx
import pytest
import pytest_asyncio

# Config is initialized at import time, so point it at hermetic paths first.
os.environ["LOG_CONFIG_PATH"] = "/tmp/webhook-proxy-test-missing-log.yaml"
os.environ["PROVIDERS_CONFIG_PATH"] = "/tmp/webhook-proxy-test-missing-providers.yml"

from services.webhook_proxy.models.hook_data import BodyEncoding  # noqa: E402
from services.webhook_proxy.services.handler import WebhookService  # noqa: E402
from services.webhook_proxy.services.normalizers import ProviderRegistry, CanonicalNormalizer  # noqa: E402


class RecordingTransport:
    """httpx transport handler that records requests and answers with fixed statuses."""

    def __init__(self, statuses=None, default_status=200):
        self.statuses = statuses or {}
        self.default_status = default_status
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status = self.statuses.get(str(request.url), self.default_status)
        return httpx.Response(status, json={"url": str(request.url)})


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest_asyncio.fixture
async def http_client(transport):
    async with httpx.AsyncClient(transport=httpx.MockTransport(transport)) as client:
        yield client


@pytest.fixture
def registry():
    registry = ProviderRegistry()
    registry.register("canonical", CanonicalNormalizer(), BodyEncoding.JSON)
    registry.register("canonical-form", CanonicalNormalizer(), BodyEncoding.URL_ENCODED_JSON_PAYLOAD_OR_JSON)
    registry._outputs.update(
        {"team-chat": "https://chat.example.com/hooks/team", "ops": "https://chat.example.com/hooks/ops"}
    )
    return registry


@pytest.fixture
def webhook_service(registry, http_client):
    return WebhookService(registry, http_client)
