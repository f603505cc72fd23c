import base64
import json
from contextlib import asynccontextmanager
from types import SimpleNamespace
from urllib.parse import urlencode

import httpx
import pytest

from services.common.core.request_context import get_request_id, get_trace_id
from services.webhook_proxy import lambda_handler as lambda_module
from services.webhook_proxy.services.handler import WebhookService


@pytest.fixture
def lambda_service(registry, transport, monkeypatch):
    """Patch the Lambda host so each invocation builds a service over a mock transport."""

    @asynccontextmanager
    async def fake_webhook_service(proxy_config):
        async with httpx.AsyncClient(transport=httpx.MockTransport(transport)) as client:
            yield WebhookService(registry, client)

    monkeypatch.setattr(lambda_module, "webhook_service", fake_webhook_service)
    return transport


def make_event(provider, body="", query=None, headers=None, is_base64=False):
    return {
        "resource": "/webhook/{provider}",
        "path": f"/webhook/{provider}",
        "httpMethod": "POST",
        "headers": headers or {"Content-Type": "application/json"},
        "queryStringParameters": query,
        "pathParameters": {"provider": provider},
        "body": body,
        "isBase64Encoded": is_base64,
    }


def context(request_id="aws-req-1"):
    return SimpleNamespace(aws_request_id=request_id)


def test_unknown_provider_returns_404(lambda_service):
    response = lambda_module.lambda_handler(make_event("missing", "{}"), context())

    assert response["statusCode"] == 404
    assert json.loads(response["body"]) == {"message": "Provider not found: missing"}
    assert lambda_service.requests == []


def test_delivers_to_named_output(lambda_service):
    event = make_event(
        "canonical",
        json.dumps({"title": "Alert", "text": "disk full"}),
        query={"adapters": "ops", "inputType": "monitor"},
    )

    response = lambda_module.lambda_handler(event, context())

    assert response["statusCode"] == 200
    assert response["headers"]["Content-Type"] == "application/json"
    body = json.loads(response["body"])
    assert body["hookData"]["inputType"] == "monitor"
    assert body["hookData"]["outputNames"] == ["ops"]

    assert len(lambda_service.requests) == 1
    assert str(lambda_service.requests[0].url) == "https://chat.example.com/hooks/ops"


def test_base64_body_is_decoded(lambda_service):
    payload = json.dumps({"text": "encoded"}).encode("utf-8")
    event = make_event(
        "canonical",
        base64.b64encode(payload).decode("ascii"),
        query={"adapters": "team-chat"},
        is_base64=True,
    )

    response = lambda_module.lambda_handler(event, context())

    assert response["statusCode"] == 200
    assert json.loads(lambda_service.requests[0].content)["text"] == "encoded"


def test_form_payload_via_gateway(lambda_service):
    event = make_event(
        "canonical-form",
        urlencode({"payload": json.dumps({"text": "form"})}),
        query={"adapters": "ops"},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )

    response = lambda_module.lambda_handler(event, context())

    assert response["statusCode"] == 200
    assert json.loads(lambda_service.requests[0].content)["text"] == "form"


def test_missing_output_returns_400(lambda_service):
    response = lambda_module.lambda_handler(make_event("canonical", '{"text": "x"}'), context())

    assert response["statusCode"] == 400
    assert lambda_service.requests == []


def test_malformed_payload_returns_400(lambda_service):
    event = make_event("canonical", "{broken", query={"adapters": "ops"})

    response = lambda_module.lambda_handler(event, context())

    assert response["statusCode"] == 400
    assert lambda_service.requests == []


def test_request_id_is_cleared_after_invocation(lambda_service):
    lambda_module.lambda_handler(make_event("canonical", "{}"), context("aws-req-2"))

    assert get_request_id() is None


def test_trace_header_is_read_case_insensitively(lambda_service, monkeypatch):
    seen = []
    original = lambda_module.handle_event

    async def recording_handle_event(event):
        seen.append(get_trace_id())
        return await original(event)

    monkeypatch.setattr(lambda_module, "handle_event", recording_handle_event)
    event = make_event(
        "canonical",
        "{}",
        headers={"content-type": "application/json", "x-amzn-trace-id": "Root=1-abc-def;Sampled=1"},
    )

    lambda_module.lambda_handler(event, context())

    assert seen == ["Root=1-abc-def;Sampled=1"]
    assert get_trace_id() is None
