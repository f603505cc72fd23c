import pytest
from pydantic import ValidationError

from services.webhook_proxy.models import (
    APIGatewayProxyEvent,
    APIGatewayProxyResponse,
    BodyEncoding,
    CanonicalMessage,
    ErrorInfo,
    HookData,
    RawRequest,
)


class TestBodyEncoding:
    def test_values(self):
        assert [e.value for e in BodyEncoding] == [
            "json",
            "url_encoded",
            "url_encoded_json_payload",
            "url_encoded_or_json",
            "url_encoded_rails",
        ]

    def test_url_encoded_variants(self):
        assert {e for e in BodyEncoding if e.is_url_encoded} == {
            BodyEncoding.URL_ENCODED,
            BodyEncoding.URL_ENCODED_JSON_PAYLOAD,
            BodyEncoding.URL_ENCODED_RAILS,
        }


class TestHookData:
    def test_accepts_wire_aliases(self):
        hook_data = HookData.model_validate(
            {"inputType": "slack", "outputUrl": "https://x", "customParams": {"a": ["1"]}}
        )
        assert hook_data.input_type == "slack"
        assert hook_data.output_url == "https://x"
        assert hook_data.custom_query_params == {"a": ["1"]}

    def test_message_bytes_prefers_input_message(self):
        assert HookData(input_body=b"body").message_bytes == b"body"
        assert HookData(input_body=b"body", input_message=b"msg").message_bytes == b"msg"


class TestRawRequest:
    def test_body_defaults_to_empty_bytes(self):
        raw = RawRequest()
        assert raw.body == b""
        assert raw.headers == {}
        assert raw.is_base64_encoded is False

    def test_is_frozen(self):
        raw = RawRequest()
        with pytest.raises(ValidationError):
            raw.body = b"x"


def test_error_info_requires_status_code():
    with pytest.raises(ValidationError):
        ErrorInfo()
    assert ErrorInfo(statusCode=500).status_code == 500


def test_gateway_event_keeps_unknown_fields():
    event = APIGatewayProxyEvent.model_validate({"body": "x", "version": "1.0"})
    assert event.body == "x"
    assert event.model_extra == {"version": "1.0"}


def test_gateway_response_dump():
    assert APIGatewayProxyResponse(statusCode=200).model_dump() == {
        "statusCode": 200,
        "body": "",
        "headers": {},
        "isBase64Encoded": False,
    }


def test_canonical_message_aliases():
    message = CanonicalMessage.model_validate({"text": "hi", "iconURL": "https://icon"})
    assert message.icon_url == "https://icon"
    assert message.model_dump(by_alias=True, exclude_none=True)["iconURL"] == "https://icon"
