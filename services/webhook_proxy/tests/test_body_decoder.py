"""
Where: services/webhook_proxy/tests/test_body_decoder.py
What: Unit tests for webhook body decoding.
Why: Each body convention must produce the JSON bytes normalizers expect,
     and malformed input must degrade to b"" without raising.
"""

import base64
from unittest.mock import patch

import pytest

from services.webhook_proxy.core.body_decoder import decode_body, header_value, parse_form
from services.webhook_proxy.models.hook_data import BodyEncoding

JSON_BODY = b'{"a":1}'
FORM_BODY = b"payload=%7B%22a%22%3A1%7D"


@pytest.mark.parametrize("encoding", [BodyEncoding.JSON, BodyEncoding.URL_ENCODED])
def test_raw_encodings_return_body_unchanged(encoding):
    assert decode_body(encoding, {}, JSON_BODY, False) == JSON_BODY


def test_url_encoded_json_payload_extracts_and_unescapes_payload():
    assert decode_body(BodyEncoding.URL_ENCODED_JSON_PAYLOAD, {}, FORM_BODY, False) == JSON_BODY


def test_url_encoded_rails_behaves_like_json_payload():
    body = b"other=1&payload=%7B%22a%22%3A1%7D"
    assert decode_body(BodyEncoding.URL_ENCODED_RAILS, {}, body, False) == JSON_BODY


def test_payload_plus_is_decoded_as_space():
    body = b"payload=%7B%22text%22%3A%22hello+world%22%7D"
    result = decode_body(BodyEncoding.URL_ENCODED_JSON_PAYLOAD, {}, body, False)
    assert result == b'{"text":"hello world"}'


def test_payload_first_value_wins():
    body = b"payload=first&payload=second"
    assert decode_body(BodyEncoding.URL_ENCODED_JSON_PAYLOAD, {}, body, False) == b"first"


class TestPayloadOrJson:
    def test_json_content_type_short_circuits_form_parsing(self):
        result = decode_body(
            BodyEncoding.URL_ENCODED_JSON_PAYLOAD_OR_JSON,
            {"content-type": "application/json"},
            JSON_BODY,
            False,
        )
        assert result == JSON_BODY

    def test_content_type_match_is_case_insensitive_and_trimmed(self):
        result = decode_body(
            BodyEncoding.URL_ENCODED_JSON_PAYLOAD_OR_JSON,
            {"Content-Type": "  Application/JSON; charset=utf-8 "},
            JSON_BODY,
            False,
        )
        assert result == JSON_BODY

    def test_form_content_type_uses_payload_field(self):
        result = decode_body(
            BodyEncoding.URL_ENCODED_JSON_PAYLOAD_OR_JSON,
            {"content-type": "application/x-www-form-urlencoded"},
            FORM_BODY,
            False,
        )
        assert result == JSON_BODY

    def test_missing_content_type_uses_payload_field(self):
        result = decode_body(BodyEncoding.URL_ENCODED_JSON_PAYLOAD_OR_JSON, {}, JSON_BODY, False)
        # Raw JSON without a JSON content type has no payload field.
        assert result == b""


class TestBase64:
    def test_base64_body_is_decoded_before_dispatch(self):
        body = base64.b64encode(FORM_BODY)
        assert decode_body(BodyEncoding.URL_ENCODED_JSON_PAYLOAD, {}, body, True) == JSON_BODY

    @pytest.mark.parametrize("encoding", list(BodyEncoding))
    def test_malformed_base64_returns_empty(self, encoding):
        assert decode_body(encoding, {}, b"!!!", True) == b""

    def test_empty_base64_body_returns_empty(self):
        assert decode_body(BodyEncoding.JSON, {}, b"", True) == b""


class TestSilentDegradation:
    """
    Malformed input and a missing payload field both yield b"".

    Callers cannot tell the two apart; the normalizer rejects the empty
    message either way.
    """

    @pytest.mark.parametrize("encoding", list(BodyEncoding))
    def test_empty_body_returns_empty(self, encoding):
        assert decode_body(encoding, {}, b"", False) == b""

    def test_missing_payload_field_returns_empty(self):
        assert decode_body(BodyEncoding.URL_ENCODED_JSON_PAYLOAD, {}, b"text=hi", False) == b""

    @pytest.mark.parametrize("body", [b"payload=%zz", b"payload=%E0%A4%A", b"\xff\xfe=1"])
    def test_malformed_form_returns_empty(self, body):
        assert decode_body(BodyEncoding.URL_ENCODED_JSON_PAYLOAD, {}, body, False) == b""

    def test_malformed_and_missing_are_indistinguishable(self):
        malformed = decode_body(BodyEncoding.URL_ENCODED_JSON_PAYLOAD, {}, b"payload=%zz", False)
        missing = decode_body(BodyEncoding.URL_ENCODED_JSON_PAYLOAD, {}, b"other=1", False)
        assert malformed == missing == b""


def test_decoded_body_is_logged_at_debug():
    with patch("services.webhook_proxy.core.body_decoder.logger") as mock_logger:
        decode_body(BodyEncoding.JSON, {}, JSON_BODY, False)

    mock_logger.debug.assert_called_once()
    call_args = mock_logger.debug.call_args
    assert call_args.args[0] == "REQUEST_BODY"
    assert call_args.kwargs["extra"]["body"] == '{"a":1}'


def test_parse_form_keeps_blank_values():
    assert parse_form(b"a=&b=2") == {"a": "", "b": "2"}


def test_header_value_lookup():
    headers = {"Content-Type": "text/plain"}
    assert header_value(headers, "content-type") == "text/plain"
    assert header_value(headers, "x-missing") == ""
