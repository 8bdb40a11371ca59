"""Unit tests for the Twilio SMS helper."""

from __future__ import annotations

import logging
import types

import pytest
from twilio.base.exceptions import TwilioRestException

from notifyhub.domain.errors import SmsDeliveryError
from notifyhub.infrastructure import sms as sms_module


class DummySettings:
    twilio_account_sid = "AC123"
    twilio_auth_token = "secret"
    twilio_phone_number = "+15550000000"
    sms_mock_mode = False


class RecordingMessages:
    def __init__(self, error: Exception | None = None) -> None:
        self.created = []
        self.error = error

    def create(self, **kwargs):
        if self.error is not None:
            raise self.error
        self.created.append(kwargs)
        return types.SimpleNamespace(sid="SM123")


def _client_factory(messages: RecordingMessages):
    def _client(account_sid, auth_token):
        return types.SimpleNamespace(messages=messages)

    return _client


def test_mock_mode_only_logs_the_message(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    class MockSettings(DummySettings):
        sms_mock_mode = True

    messages = RecordingMessages()
    monkeypatch.setattr(sms_module, "get_settings", lambda: MockSettings())
    monkeypatch.setattr(sms_module, "Client", _client_factory(messages))

    with caplog.at_level(logging.INFO):
        sms_module.send_sms("Your code is 1234", "+15551112222")

    assert messages.created == []
    assert "[mock sms] to=+15551112222 body=Your code is 1234" in caplog.text


def test_send_sms_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    class MissingSettings(DummySettings):
        twilio_account_sid = None
        twilio_auth_token = None

    monkeypatch.setattr(sms_module, "get_settings", lambda: MissingSettings())

    with pytest.raises(SmsDeliveryError, match="not configured"):
        sms_module.send_sms("hello", "+15551112222")


def test_send_sms_success(monkeypatch: pytest.MonkeyPatch) -> None:
    messages = RecordingMessages()
    monkeypatch.setattr(sms_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(sms_module, "Client", _client_factory(messages))

    sms_module.send_sms("hello", "+15551112222")

    assert messages.created == [
        {"body": "hello", "from_": "+15550000000", "to": "+15551112222"}
    ]


def test_twilio_errors_become_delivery_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    error = TwilioRestException(400, "https://api.twilio.com", msg="Invalid 'To' number")
    monkeypatch.setattr(sms_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(sms_module, "Client", _client_factory(RecordingMessages(error)))

    with pytest.raises(SmsDeliveryError) as exc_info:
        sms_module.send_sms("hello", "invalid")

    assert exc_info.value.status_code == 400
    assert "Invalid 'To' number" in str(exc_info.value)
