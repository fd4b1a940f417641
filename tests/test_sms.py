import pytest
import requests

from storefront.third_parties.sms import SmsGateway


class FakeResponse:
    def __init__(self, status_code=200, text="OK"):
        self.status_code = status_code
        self.text = text

    @property
    def ok(self):
        return self.status_code < 400


@pytest.fixture
def gateway_env(monkeypatch):
    monkeypatch.setenv("SMS_API_KEY", "key-123")
    monkeypatch.setenv("SMS_BASE_URL", "https://sms.example.com/api/send")
    monkeypatch.setenv("SMS_SENDER_ID", "EIDSHOP")


def test_unconfigured_gateway(monkeypatch):
    monkeypatch.delenv("SMS_API_KEY", raising=False)
    calls = []
    monkeypatch.setattr(requests, "get", lambda *a, **kw: calls.append(a))

    result = SmsGateway.send("01712345678", "hello")

    assert result == {"success": False, "error": "SMS not configured"}
    assert calls == []


def test_send(gateway_env, monkeypatch):
    calls = []

    def fake_get(url, params=None, headers=None, timeout=None):
        calls.append((url, params, timeout))
        return FakeResponse()

    monkeypatch.setattr(requests, "get", fake_get)

    result = SmsGateway.send("+880 1712-345678", "আপনার অর্ডার")

    assert result == {"success": True, "error": None}
    url, params, timeout = calls[0]
    assert url == "https://sms.example.com/api/send"
    assert params == {
        "api_key": "key-123",
        "senderid": "EIDSHOP",
        "number": "8801712345678",
        "message": "আপনার অর্ডার",
        "type": "text",
    }
    assert timeout == 10


def test_gateway_error_status(gateway_env, monkeypatch):
    monkeypatch.setattr(
        requests, "get", lambda *a, **kw: FakeResponse(502, "Bad Gateway")
    )

    result = SmsGateway.send("01712345678", "hello")

    assert result["success"] is False
    assert "502" in result["error"]


def test_network_failure_never_raises(gateway_env, monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(requests, "get", boom)

    result = SmsGateway.send("01712345678", "hello")

    assert result == {"success": False, "error": "connection refused"}
