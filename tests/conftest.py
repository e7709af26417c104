"""Shared test fixtures."""
import base64
import json
from collections import deque

import pytest

from braintree_api import AuthContext, BraintreeClient


class _DummyResp:
    def __init__(self, status_code=200, json_data=None, text=None):
        self.status_code = status_code
        if text is None:
            text = json.dumps(json_data) if json_data is not None else ""
        self.text = text


class FakeSession:
    """Records every request and replies with queued responses (200 ``{}`` when empty)."""

    def __init__(self):
        self.calls = []
        self._responses = deque()

    def reply(self, status_code=200, json_data=None, text=None):
        self._responses.append(_DummyResp(status_code, json_data, text))
        return self

    def fail_with(self, exc):
        self._responses.append(exc)
        return self

    def request(self, method, url, headers=None, params=None, json=None):
        self.calls.append(
            {
                "method": method,
                "url": url,
                "headers": dict(headers or {}),
                "params": params,
                "json": json,
            }
        )
        response = self._responses.popleft() if self._responses else _DummyResp(200, {})
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def token_payload():
    return {
        "clientApiUrl": "https://api.example.test/merchants/abc/client_api",
        "authorizationFingerprint": "fp-123",
        "paypalEnabled": True,
        "challenges": ["cvv", "postal_code"],
        "analytics": {"url": "https://analytics.example.test/events"},
        "paypal": {
            "clientId": "paypal-client",
            "environment": "offline",
            "displayName": "Acme",
            "privacyUrl": "https://example.test/privacy",
            "userAgreementUrl": "https://example.test/tos",
        },
    }


@pytest.fixture
def client_token(token_payload):
    return base64.b64encode(json.dumps(token_payload).encode("utf-8")).decode("ascii")


@pytest.fixture
def auth(token_payload):
    return AuthContext.from_json(token_payload)


@pytest.fixture
def session_factory():
    return FakeSession


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(auth, session):
    return BraintreeClient(auth, session=session)
