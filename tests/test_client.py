import json
from concurrent.futures import ThreadPoolExecutor

import pytest
import requests

from braintree_api import (
    AuthenticationError,
    BraintreeClient,
    Card,
    CardBuilder,
    DeviceDataEnvironment,
    DownForMaintenanceError,
    ErrorWithResponse,
    ParseError,
    ServerError,
)
from braintree_api.core.auth import AuthContext
from braintree_api.core.errors import ConfigError

CARD_URL = "https://api.example.test/merchants/abc/client_api/v1/payment_methods/credit_cards"


def _card():
    return CardBuilder(number="4111111111111111", expiration_date="12/2030")


def test_create_returns_parsed_record(client, session):
    session.reply(201, {"creditCards": [{"nonce": "abc123"}]})
    card = client.create(_card())
    assert isinstance(card, Card)
    assert card.nonce == "abc123"
    assert session.last["url"] == CARD_URL
    assert session.last["method"] == "POST"


def test_create_sends_builder_and_default_params(client, session):
    session.reply(200, {"creditCards": [{"nonce": "abc123"}]})
    client.create(_card())
    body = session.last["json"]
    assert body["authorizationFingerprint"] == "fp-123"
    assert body["creditCard"]["options"] == {"validate": True}


def test_default_params_win_over_builder_params(client, session):
    class _Sneaky(CardBuilder):
        def to_params(self):
            return {"authorizationFingerprint": "forged", **super().to_params()}

    session.reply(200, {"creditCards": [{"nonce": "abc123"}]})
    client.create(_Sneaky(number="4111"))
    assert session.last["json"]["authorizationFingerprint"] == "fp-123"


def test_create_validation_failure(client, session):
    session.reply(422, text='{"error":"invalid postal code"}')
    with pytest.raises(ErrorWithResponse) as excinfo:
        client.create(_card())
    assert excinfo.value.status_code == 422
    assert excinfo.value.body == '{"error":"invalid postal code"}'
    assert excinfo.value.message == "invalid postal code"


def test_create_empty_array_is_parse_failure(client, session):
    session.reply(200, {"creditCards": []})
    with pytest.raises(ParseError):
        client.create(_card())


@pytest.mark.parametrize("body", ["", "maintenance", '{"creditCards": [{"nonce": "x"}]}'])
def test_unavailable_regardless_of_body(client, session, body):
    session.reply(503, text=body)
    with pytest.raises(DownForMaintenanceError):
        client.create(_card())
    session.reply(503, text=body)
    with pytest.raises(DownForMaintenanceError):
        client.list_payment_methods()


def test_server_error_is_not_validation_failure(client, session):
    session.reply(500, text='{"fieldErrors": [{"field": "number", "message": "bad"}]}')
    with pytest.raises(ServerError):
        client.create(_card())


def test_tokenize_disables_validation_and_returns_nonce(client, session):
    session.reply(202, {"creditCards": [{"nonce": "tok-1"}]})
    builder = _card()
    assert client.tokenize(builder) == "tok-1"
    assert session.last["json"]["creditCard"]["options"] == {"validate": False}
    assert builder.validate is True


def test_tokenize_matches_create_without_validation(auth, session_factory):
    responses = {"creditCards": [{"nonce": "same"}]}
    first = session_factory().reply(200, responses)
    second = session_factory().reply(200, responses)
    builder = _card()
    nonce = BraintreeClient(auth, session=first).tokenize(builder)
    created = BraintreeClient(auth, session=second).create(builder.with_validation(False))
    assert nonce == created.nonce
    assert first.last["json"] == second.last["json"]


def test_list_payment_methods(client, session):
    session.reply(
        200,
        {
            "paymentMethods": [
                {"type": "CreditCard", "nonce": "n1", "details": {"lastTwo": "11"}},
                {"type": "PayPalAccount", "nonce": "n2", "details": {"email": "a@b.test"}},
            ]
        },
    )
    methods = client.list_payment_methods()
    assert [m.nonce for m in methods] == ["n1", "n2"]
    assert session.last["method"] == "GET"
    assert session.last["params"] == {"authorizationFingerprint": "fp-123"}
    assert session.last["url"].endswith("/v1/payment_methods")


def test_list_unauthenticated(client, session):
    session.reply(401)
    with pytest.raises(AuthenticationError):
        client.list_payment_methods()


def test_capability_flags(client):
    assert client.is_paypal_enabled
    assert client.is_cvv_challenge_present
    assert client.is_postal_code_challenge_present


def test_analytics_event_body(client, session):
    client.send_analytics_event("custom.card.tokenize")
    call = session.last
    assert call["url"] == "https://analytics.example.test/events"
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["json"]["analytics"] == [{"kind": "custom.card.tokenize"}]
    assert call["json"]["_meta"]["integrationType"] == "custom"
    assert call["json"]["authorizationFingerprint"] == "fp-123"


def test_analytics_failures_are_swallowed(client, session):
    session.fail_with(requests.ConnectionError("offline"))
    client.send_analytics_event("custom.card.tokenize")
    session.reply(500)
    client.send_analytics_event("custom.card.tokenize", "dropin")
    assert session.last["json"]["_meta"]["integrationType"] == "dropin"


def test_analytics_disabled_sends_nothing(session):
    auth = AuthContext(api_base_url="https://api.test", fingerprint="fp")
    BraintreeClient(auth, session=session).send_analytics_event("ignored")
    assert session.calls == []


def test_analytics_dispatched_to_executor(client, session):
    session.fail_with(requests.Timeout("slow"))
    with ThreadPoolExecutor(max_workers=1) as pool:
        client.send_analytics_event("custom.event", executor=pool)
    assert len(session.calls) == 1


def test_collect_device_data_uses_environment(auth, session):
    seen = []

    def collector(surface, merchant_id, collector_url):
        seen.append((surface, merchant_id, collector_url))
        return "device-42"

    client = BraintreeClient(auth, session=session, device_data_collector=collector)
    assert client.collect_device_data("window") == "device-42"
    assert client.collect_device_data("window", DeviceDataEnvironment.PRODUCTION) == "device-42"
    assert client.collect_device_data("window", "m-1", "https://collector.test") == "device-42"
    assert seen == [
        ("window", "600000", DeviceDataEnvironment.SANDBOX.collector_url),
        ("window", "600000", DeviceDataEnvironment.PRODUCTION.collector_url),
        ("window", "m-1", "https://collector.test"),
    ]


def test_collect_device_data_requires_collector(client):
    with pytest.raises(ConfigError):
        client.collect_device_data("window")


def test_collect_device_data_requires_url_with_merchant_id(auth):
    client = BraintreeClient(auth, device_data_collector=lambda *args: "x")
    with pytest.raises(ValueError):
        client.collect_device_data("window", "m-1")


def test_created_records_are_independent(client, session):
    payload = {"creditCards": [{"nonce": "abc", "details": {"lastTwo": "11"}}]}
    session.reply(200, payload).reply(200, payload)
    first, second = client.create(_card()), client.create(_card())
    assert first == second
    assert first is not second
    assert json.dumps(first.raw) == json.dumps(second.raw)


def test_create_with_malformed_details_is_parse_failure(client, session):
    session.reply(200, {"creditCards": [{"nonce": "x", "details": "oops"}]})
    with pytest.raises(ParseError):
        client.create(CardBuilder(number="4111"))


def test_analytics_with_shut_down_executor_is_swallowed(client, session):
    pool = ThreadPoolExecutor(max_workers=1)
    pool.shutdown()
    client.send_analytics_event("custom.event", executor=pool)
    assert session.calls == []
