import json

import pytest

from braintree_api.core.errors import (
    ConfigurationError,
    ErrorWithResponse,
    GatewayError,
    ParseError,
    ServerError,
)


def test_field_errors_are_parsed():
    body = json.dumps(
        {
            "error": {"message": "Credit card is invalid"},
            "fieldErrors": [
                {
                    "field": "creditCard",
                    "fieldErrors": [
                        {"field": "number", "message": "Number is invalid", "code": "81715"},
                    ],
                }
            ],
        }
    )
    error = ErrorWithResponse(422, body)
    assert error.message == "Credit card is invalid"
    assert [item.field for item in error.field_errors] == ["creditCard"]
    number = error.error_for("number")
    assert number.message == "Number is invalid"
    assert number.code == "81715"
    assert error.error_for("cvv") is None


def test_unparseable_body_has_no_field_errors():
    error = ErrorWithResponse(422, "<html>")
    assert error.field_errors == []
    assert error.message is None
    assert error.body == "<html>"


def test_validation_failure_is_not_fatal():
    assert not isinstance(ErrorWithResponse(422, "{}"), GatewayError)
    assert issubclass(ParseError, GatewayError)
    assert issubclass(ConfigurationError, GatewayError)


def test_default_messages():
    assert str(ParseError()) == "Parsing server response failed"
    assert str(ServerError("custom")) == "custom"


@pytest.mark.parametrize(
    "body",
    [
        '{"fieldErrors": 5}',
        '{"fieldErrors": "number"}',
        '{"fieldErrors": {"field": "number"}}',
        '{"fieldErrors": [{"field": "creditCard", "fieldErrors": 5}]}',
    ],
)
def test_non_list_field_errors_are_empty(body):
    error = ErrorWithResponse(422, body)
    assert all(item.field_errors == () for item in error.field_errors)
    assert error.error_for("number") is None
