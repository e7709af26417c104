import pytest

from braintree_api import cli


@pytest.fixture
def fake_session(monkeypatch, session):
    monkeypatch.setattr(cli.requests, "Session", lambda: session)
    return session


def _run(client_token, *args):
    return cli.run_cli(
        ["--env-file", "/nonexistent/.env", "--set", f"BRAINTREE_CLIENT_TOKEN={client_token}", *args]
    )


CARD_ARGS = ["--number", "4111111111111111", "--expiration-month", "12", "--expiration-year", "2030"]


def test_tokenize_card_prints_nonce(client_token, fake_session, capsys):
    fake_session.reply(201, {"creditCards": [{"nonce": "tok-9"}]})
    assert _run(client_token, "tokenize-card", *CARD_ARGS) == 0
    assert capsys.readouterr().out.strip() == "tok-9"
    assert fake_session.last["json"]["creditCard"]["options"] == {"validate": False}


def test_create_card_validation_failure_exit_code(client_token, fake_session):
    fake_session.reply(422, {"error": {"message": "bad"}, "fieldErrors": []})
    assert _run(client_token, "create-card", *CARD_ARGS, "--postal-code", "0") == 2


def test_list_prints_methods(client_token, fake_session, capsys):
    fake_session.reply(
        200, {"paymentMethods": [{"type": "CreditCard", "nonce": "n1", "description": "ending in 11"}]}
    )
    assert _run(client_token, "list") == 0
    assert capsys.readouterr().out.strip() == "CreditCard\tn1\tending in 11"


def test_gateway_failure_exit_code(client_token, fake_session):
    fake_session.reply(500)
    assert _run(client_token, "list") == 1


def test_invalid_configuration(monkeypatch):
    monkeypatch.delenv("BRAINTREE_CLIENT_TOKEN", raising=False)
    assert cli.run_cli(["--env-file", "/nonexistent/.env", "list"]) == 1


def test_override_must_be_key_value():
    with pytest.raises(SystemExit):
        cli.run_cli(["--set", "novalue", "list"])


def test_validation_failure_with_odd_field_errors(client_token, fake_session):
    fake_session.reply(422, {"error": "bad", "fieldErrors": 5})
    assert _run(client_token, "create-card", *CARD_ARGS) == 2
