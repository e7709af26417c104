"""
Command-line interface for exercising the gateway client.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Sequence, Tuple

import requests

from .api import create_client
from .core.client import BraintreeClient
from .core.config import load_client_config
from .core.errors import ConfigError, ErrorWithResponse, GatewayError
from .core.models import CardBuilder


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def _add_card_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--number", required=True, help="Card number")
    parser.add_argument("--expiration-month", required=True, help="Two-digit month")
    parser.add_argument("--expiration-year", required=True, help="Four-digit year")
    parser.add_argument("--cvv", help="Card verification value")
    parser.add_argument("--postal-code", help="Billing postal code")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="braintree-api",
        description="Create, tokenize and list payment methods through the gateway",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing BRAINTREE_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("list", help="List the payment methods stored for the client token")
    _add_card_arguments(
        commands.add_parser("tokenize-card", help="Tokenize a card, deferring validation")
    )
    _add_card_arguments(
        commands.add_parser("create-card", help="Create a card with gateway validation")
    )
    return parser


def _card_from_args(args: argparse.Namespace) -> CardBuilder:
    return CardBuilder(
        number=args.number,
        expiration_month=args.expiration_month,
        expiration_year=args.expiration_year,
        cvv=args.cvv,
        postal_code=args.postal_code,
    )


def _run_command(client: BraintreeClient, args: argparse.Namespace) -> None:
    if args.command == "list":
        methods = client.list_payment_methods()
        logging.info("Found %d payment method(s)", len(methods))
        for method in methods:
            print(f"{method.resource_type}\t{method.nonce}\t{method.description or ''}")
    elif args.command == "tokenize-card":
        print(client.tokenize(_card_from_args(args)))
    elif args.command == "create-card":
        card = client.create(_card_from_args(args))
        logging.info("Created %s card ending in %s", card.card_type, card.last_two)
        print(card.nonce)


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_client_config(env_file=args.env_file, overrides=overrides)
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_client(config=config, session=requests.Session())

    try:
        _run_command(client, args)
    except ErrorWithResponse as exc:
        logging.error("Gateway rejected the request: %s", exc.message or exc.body)
        for field_error in exc.field_errors:
            logging.error("  %s: %s", field_error.field, field_error.message)
        return 2
    except GatewayError as exc:
        logging.error("%s failed: %s", args.command, exc)
        return 1
    return 0


def main() -> None:
    sys.exit(run_cli())
