"""
Minimal script that uses the public API to tokenize a card and list stored methods.
"""

from __future__ import annotations

import argparse
import logging
import sys

from braintree_api import (
    CardBuilder,
    ConfigError,
    ErrorWithResponse,
    GatewayError,
    create_client,
    load_client_config,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Tokenize a card using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing BRAINTREE_* settings",
    )
    parser.add_argument(
        "--client-token",
        help="Provide the client token without relying on environment data",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--number", default="4111111111111111")
    parser.add_argument("--expiration-date", default="12/2030")
    parser.add_argument("--cvv")
    parser.add_argument("--postal-code")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_client_config(env_file=args.env_file, client_token=args.client_token)
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_client(config=config)
    logging.info("Talking to %s", config.auth.api_base_url)

    if client.is_cvv_challenge_present and not args.cvv:
        logging.warning("The gateway requires a CVV for new cards")
    if client.is_postal_code_challenge_present and not args.postal_code:
        logging.warning("The gateway requires a postal code for new cards")

    card = CardBuilder(
        number=args.number,
        expiration_date=args.expiration_date,
        cvv=args.cvv,
        postal_code=args.postal_code,
    )

    try:
        nonce = client.tokenize(card)
        client.send_analytics_event("custom.tokenize.succeeded")
        methods = client.list_payment_methods()
    except ErrorWithResponse as exc:
        logging.error("Card rejected: %s", exc.message or exc.body)
        return 2
    except GatewayError as exc:
        logging.error("Gateway request failed: %s", exc)
        return 1

    logging.info("Card tokenized; nonce %s", nonce)
    for method in methods:
        logging.info("Stored %s: %s", method.resource_type, method.description)
    return 0


if __name__ == "__main__":
    sys.exit(main())
