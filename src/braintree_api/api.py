"""
Public, high-level helpers for talking to the gateway.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import BraintreeClient
from .core.config import ClientConfig, ClientParameters, load_client_config
from .core.device import DeviceDataCollector, DeviceDataEnvironment
from .core.errors import ConfigError
from .core.models import CardBuilder
from .core.paypal import PayPalLauncher

__all__ = [
    "ConfigError",
    "create_client",
    "tokenize_card",
]


def create_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    client_token: Optional[str] = None,
    integration_type: Optional[str] = None,
    device_environment: Optional[DeviceDataEnvironment | str] = None,
    paypal_launcher: Optional[PayPalLauncher] = None,
    device_data_collector: Optional[DeviceDataCollector] = None,
) -> BraintreeClient:
    """
    Construct a :class:`BraintreeClient`.

    Callers can either supply a ready-made :class:`ClientConfig` or let the
    helper assemble one from environment data.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            client_token,
            integration_type,
            device_environment,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_client_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            parameters=parameters,
            client_token=client_token,
            integration_type=integration_type,
            device_environment=device_environment,
        )
    return BraintreeClient.from_config(
        cfg,
        session=session,
        paypal_launcher=paypal_launcher,
        device_data_collector=device_data_collector,
    )


def tokenize_card(
    card: CardBuilder,
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    client_token: Optional[str] = None,
) -> str:
    """
    One-shot helper: build a client and return the nonce for ``card``.
    """
    client = create_client(
        config=config,
        session=session,
        env_file=env_file,
        client_token=client_token,
    )
    return client.tokenize(card)
