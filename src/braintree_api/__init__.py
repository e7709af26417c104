"""
Public facade for the gateway client package.

The module re-exports the most useful pieces for integrators so they can
``from braintree_api import ...`` without navigating the package.
"""

from .api import create_client, tokenize_card
from .core import (
    AuthContext,
    AuthenticationError,
    AuthorizationError,
    BraintreeClient,
    Card,
    CardBuilder,
    ClientConfig,
    ClientParameters,
    ConfigError,
    ConfigurationError,
    DeviceDataEnvironment,
    DownForMaintenanceError,
    ErrorWithResponse,
    FailureKind,
    GatewayError,
    Outcome,
    ParseError,
    PayPalAccount,
    PayPalAccountBuilder,
    PaymentMethod,
    PaymentMethodBuilder,
    RedirectHandshake,
    RedirectStateError,
    ResultCode,
    ServerError,
    UnexpectedError,
    UpgradeRequiredError,
    classify,
    decode_client_token,
    load_client_config,
)

__all__ = (
    "AuthContext",
    "AuthenticationError",
    "AuthorizationError",
    "BraintreeClient",
    "Card",
    "CardBuilder",
    "ClientConfig",
    "ClientParameters",
    "ConfigError",
    "ConfigurationError",
    "DeviceDataEnvironment",
    "DownForMaintenanceError",
    "ErrorWithResponse",
    "FailureKind",
    "GatewayError",
    "Outcome",
    "ParseError",
    "PayPalAccount",
    "PayPalAccountBuilder",
    "PaymentMethod",
    "PaymentMethodBuilder",
    "RedirectHandshake",
    "RedirectStateError",
    "ResultCode",
    "ServerError",
    "UnexpectedError",
    "UpgradeRequiredError",
    "classify",
    "create_client",
    "decode_client_token",
    "load_client_config",
    "tokenize_card",
)
