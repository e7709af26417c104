"""
Core primitives that implement the gateway request pipeline.
"""

from .auth import AuthContext, PayPalSettings, decode_client_token
from .classifier import FailureKind, Outcome, classify
from .client import BraintreeClient
from .config import (
    ClientConfig,
    ClientParameters,
    load_client_config,
)
from .device import DeviceDataCollector, DeviceDataEnvironment
from .errors import (
    AuthenticationError,
    AuthorizationError,
    ConfigError,
    ConfigurationError,
    DownForMaintenanceError,
    ErrorWithResponse,
    FieldError,
    GatewayError,
    ParseError,
    RedirectStateError,
    ServerError,
    UnexpectedError,
    UpgradeRequiredError,
)
from .http import RawResult, RequestExecutor, RequestSpec
from .models import (
    Card,
    CardBuilder,
    PayPalAccount,
    PayPalAccountBuilder,
    PaymentMethod,
    PaymentMethodBuilder,
    json_for_type,
    parse_payment_methods,
)
from .paypal import HandshakeState, PayPalLauncher, RedirectHandshake, ResultCode

__all__ = [
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
    "DeviceDataCollector",
    "DeviceDataEnvironment",
    "DownForMaintenanceError",
    "ErrorWithResponse",
    "FailureKind",
    "FieldError",
    "GatewayError",
    "HandshakeState",
    "Outcome",
    "ParseError",
    "PayPalAccount",
    "PayPalAccountBuilder",
    "PayPalLauncher",
    "PayPalSettings",
    "PaymentMethod",
    "PaymentMethodBuilder",
    "RawResult",
    "RedirectHandshake",
    "RedirectStateError",
    "RequestExecutor",
    "RequestSpec",
    "ResultCode",
    "ServerError",
    "UnexpectedError",
    "UpgradeRequiredError",
    "classify",
    "decode_client_token",
    "json_for_type",
    "load_client_config",
    "parse_payment_methods",
]
