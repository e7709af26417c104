"""
Capabilities granted by a client token.
"""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigError

__all__ = [
    "AuthContext",
    "PayPalSettings",
    "decode_client_token",
]

FINGERPRINT_PARAMETER = "authorizationFingerprint"


@dataclass(frozen=True)
class PayPalSettings:
    """Merchant PayPal setup handed to the external wallet launcher."""

    client_id: Optional[str] = None
    environment: Optional[str] = None
    display_name: Optional[str] = None
    privacy_url: Optional[str] = None
    user_agreement_url: Optional[str] = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "PayPalSettings":
        return cls(
            client_id=data.get("clientId"),
            environment=data.get("environment"),
            display_name=data.get("displayName"),
            privacy_url=data.get("privacyUrl"),
            user_agreement_url=data.get("userAgreementUrl"),
        )


@dataclass(frozen=True)
class AuthContext:
    """
    Immutable capability bundle derived from a client token.

    Instances are shared freely between threads; nothing mutates them after
    construction.
    """

    api_base_url: str
    fingerprint: str
    wallet_enabled: bool = False
    cvv_challenge_required: bool = False
    postal_code_challenge_required: bool = False
    analytics_url: Optional[str] = None
    paypal: Optional[PayPalSettings] = None

    @property
    def analytics_enabled(self) -> bool:
        return bool(self.analytics_url)

    def default_parameters(self) -> Dict[str, str]:
        return {FINGERPRINT_PARAMETER: self.fingerprint}

    def url(self, path: str) -> str:
        return f"{self.api_base_url.rstrip('/')}/v1/{path.lstrip('/')}"

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "AuthContext":
        try:
            api_base_url = data["clientApiUrl"]
            fingerprint = data[FINGERPRINT_PARAMETER]
        except KeyError as exc:
            raise ConfigError(f"Client token is missing '{exc.args[0]}'") from exc
        if not api_base_url or not fingerprint:
            raise ConfigError("Client token has an empty API URL or fingerprint")

        challenges = {str(item).lower() for item in data.get("challenges") or ()}
        analytics = data.get("analytics") or {}
        paypal = data.get("paypal")

        return cls(
            api_base_url=str(api_base_url).rstrip("/"),
            fingerprint=str(fingerprint),
            wallet_enabled=bool(data.get("paypalEnabled", False)),
            cvv_challenge_required="cvv" in challenges,
            postal_code_challenge_required="postal_code" in challenges,
            analytics_url=analytics.get("url") if isinstance(analytics, Mapping) else None,
            paypal=PayPalSettings.from_json(paypal) if isinstance(paypal, Mapping) else None,
        )


def _load_token_json(raw: str) -> Dict[str, Any]:
    text = raw.strip()
    if text.startswith("{"):
        return json.loads(text)
    padded = text + "=" * (-len(text) % 4)
    decoded = base64.b64decode(padded, validate=True)
    return json.loads(decoded.decode("utf-8"))


def decode_client_token(raw: str) -> AuthContext:
    """
    Decode a client token into an :class:`AuthContext`.

    Tokens arrive either as the raw JSON document or as its base64 encoding.
    """
    if not raw or not raw.strip():
        raise ConfigError("Client token must not be empty")
    try:
        data = _load_token_json(raw)
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        raise ConfigError("Client token is not valid JSON or base64-encoded JSON") from exc
    if not isinstance(data, dict):
        raise ConfigError("Client token must decode to a JSON object")
    return AuthContext.from_json(data)
