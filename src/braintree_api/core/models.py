"""
Payment-method records and the builders that create them.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, runtime_checkable

from .errors import ParseError

__all__ = [
    "Card",
    "CardBuilder",
    "PayPalAccount",
    "PayPalAccountBuilder",
    "PaymentMethod",
    "PaymentMethodBuilder",
    "json_for_type",
    "parse_payment_methods",
]

PAYMENT_METHODS_KEY = "paymentMethods"


def _load_object(body: str) -> Dict[str, Any]:
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise ParseError() from exc
    if not isinstance(data, dict):
        raise ParseError("Expected a JSON object in the server response")
    return data


def _require_nonce(data: Mapping[str, Any]) -> str:
    nonce = data.get("nonce")
    if not isinstance(nonce, str) or not nonce:
        raise ParseError("Payment method is missing its nonce")
    return nonce


def _details(data: Mapping[str, Any]) -> Mapping[str, Any]:
    details = data.get("details")
    if details is None:
        return {}
    if not isinstance(details, Mapping):
        raise ParseError("Payment method details must be a JSON object")
    return details


@dataclass(frozen=True)
class PaymentMethod:
    nonce: str
    resource_type: str
    description: Optional[str] = None
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "PaymentMethod":
        return cls(
            nonce=_require_nonce(data),
            resource_type=str(data.get("type", "")),
            description=data.get("description"),
            raw=dict(data),
        )


@dataclass(frozen=True)
class Card(PaymentMethod):
    card_type: Optional[str] = None
    last_two: Optional[str] = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Card":
        details = _details(data)
        return cls(
            nonce=_require_nonce(data),
            resource_type=str(data.get("type", "CreditCard")),
            description=data.get("description"),
            raw=dict(data),
            card_type=details.get("cardType"),
            last_two=details.get("lastTwo"),
        )


@dataclass(frozen=True)
class PayPalAccount(PaymentMethod):
    email: Optional[str] = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "PayPalAccount":
        details = _details(data)
        return cls(
            nonce=_require_nonce(data),
            resource_type=str(data.get("type", "PayPalAccount")),
            description=data.get("description"),
            raw=dict(data),
            email=details.get("email"),
        )


@runtime_checkable
class PaymentMethodBuilder(Protocol):
    """
    Capabilities a payment-method variant needs to be created or tokenized.

    ``resource_key`` names the response array holding created records and
    ``api_path`` the creation sub-path under ``payment_methods/``.
    """

    resource_key: str
    api_path: str

    def to_params(self) -> Dict[str, Any]:
        ...

    def from_json(self, data: Mapping[str, Any]) -> PaymentMethod:
        ...

    def with_validation(self, validate: bool) -> "PaymentMethodBuilder":
        ...


@dataclass(frozen=True)
class CardBuilder:
    number: Optional[str] = None
    expiration_month: Optional[str] = None
    expiration_year: Optional[str] = None
    expiration_date: Optional[str] = None
    cvv: Optional[str] = None
    postal_code: Optional[str] = None
    validate: bool = True

    resource_key = "creditCards"
    api_path = "credit_cards"

    def to_params(self) -> Dict[str, Any]:
        card: Dict[str, Any] = {}
        for key, value in (
            ("number", self.number),
            ("expirationMonth", self.expiration_month),
            ("expirationYear", self.expiration_year),
            ("expirationDate", self.expiration_date),
            ("cvv", self.cvv),
        ):
            if value is not None:
                card[key] = value
        if self.postal_code is not None:
            card["billingAddress"] = {"postalCode": self.postal_code}
        card["options"] = {"validate": self.validate}
        return {"creditCard": card}

    def from_json(self, data: Mapping[str, Any]) -> Card:
        return Card.from_json(data)

    def with_validation(self, validate: bool) -> "CardBuilder":
        return replace(self, validate=validate)


@dataclass(frozen=True)
class PayPalAccountBuilder:
    consent_code: str
    correlation_id: Optional[str] = None
    validate: bool = True

    resource_key = "paypalAccounts"
    api_path = "paypal_accounts"

    def to_params(self) -> Dict[str, Any]:
        account: Dict[str, Any] = {"consentCode": self.consent_code}
        if self.correlation_id is not None:
            account["correlationId"] = self.correlation_id
        account["options"] = {"validate": self.validate}
        return {"paypalAccount": account}

    def from_json(self, data: Mapping[str, Any]) -> PayPalAccount:
        return PayPalAccount.from_json(data)

    def with_validation(self, validate: bool) -> "PayPalAccountBuilder":
        return replace(self, validate=validate)


_PARSERS_BY_TYPE: Dict[str, Callable[[Mapping[str, Any]], PaymentMethod]] = {
    "CreditCard": Card.from_json,
    "PayPalAccount": PayPalAccount.from_json,
}


def json_for_type(body: str, resource_key: str) -> Dict[str, Any]:
    """
    Return the first record of the array stored under ``resource_key``.

    An absent key or an empty array is a protocol error, never "nothing created".
    """
    records = _load_object(body).get(resource_key)
    if not isinstance(records, list) or not records:
        raise ParseError(f"Response has no '{resource_key}' records")
    first = records[0]
    if not isinstance(first, dict):
        raise ParseError(f"Malformed '{resource_key}' record in response")
    return first


def parse_payment_methods(body: str) -> List[PaymentMethod]:
    records = _load_object(body).get(PAYMENT_METHODS_KEY)
    if not isinstance(records, list):
        raise ParseError(f"Response has no '{PAYMENT_METHODS_KEY}' list")

    methods: List[PaymentMethod] = []
    for record in records:
        if not isinstance(record, dict):
            raise ParseError(f"Malformed '{PAYMENT_METHODS_KEY}' entry in response")
        parser = _PARSERS_BY_TYPE.get(str(record.get("type")), PaymentMethod.from_json)
        methods.append(parser(record))
    return methods
