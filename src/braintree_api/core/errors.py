"""
Exception taxonomy for gateway operations.

Every fatal kind derives from :class:`GatewayError`. Validation failures are
reported through :class:`ErrorWithResponse`, which is deliberately not a
``GatewayError``: callers are expected to show the field errors and resubmit.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "ConfigError",
    "ConfigurationError",
    "DownForMaintenanceError",
    "ErrorWithResponse",
    "FieldError",
    "GatewayError",
    "ParseError",
    "RedirectStateError",
    "ServerError",
    "UnexpectedError",
    "UpgradeRequiredError",
]


class ConfigError(Exception):
    """Raised when the local client configuration or client token is invalid."""


class GatewayError(Exception):
    """Base class for failures the client cannot recover from."""

    default_message = "Gateway request failed"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class AuthenticationError(GatewayError):
    default_message = "Authentication failed; the client token may have expired"


class AuthorizationError(GatewayError):
    default_message = "The client token is not authorized for this operation"


class UpgradeRequiredError(GatewayError):
    default_message = "This client version is no longer supported by the gateway"


class ServerError(GatewayError):
    default_message = "The gateway encountered an internal error"


class DownForMaintenanceError(GatewayError):
    default_message = "The gateway is down for maintenance"


class UnexpectedError(GatewayError):
    default_message = "Unexpected response from the gateway"


class ParseError(GatewayError):
    default_message = "Parsing server response failed"


class ConfigurationError(GatewayError):
    default_message = "PayPal credentials or setup are invalid"


class RedirectStateError(GatewayError):
    default_message = "Redirect handshake is not awaiting a result"


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str
    code: Optional[str] = None
    field_errors: tuple = ()

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "FieldError":
        nested = _as_list(data.get("fieldErrors"))
        return cls(
            field=str(data.get("field", "")),
            message=str(data.get("message", "")),
            code=data.get("code"),
            field_errors=tuple(
                cls.from_json(item) for item in nested if isinstance(item, dict)
            ),
        )


class ErrorWithResponse(Exception):
    """
    The gateway rejected the submitted data (HTTP 422).

    ``body`` holds the unmodified response. ``message`` and ``field_errors``
    are read from it on demand; a body that is not the usual error document
    yields no field errors rather than raising.
    """

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Validation failed with status {status_code}: {body}")

    def _document(self) -> Dict[str, Any]:
        try:
            data = json.loads(self.body)
        except (TypeError, ValueError):
            return {}
        return data if isinstance(data, dict) else {}

    @property
    def message(self) -> Optional[str]:
        error = self._document().get("error")
        if isinstance(error, dict):
            return error.get("message")
        if isinstance(error, str):
            return error
        return None

    @property
    def field_errors(self) -> List[FieldError]:
        items = _as_list(self._document().get("fieldErrors"))
        return [FieldError.from_json(item) for item in items if isinstance(item, dict)]

    def error_for(self, field: str) -> Optional[FieldError]:
        """Breadth-first lookup of the error reported for ``field``."""
        pending = list(self.field_errors)
        while pending:
            current = pending.pop(0)
            if current.field == field:
                return current
            pending.extend(current.field_errors)
        return None
