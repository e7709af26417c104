"""
Classification of raw gateway responses.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Optional, Type

from .errors import (
    AuthenticationError,
    AuthorizationError,
    DownForMaintenanceError,
    ErrorWithResponse,
    GatewayError,
    ServerError,
    UnexpectedError,
    UpgradeRequiredError,
)
from .http import RawResult

__all__ = [
    "FailureKind",
    "Outcome",
    "classify",
]

SUCCESS_CODES = frozenset({200, 201, 202})
UNPROCESSABLE_ENTITY = 422


class FailureKind(enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    UNAUTHORIZED = "unauthorized"
    UPGRADE_REQUIRED = "upgrade_required"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    UNEXPECTED = "unexpected"


_FATAL_BY_STATUS: Dict[int, FailureKind] = {
    401: FailureKind.UNAUTHENTICATED,
    403: FailureKind.UNAUTHORIZED,
    426: FailureKind.UPGRADE_REQUIRED,
    500: FailureKind.SERVER_ERROR,
    503: FailureKind.UNAVAILABLE,
}

_ERROR_BY_KIND: Dict[FailureKind, Type[GatewayError]] = {
    FailureKind.UNAUTHENTICATED: AuthenticationError,
    FailureKind.UNAUTHORIZED: AuthorizationError,
    FailureKind.UPGRADE_REQUIRED: UpgradeRequiredError,
    FailureKind.SERVER_ERROR: ServerError,
    FailureKind.UNAVAILABLE: DownForMaintenanceError,
    FailureKind.UNEXPECTED: UnexpectedError,
}


@dataclass(frozen=True)
class Outcome:
    """
    Typed result of a gateway call.

    Use the ``ok``, ``validation_failure`` and ``fatal`` constructors; exactly
    one of the three variants is populated.
    """

    body: Optional[str] = None
    status_code: Optional[int] = None
    failure: Optional[FailureKind] = None
    validation_failed: bool = False

    @classmethod
    def ok(cls, body: str) -> "Outcome":
        return cls(body=body)

    @classmethod
    def validation_failure(cls, status_code: int, body: str) -> "Outcome":
        return cls(body=body, status_code=status_code, validation_failed=True)

    @classmethod
    def fatal(cls, kind: FailureKind) -> "Outcome":
        return cls(failure=kind)

    @property
    def is_ok(self) -> bool:
        return self.failure is None and not self.validation_failed

    @property
    def is_validation_failure(self) -> bool:
        return self.validation_failed

    @property
    def is_fatal(self) -> bool:
        return self.failure is not None

    def error(self) -> Optional[Exception]:
        """The exception describing this outcome, or ``None`` when it is ``Ok``."""
        if self.failure is not None:
            return _ERROR_BY_KIND[self.failure]()
        if self.validation_failed:
            return ErrorWithResponse(self.status_code, self.body)
        return None

    def unwrap(self) -> str:
        error = self.error()
        if error is not None:
            raise error
        return self.body or ""


def classify(raw: RawResult) -> Outcome:
    status = raw.status_code
    if status in SUCCESS_CODES:
        return Outcome.ok(raw.body)
    if status == UNPROCESSABLE_ENTITY:
        return Outcome.validation_failure(status, raw.body)
    return Outcome.fatal(_FATAL_BY_STATUS.get(status, FailureKind.UNEXPECTED))
