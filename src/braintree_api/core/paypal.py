"""
Redirect handshake with the external PayPal authorization surface.

Control leaves the client in :meth:`RedirectHandshake.start` and comes back
later as a ``(result_code, payload)`` pair handed to
:meth:`RedirectHandshake.finish`. The handshake itself performs no network
I/O; the builder it returns is submitted through
:meth:`braintree_api.core.client.BraintreeClient.create`.
"""

from __future__ import annotations

import enum
import json
import logging
import threading
from typing import Any, Mapping, Optional, Protocol, Union

from .auth import AuthContext, PayPalSettings
from .errors import ConfigurationError, RedirectStateError
from .models import PayPalAccountBuilder

__all__ = [
    "HandshakeState",
    "PayPalLauncher",
    "RedirectHandshake",
    "ResultCode",
    "builder_from_payload",
]


class ResultCode(enum.IntEnum):
    OK = -1
    CANCELED = 0
    EXTRAS_INVALID = 2


class HandshakeState(enum.Enum):
    IDLE = "idle"
    AWAITING_RESULT = "awaiting_result"
    COMPLETED = "completed"
    CANCELED = "canceled"
    FAILED = "failed"


class PayPalLauncher(Protocol):
    """The host-side component that shows the PayPal authorization surface."""

    def launch(
        self,
        surface: Any,
        correlation_code: int,
        settings: Optional[PayPalSettings],
    ) -> None:
        ...

    def stop(self) -> None:
        ...


def _load_payload(payload: Union[Mapping[str, Any], str, bytes, None]) -> Mapping[str, Any]:
    if isinstance(payload, Mapping):
        return payload
    if isinstance(payload, (str, bytes)):
        data = json.loads(payload)
        if isinstance(data, Mapping):
            return data
    raise ValueError("PayPal result payload is not a JSON object")


def builder_from_payload(
    payload: Union[Mapping[str, Any], str, bytes, None],
) -> PayPalAccountBuilder:
    """
    Convert a successful PayPal authorization result into a builder.

    The consent code is read from ``response.code``. Anything that cannot be
    read is reported as :class:`ConfigurationError`, since PayPal only hands
    back an unusable result when the merchant setup does not match.
    """
    try:
        data = _load_payload(payload)
        response = data.get("response") or {}
        consent_code = response.get("code")
        if not isinstance(consent_code, str) or not consent_code:
            raise ValueError("PayPal result payload has no authorization code")
    except (AttributeError, ValueError) as exc:
        raise ConfigurationError(f"Unable to read PayPal result: {exc}") from exc

    correlation_id = data.get("correlation_id")
    return PayPalAccountBuilder(
        consent_code=consent_code,
        correlation_id=str(correlation_id) if correlation_id is not None else None,
    )


class RedirectHandshake:
    """
    Single-use state machine for one PayPal authorization round trip.

    ``finish`` is accepted once per ``start``. A duplicate or unsolicited
    completion raises :class:`RedirectStateError` instead of yielding a
    second builder.
    """

    def __init__(self, auth: AuthContext, launcher: PayPalLauncher) -> None:
        self.auth = auth
        self.launcher = launcher
        self._lock = threading.Lock()
        self._state = HandshakeState.IDLE
        self._correlation_code: Optional[int] = None

    @property
    def state(self) -> HandshakeState:
        return self._state

    @property
    def correlation_code(self) -> Optional[int]:
        return self._correlation_code

    def start(self, surface: Any, correlation_code: int) -> None:
        with self._lock:
            if self._state is HandshakeState.AWAITING_RESULT:
                raise RedirectStateError(
                    f"Handshake {self._correlation_code} is still awaiting its result"
                )
            self._state = HandshakeState.AWAITING_RESULT
            self._correlation_code = correlation_code

        logging.info("Launching PayPal authorization (request code %s)", correlation_code)
        try:
            self.launcher.launch(surface, correlation_code, self.auth.paypal)
        except Exception:
            with self._lock:
                self._state = HandshakeState.IDLE
                self._correlation_code = None
            raise

    def finish(
        self,
        result_code: int,
        payload: Union[Mapping[str, Any], str, bytes, None] = None,
        *,
        correlation_code: Optional[int] = None,
    ) -> Optional[PayPalAccountBuilder]:
        with self._lock:
            if self._state is not HandshakeState.AWAITING_RESULT:
                raise RedirectStateError(
                    f"Cannot finish handshake in state '{self._state.value}'"
                )
            if correlation_code is not None and correlation_code != self._correlation_code:
                raise RedirectStateError(
                    f"Result for request code {correlation_code} does not match "
                    f"pending request code {self._correlation_code}"
                )
            # Consumed before decoding; an unreadable payload still ends the handshake.
            self._state = HandshakeState.FAILED

        try:
            self.launcher.stop()
        except Exception as exc:  # noqa: BLE001
            logging.warning("PayPal launcher failed to stop: %s", exc)

        if result_code == ResultCode.OK:
            builder = builder_from_payload(payload)
            self._set_state(HandshakeState.COMPLETED)
            return builder

        if result_code == ResultCode.EXTRAS_INVALID:
            raise ConfigurationError()

        logging.info("PayPal authorization canceled (result code %s)", result_code)
        self._set_state(HandshakeState.CANCELED)
        return None

    def _set_state(self, state: HandshakeState) -> None:
        with self._lock:
            self._state = state
