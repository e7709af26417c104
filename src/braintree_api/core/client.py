"""
Synchronous communication with the gateway.

Every call blocks for one network round trip and either returns a domain
object or raises. Run it on a worker thread or task queue if the caller
must stay responsive.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

import requests

from .auth import AuthContext
from .classifier import classify
from .config import ClientConfig
from .device import DeviceDataCollector, DeviceDataEnvironment
from .errors import ConfigError, GatewayError
from .http import POST, RequestExecutor, RequestSpec
from .models import (
    PayPalAccount,
    PaymentMethod,
    PaymentMethodBuilder,
    json_for_type,
    parse_payment_methods,
)
from .paypal import PayPalLauncher, RedirectHandshake

__all__ = [
    "BraintreeClient",
    "PAYMENT_METHOD_ENDPOINT",
    "SDK_VERSION",
]

PAYMENT_METHOD_ENDPOINT = "payment_methods"
SDK_VERSION = "0.1.0"
DEFAULT_INTEGRATION_TYPE = "custom"


class BraintreeClient:
    """
    Creates, tokenizes and lists payment methods for one client token.
    """

    def __init__(
        self,
        auth: AuthContext,
        *,
        session: Optional[requests.Session] = None,
        integration_type: str = DEFAULT_INTEGRATION_TYPE,
        device_environment: DeviceDataEnvironment = DeviceDataEnvironment.SANDBOX,
        paypal_launcher: Optional[PayPalLauncher] = None,
        device_data_collector: Optional[DeviceDataCollector] = None,
    ) -> None:
        self.auth = auth
        self.executor = RequestExecutor(auth, session=session)
        self.integration_type = integration_type
        self.device_environment = device_environment
        self.device_data_collector = device_data_collector
        self.handshake = (
            RedirectHandshake(auth, paypal_launcher) if paypal_launcher is not None else None
        )

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any) -> "BraintreeClient":
        kwargs.setdefault("integration_type", config.integration_type)
        kwargs.setdefault("device_environment", config.device_environment)
        return cls(config.auth, **kwargs)

    @property
    def is_paypal_enabled(self) -> bool:
        return self.auth.wallet_enabled

    @property
    def is_cvv_challenge_present(self) -> bool:
        return self.auth.cvv_challenge_required

    @property
    def is_postal_code_challenge_present(self) -> bool:
        return self.auth.postal_code_challenge_required

    def create(self, builder: PaymentMethodBuilder) -> PaymentMethod:
        """
        Create a payment method in the gateway.

        Raises :class:`ErrorWithResponse` when the gateway rejects the data,
        :class:`ParseError` when the response does not contain the created
        record, and another :class:`GatewayError` for every other failure.
        """
        params: Dict[str, Any] = dict(builder.to_params())
        params.update(self.auth.default_parameters())

        path = f"{PAYMENT_METHOD_ENDPOINT}/{builder.api_path}"
        logging.info("Creating payment method at %s", path)
        body = classify(self.executor.post(path, params)).unwrap()

        return builder.from_json(json_for_type(body, builder.resource_key))

    def tokenize(self, builder: PaymentMethodBuilder) -> str:
        """
        Create a payment method without validation and return its nonce.

        Validation happens later, when a server uses the nonce.
        """
        return self.create(builder.with_validation(False)).nonce

    def list_payment_methods(self) -> List[PaymentMethod]:
        logging.info("Fetching payment methods from %s", PAYMENT_METHOD_ENDPOINT)
        body = classify(
            self.executor.get(PAYMENT_METHOD_ENDPOINT, self.auth.default_parameters())
        ).unwrap()
        return parse_payment_methods(body)

    def start_pay_with_paypal(self, surface: Any, request_code: int) -> None:
        self._require_handshake().start(surface, request_code)

    def finish_pay_with_paypal(
        self,
        result_code: int,
        payload: Union[Mapping[str, Any], str, bytes, None] = None,
    ) -> Optional[PayPalAccount]:
        """
        Complete the PayPal flow and create the resulting account.

        Returns ``None`` when the user canceled. Raises
        :class:`ConfigurationError` when PayPal rejected the merchant setup.
        """
        builder = self._require_handshake().finish(result_code, payload)
        if builder is None:
            return None
        return self.create(builder)

    def send_analytics_event(
        self,
        event: str,
        integration_type: Optional[str] = None,
        *,
        executor: Any = None,
    ) -> None:
        """
        Report ``event`` to the analytics service, best effort.

        When ``executor`` (anything with ``submit``) is given the request runs
        there. Failures never reach the caller.
        """
        if not self.auth.analytics_enabled:
            return

        task_args = (event, integration_type or self.integration_type)
        if executor is not None:
            try:
                executor.submit(self._send_analytics_quietly, *task_args)
            except RuntimeError as exc:
                # Covers shut-down and broken pools.
                logging.debug("Discarding analytics event %s: %s", event, exc)
        else:
            self._send_analytics_quietly(*task_args)

    def collect_device_data(
        self,
        surface: Any,
        merchant_id: Union[DeviceDataEnvironment, str, None] = None,
        collector_url: Optional[str] = None,
    ) -> str:
        """
        Collect device information for fraud identification.

        Pass either a :class:`DeviceDataEnvironment` or an explicit merchant id
        and collector URL. Defaults to the client's configured environment.
        """
        if self.device_data_collector is None:
            raise ConfigError("No device data collector was configured")
        if merchant_id is None or isinstance(merchant_id, DeviceDataEnvironment):
            environment = merchant_id or self.device_environment
            merchant_id, collector_url = environment.merchant_id, environment.collector_url
        elif collector_url is None:
            raise ValueError("collector_url is required with an explicit merchant id")
        return self.device_data_collector(surface, merchant_id, collector_url)

    def _require_handshake(self) -> RedirectHandshake:
        if self.handshake is None:
            raise ConfigError("No PayPal launcher was configured")
        return self.handshake

    def _analytics_body(self, event: str, integration_type: str) -> Dict[str, Any]:
        return {
            "analytics": [{"kind": event}],
            "_meta": {
                "integrationType": integration_type,
                "platform": "python",
                "sdkVersion": SDK_VERSION,
            },
        }

    def _send_analytics_quietly(self, event: str, integration_type: str) -> None:
        try:
            raw = self.executor.execute(
                RequestSpec(
                    POST,
                    self.auth.analytics_url,
                    params=self._analytics_body(event, integration_type),
                )
            )
        except (GatewayError, TypeError, ValueError) as exc:
            # Analytics failures must not interrupt normal application activity.
            logging.debug("Discarding analytics event %s: %s", event, exc)
            return
        logging.debug("Analytics event %s sent (status %s)", event, raw.status_code)
