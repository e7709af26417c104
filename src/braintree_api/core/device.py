"""
Device-data collection settings for fraud screening.

Collection itself is done by a host-provided collector; this module only
knows where each environment sends its data.
"""

from __future__ import annotations

import enum
from typing import Any, Protocol

__all__ = [
    "DeviceDataCollector",
    "DeviceDataEnvironment",
]

_DEFAULT_MERCHANT_ID = "600000"


class DeviceDataEnvironment(enum.Enum):
    QA = (_DEFAULT_MERCHANT_ID, "https://assets.qa.braintreegateway.com/data/logo.htm")
    SANDBOX = (_DEFAULT_MERCHANT_ID, "https://assets.braintreegateway.com/sandbox/data/logo.htm")
    PRODUCTION = (_DEFAULT_MERCHANT_ID, "https://assets.braintreegateway.com/data/logo.htm")

    @property
    def merchant_id(self) -> str:
        return self.value[0]

    @property
    def collector_url(self) -> str:
        return self.value[1]

    @classmethod
    def from_name(cls, name: str) -> "DeviceDataEnvironment":
        try:
            return cls[name.strip().upper()]
        except KeyError as exc:
            choices = ", ".join(member.name.lower() for member in cls)
            raise ValueError(f"Unknown device data environment '{name}' (expected one of {choices})") from exc


class DeviceDataCollector(Protocol):
    def __call__(self, surface: Any, merchant_id: str, collector_url: str) -> str:
        ...
