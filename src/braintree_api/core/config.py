"""
Configuration objects and helpers for the gateway client.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .auth import AuthContext, decode_client_token
from .device import DeviceDataEnvironment
from .errors import ConfigError

__all__ = [
    "ClientConfig",
    "ClientParameters",
    "ConfigError",
    "load_client_config",
]

_PARAMETER_TO_ENV_KEY = {
    "client_token": "BRAINTREE_CLIENT_TOKEN",
    "integration_type": "BRAINTREE_INTEGRATION_TYPE",
    "device_environment": "BRAINTREE_DEVICE_ENVIRONMENT",
}


def _read_env_file(path: Path) -> Dict[str, str]:
    """Read the BRAINTREE_* settings from a .env file; other lines are ignored."""
    values: Dict[str, str] = {}
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return values

    known_keys = set(_PARAMETER_TO_ENV_KEY.values())
    for raw_line in data.splitlines():
        key, sep, value = raw_line.strip().partition("=")
        key, value = key.strip(), value.strip()
        if not sep or key not in known_keys:
            continue
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        values[key] = value
    return values


def _resolve_settings(
    *,
    env_file: Optional[str],
    base: Optional[Mapping[str, str]],
    overrides: Mapping[str, str],
) -> Dict[str, str]:
    """
    Layer the settings sources: ``base`` (default :data:`os.environ`), then
    ``env_file`` for keys still unset, then ``overrides``, which always win.
    """
    source = os.environ if base is None else base
    settings = {key: source[key] for key in _PARAMETER_TO_ENV_KEY.values() if key in source}

    if env_file is not None:
        for key, value in _read_env_file(Path(env_file)).items():
            settings.setdefault(key, value)

    settings.update(overrides)
    return settings


def _stringify(value: Any) -> str:
    if isinstance(value, DeviceDataEnvironment):
        return value.name.lower()
    return str(value)


@dataclass(frozen=True)
class ClientParameters:
    """
    Explicit parameter bundle for constructing :class:`ClientConfig`.

    Callers can either instantiate this helper or pass the individual keyword
    arguments directly to :func:`load_client_config`.
    """

    client_token: Optional[str] = None
    integration_type: Optional[str] = None
    device_environment: Optional[DeviceDataEnvironment | str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[ClientParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown client parameter '{key}'") from exc
        overrides[env_key] = _stringify(value)
    return overrides


@dataclass(frozen=True)
class ClientConfig:
    auth: AuthContext
    integration_type: str = "custom"
    device_environment: DeviceDataEnvironment = DeviceDataEnvironment.SANDBOX

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientConfig":
        raw_token = values.get("BRAINTREE_CLIENT_TOKEN")
        if raw_token is None:
            raise ConfigError("BRAINTREE_CLIENT_TOKEN must be provided")
        auth = decode_client_token(raw_token)

        integration_type = values.get("BRAINTREE_INTEGRATION_TYPE", "custom").strip()
        if not integration_type:
            raise ConfigError("BRAINTREE_INTEGRATION_TYPE must not be empty")

        try:
            device_environment = DeviceDataEnvironment.from_name(
                values.get("BRAINTREE_DEVICE_ENVIRONMENT", "sandbox")
            )
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

        return cls(
            auth=auth,
            integration_type=integration_type,
            device_environment=device_environment,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[ClientParameters] = None,
        client_token: Optional[str] = None,
        integration_type: Optional[str] = None,
        device_environment: Optional[DeviceDataEnvironment | str] = None,
    ) -> "ClientConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "client_token": client_token,
                "integration_type": integration_type,
                "device_environment": device_environment,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        return cls.from_mapping(
            _resolve_settings(env_file=env_file, base=base, overrides=merged_overrides)
        )


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    client_token: Optional[str] = None,
    integration_type: Optional[str] = None,
    device_environment: Optional[DeviceDataEnvironment | str] = None,
) -> ClientConfig:
    """
    Convenience wrapper that mirrors :meth:`ClientConfig.from_env`.

    The configuration can be provided entirely through environment variables,
    a ``.env`` file, direct keyword arguments, or any combination of the three.
    """
    return ClientConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        client_token=client_token,
        integration_type=integration_type,
        device_environment=device_environment,
    )
