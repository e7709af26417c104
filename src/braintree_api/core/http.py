"""
Request execution against the gateway.

The executor only moves bytes: it injects the fingerprint credential, performs
a single attempt, and hands back the status and body. Interpreting the status
is left to :mod:`braintree_api.core.classifier`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import requests

from .auth import AuthContext
from .errors import UnexpectedError

__all__ = [
    "RawResult",
    "RequestExecutor",
    "RequestSpec",
]

GET = "GET"
POST = "POST"
JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class RequestSpec:
    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RawResult:
    status_code: int
    body: str


class RequestExecutor:
    """
    Issues requests on behalf of a single :class:`AuthContext`.
    """

    def __init__(
        self,
        auth: AuthContext,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.auth = auth
        self.session = session or requests.Session()

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> RawResult:
        return self.execute(RequestSpec(GET, self.auth.url(path), params=dict(params or {})))

    def post(self, path: str, body: Optional[Mapping[str, Any]] = None) -> RawResult:
        return self.execute(RequestSpec(POST, self.auth.url(path), params=dict(body or {})))

    def execute(self, spec: RequestSpec) -> RawResult:
        method = spec.method.upper()
        params = dict(spec.params)
        for key, value in self.auth.default_parameters().items():
            params.setdefault(key, value)

        headers: Dict[str, str] = dict(spec.headers)
        if method == GET:
            kwargs: Dict[str, Any] = {"params": params}
        elif method == POST:
            headers["Content-Type"] = JSON_CONTENT_TYPE
            kwargs = {"json": params}
        else:
            raise ValueError(f"Unsupported HTTP method '{spec.method}'")

        logging.debug("%s %s", method, spec.url)
        try:
            response = self.session.request(method, spec.url, headers=headers, **kwargs)
        except requests.RequestException as exc:
            raise UnexpectedError(f"Request to {spec.url} failed: {exc}") from exc

        logging.debug("%s %s -> %s", method, spec.url, response.status_code)
        return RawResult(status_code=response.status_code, body=response.text)
