from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import httpx

from .config_types import DEFAULT_URL, ClientConfig
from .errors import ApiError, AuthError, NetworkError
from .signer import Signer


@dataclass(frozen=True)
class Envelope:
    payload: Any
    res: Any


class Transport:
    def __init__(self, cfg: ClientConfig, *, http_transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        headers = {
            "User-Agent": "cloudapi-client/0.1.0",
            "Accept": "application/json",
        }
        if cfg.api_version:
            headers["Accept-Version"] = cfg.api_version
        if cfg.client_version:
            headers["X-Client-Version"] = cfg.client_version

        self._client = httpx.Client(
            base_url=(cfg.url or DEFAULT_URL).rstrip("/"),
            timeout=cfg.timeout_s,
            headers=headers,
            transport=http_transport,
        )

    def close(self) -> None:
        self._client.close()

    def get(self, target: str, signer: Signer) -> Envelope:
        return self._request("GET", target, signer)

    def post(self, target: str, signer: Signer, *, payload: Any | None = None) -> Envelope:
        return self._request("POST", target, signer, json_body=payload)

    def _request(self, method: str, target: str, signer: Signer, *, json_body: Any | None = None) -> Envelope:
        try:
            r = self._client.request(method, target, json=json_body, headers=signer.headers())
        except httpx.RequestError as e:
            raise NetworkError(str(e)) from e

        data: Any = None
        parsed = False
        text = r.text
        if text:
            try:
                data = r.json()
                parsed = True
            except ValueError:
                data = None

        if r.status_code >= 400:
            raise _api_error(method, target, r, data, text)

        return Envelope(payload=data if parsed else (text or None), res=r)


def _api_error(method: str, target: str, r: httpx.Response, data: Any, text: str) -> ApiError:
    message = f"{method} {target} failed with {r.status_code}"
    details = None

    if isinstance(data, dict):
        details = json.dumps(data, ensure_ascii=False)
        message = str(data.get("message") or data.get("detail") or message)
    elif text:
        details = text[:1000]

    error = r.reason_phrase or "Unknown"
    if r.status_code in (401, 403):
        return AuthError(r.status_code, error, message, details)
    return ApiError(r.status_code, error, message, details)
