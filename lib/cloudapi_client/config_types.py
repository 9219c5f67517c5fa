from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from .errors import ValidationError

DEFAULT_URL = "https://us-east-1.api.joyentcloud.com"
PRODUCTION = "production"


class LogSink(Protocol):
    def __call__(self, parts: str, data: Mapping[str, Any]) -> None: ...


@dataclass(frozen=True)
class ClientConfig:
    url: str = DEFAULT_URL
    key: bytes | None = None
    key_id: str = ""
    token: str | None = None
    log: LogSink | None = None
    env: str | None = None
    timeout_s: float | None = None
    api_version: str | None = "~8"
    client_version: str | None = None


def validate_config(cfg: ClientConfig | None) -> ClientConfig:
    if cfg is None or not cfg.key:
        raise ValidationError("key is required")
    if cfg.log is None:
        raise ValidationError("log is required")
    if cfg.env == PRODUCTION and not cfg.token:
        raise ValidationError("token is required for production")
    return cfg
