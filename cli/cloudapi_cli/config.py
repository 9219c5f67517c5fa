from __future__ import annotations

import os
from dataclasses import dataclass

from cloudapi_client.config_types import DEFAULT_URL
from cloudapi_client.errors import ValidationError

ENV_URL = "CLOUDAPI_URL"
ENV_KEY_ID = "CLOUDAPI_KEY_ID"
ENV_KEY_FILE = "CLOUDAPI_KEY_FILE"
ENV_TOKEN = "CLOUDAPI_TOKEN"
ENV_RUNTIME = "CLOUDAPI_ENV"


@dataclass
class AppConfig:
    base_url: str = DEFAULT_URL
    key_id: str = ""
    key_file: str = ""
    token: str = ""
    env: str = ""


def normalize_base_url(raw: str | None) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    host = value.split("/", 1)[0]
    host = host.split(":", 1)[0].lower()
    if host in {"localhost", "127.0.0.1", "0.0.0.0"}:
        scheme = "http://"
    else:
        scheme = "https://"
    return f"{scheme}{value}"


def load_config() -> AppConfig:
    return AppConfig(
        base_url=normalize_base_url(os.getenv(ENV_URL)) or DEFAULT_URL,
        key_id=(os.getenv(ENV_KEY_ID) or "").strip(),
        key_file=os.path.expanduser((os.getenv(ENV_KEY_FILE) or "").strip()),
        token=(os.getenv(ENV_TOKEN) or "").strip(),
        env=(os.getenv(ENV_RUNTIME) or "").strip(),
    )


def read_key(path: str) -> bytes | None:
    if not path:
        return None
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise ValidationError(f"unable to read key file {path}: {e.strerror or e}") from e
