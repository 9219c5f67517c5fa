from __future__ import annotations

import logging

from cloudapi_client import CloudApi
from cloudapi_client.config_types import ClientConfig, LogSink

from .config import AppConfig, normalize_base_url, read_key
from .logging_ import logger_sink

CLI_VERSION = "0.1.0"


def make_client(
    cfg: AppConfig,
    *,
    base_url_override: str | None = None,
    log: LogSink | None = None,
) -> CloudApi:
    base_url = normalize_base_url(base_url_override or cfg.base_url)
    return CloudApi(
        ClientConfig(
            url=base_url,
            key=read_key(cfg.key_file),
            key_id=cfg.key_id,
            token=cfg.token or None,
            log=log or logger_sink(logging.getLogger("cloudapi")),
            env=cfg.env or None,
            client_version=CLI_VERSION,
        )
    )
