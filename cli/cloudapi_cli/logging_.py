from __future__ import annotations

import logging
from typing import Any, Mapping

from cloudapi_client.config_types import LogSink


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    # httpx is noisy at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.DEBUG if verbose else logging.WARNING)


def logger_sink(logger: logging.Logger) -> LogSink:
    def _sink(parts: str, data: Mapping[str, Any]) -> None:
        logger.error("request %s failed: %s", parts, dict(data))

    return _sink
