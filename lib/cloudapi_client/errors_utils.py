from __future__ import annotations

import json
from typing import Any

from .errors import ApiError


def parse_api_error_detail(details: str | None) -> dict | None:
    if not details:
        return None
    try:
        data = json.loads(details)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def error_log_data(exc: BaseException) -> dict[str, Any]:
    """Log fields for a failed call; always carries ``message``."""
    if isinstance(exc, ApiError):
        return dict(exc.payload)
    return {"message": str(exc), "error": type(exc).__name__}
