from .client import MISSING, CloudApi, RequestOptions, build_target
from .config_types import DEFAULT_URL, ClientConfig, LogSink
from .errors import ApiError, AuthError, CloudApiError, NetworkError, ValidationError
from .transport import Envelope, Transport

__all__ = [
    "CloudApi",
    "ClientConfig",
    "RequestOptions",
    "Envelope",
    "Transport",
    "LogSink",
    "MISSING",
    "DEFAULT_URL",
    "build_target",
    "ApiError",
    "AuthError",
    "CloudApiError",
    "NetworkError",
    "ValidationError",
]
