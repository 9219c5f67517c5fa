from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping
from urllib.parse import urlencode

from .config_types import DEFAULT_URL, ClientConfig, validate_config
from .errors import ValidationError
from .errors_utils import error_log_data
from .signer import Signer
from .transport import Transport

METHODS = ("get", "post")


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True)
class RequestOptions:
    method: str = "get"
    query: Mapping[str, Any] | None = None
    include_res: bool = False
    payload: Any = None
    default: Any = MISSING

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return [_query_value(v) for v in value]
    return value


def build_target(path: str, query: Mapping[str, Any] | None = None) -> str:
    if not query:
        return path
    params = {k: _query_value(v) for k, v in query.items() if v is not None}
    qs = urlencode(params, doseq=True)
    return f"{path}?{qs}" if qs else path


class CloudApi:
    def __init__(self, cfg: ClientConfig | None = None, *, transport=None):
        cfg = validate_config(cfg)
        self._cfg = cfg
        self._log = cfg.log
        self.url = cfg.url or DEFAULT_URL
        self.key_id = cfg.key_id
        self.token = cfg.token
        self.signer = Signer(cfg.key, cfg.key_id, cfg.token)
        self.transport = transport if transport is not None else Transport(cfg)

    def close(self) -> None:
        self.transport.close()

    def fetch(
            self,
            path: str = "/",
            *,
            method: str = "get",
            query: Mapping[str, Any] | None = None,
            include_res: bool = False,
            payload: Any = None,
            default: Any = MISSING,
    ) -> Any:
        """Perform one request against CloudAPI.

        Returns the response payload, or the whole ``Envelope`` when
        ``include_res`` is set. On failure the error is reported to the
        configured log sink; ``default`` (any value, falsy included) is then
        returned instead of raising.
        """
        options = RequestOptions(
            method=(method or "get").lower(),
            query=query,
            include_res=include_res,
            payload=payload,
            default=default,
        )
        if options.method not in METHODS:
            raise ValueError(f"unsupported method: {method}")

        target = build_target(path, options.query)
        try:
            envelope = self._invoke(target, options)
        except ValidationError:
            raise
        except Exception as e:
            self._log(target, MappingProxyType(error_log_data(e)))
            if options.has_default:
                return options.default
            raise

        if options.include_res:
            return envelope
        return envelope.payload

    def _invoke(self, target: str, options: RequestOptions):
        if options.method == "post":
            return self.transport.post(target, self.signer, payload=options.payload)
        return self.transport.get(target, self.signer)
