from __future__ import annotations

import json
from typing import Any

import typer

from cloudapi_client import MISSING, ApiError, AuthError, CloudApiError, Envelope
from .. import console
from ..config import load_config
from ..http import make_client


def _parse_query(items: list[str] | None) -> dict[str, str]:
    query: dict[str, str] = {}
    for item in items or []:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            console.err(f"Invalid query parameter (expected key=value): {item}")
            raise typer.Exit(code=2)
        query[key.strip()] = value
    return query


def _parse_body(data: str | None) -> Any:
    if data is None:
        return None
    try:
        return json.loads(data)
    except ValueError as e:
        console.err(f"Invalid JSON body: {e}")
        raise typer.Exit(code=2)


def _envelope_json(envelope: Envelope) -> dict[str, Any]:
    res = envelope.res
    return {
        "status": getattr(res, "status_code", None),
        "headers": dict(getattr(res, "headers", None) or {}),
        "payload": envelope.payload,
    }


def fetch(
        path: str = typer.Argument(..., help="Request path, e.g. /my/machines."),
        query: list[str] | None = typer.Option(None, "-q", "--query", help="Query parameter key=value (repeatable)."),
        method: str = typer.Option("get", "-X", "--method", help="HTTP method: get or post."),
        data: str | None = typer.Option(None, "--data", help="JSON body for POST requests."),
        include_res: bool = typer.Option(False, "--include-res", help="Include response status and headers."),
        default: str | None = typer.Option(None, "--default", help="Value to print instead of failing."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
) -> None:
    params = _parse_query(query)
    body = _parse_body(data)

    cfg = load_config()
    try:
        client = make_client(cfg, base_url_override=base_url)
    except CloudApiError as e:
        console.err(f"Invalid configuration: {e}")
        raise typer.Exit(code=2)

    try:
        result = client.fetch(
            path,
            method=method,
            query=params,
            include_res=include_res,
            payload=body,
            default=MISSING if default is None else default,
        )
    except AuthError as e:
        console.err(f"Unauthorized: {e}")
        raise typer.Exit(code=2)
    except ApiError as e:
        console.err(f"Request failed ({e.status_code} {e.error}): {e}")
        raise typer.Exit(code=2)
    except CloudApiError as e:
        console.err(f"Request failed: {e}")
        raise typer.Exit(code=2)
    except ValueError as e:
        console.err(str(e))
        raise typer.Exit(code=2)
    finally:
        client.close()

    if isinstance(result, Envelope):
        result = _envelope_json(result)
    console.print_json(result)
