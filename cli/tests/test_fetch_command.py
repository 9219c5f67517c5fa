from __future__ import annotations

import json

from typer.testing import CliRunner

from cloudapi_cli import main
from cloudapi_cli.commands import fetch_cmd
from cloudapi_cli.config import AppConfig
from cloudapi_client import MISSING, ApiError, AuthError, Envelope, NetworkError

runner = CliRunner()


class _FakeClient:
    def __init__(self, result=None, error: Exception | None = None) -> None:
        self.result = result if result is not None else {"test": 1}
        self.error = error
        self.calls: list[tuple] = []
        self.closed = False

    def fetch(self, path, **kwargs):
        self.calls.append((path, kwargs))
        if self.error is not None:
            if kwargs.get("default") is not MISSING:
                return kwargs["default"]
            raise self.error
        return self.result

    def close(self) -> None:
        self.closed = True


def _install(monkeypatch, client: _FakeClient) -> None:
    monkeypatch.setattr(fetch_cmd, "load_config", lambda: AppConfig())
    monkeypatch.setattr(fetch_cmd, "make_client", lambda *_args, **_kwargs: client)


def test_fetch_prints_payload(monkeypatch) -> None:
    client = _FakeClient()
    _install(monkeypatch, client)

    result = runner.invoke(main.app, ["fetch", "/my/machines", "-q", "state=running", "-q", "limit=2"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"test": 1}
    path, kwargs = client.calls[0]
    assert path == "/my/machines"
    assert kwargs["query"] == {"state": "running", "limit": "2"}
    assert kwargs["method"] == "get"
    assert kwargs["default"] is MISSING
    assert client.closed is True


def test_fetch_post_with_body(monkeypatch) -> None:
    client = _FakeClient()
    _install(monkeypatch, client)

    result = runner.invoke(main.app, ["fetch", "/my/machines", "-X", "post", "--data", '{"name": "bacon"}'])

    assert result.exit_code == 0, result.output
    assert client.calls[0][1]["method"] == "post"
    assert client.calls[0][1]["payload"] == {"name": "bacon"}


def test_fetch_include_res(monkeypatch) -> None:
    class _Res:
        status_code = 200
        headers = {"x-request-id": "abc"}

    client = _FakeClient(result=Envelope(payload={"test": 1}, res=_Res()))
    _install(monkeypatch, client)

    result = runner.invoke(main.app, ["fetch", "/my", "--include-res"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"status": 200, "headers": {"x-request-id": "abc"}, "payload": {"test": 1}}


def test_fetch_default_on_error(monkeypatch) -> None:
    client = _FakeClient(error=NetworkError("boom"))
    _install(monkeypatch, client)

    result = runner.invoke(main.app, ["fetch", "/my", "--default", "fallback"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == "fallback"


def test_fetch_api_error_exits(monkeypatch) -> None:
    client = _FakeClient(error=ApiError(400, "Bad Request", "bacon cannot be limp"))
    _install(monkeypatch, client)

    result = runner.invoke(main.app, ["fetch", "/my"])

    assert result.exit_code == 2
    assert "bacon cannot be limp" in result.output
    assert client.closed is True


def test_fetch_auth_error_exits(monkeypatch) -> None:
    client = _FakeClient(error=AuthError(401, "Unauthorized", "invalid signature"))
    _install(monkeypatch, client)

    result = runner.invoke(main.app, ["fetch", "/my"])

    assert result.exit_code == 2
    assert "Unauthorized" in result.output


def test_fetch_rejects_bad_query(monkeypatch) -> None:
    client = _FakeClient()
    _install(monkeypatch, client)

    result = runner.invoke(main.app, ["fetch", "/my", "-q", "novalue"])

    assert result.exit_code == 2
    assert client.calls == []


def test_fetch_reports_invalid_configuration(monkeypatch) -> None:
    monkeypatch.setattr(fetch_cmd, "load_config", lambda: AppConfig())

    result = runner.invoke(main.app, ["fetch", "/my"])

    assert result.exit_code == 2
    assert "key is required" in result.output


def test_fetch_reports_missing_key_file(monkeypatch, tmp_path) -> None:
    key_file = str(tmp_path / "missing_id_rsa")
    monkeypatch.setattr(fetch_cmd, "load_config", lambda: AppConfig(key_file=key_file))

    result = runner.invoke(main.app, ["fetch", "/my"])

    assert result.exit_code == 2
    assert "unable to read key file" in result.output
