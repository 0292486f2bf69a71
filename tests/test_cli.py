from __future__ import annotations

import json

import httpx
import pytest
from typer.testing import CliRunner

from comline_edge import cli
from comline_edge.cli import app

runner = CliRunner()


@pytest.fixture()
def configured_env(monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setenv("COMLINE_API_BASE_URL", "https://ctofinder.example.test/4DCGI/direct")
    monkeypatch.setenv("COMLINE_API_CUSTOMER_NUMBER", "15017319")
    monkeypatch.setenv("COMLINE_API_PASSWORD", "testPassword")
    monkeypatch.delenv("COMLINE_LOG_DIR", raising=False)
    monkeypatch.delenv("COMLINE_HTTP_DNS_RESOLVER", raising=False)


def test_parse_attributes_prints_json() -> None:
    result = runner.invoke(app, ["parse-attributes", "Base: #Apple M4 Pro Chip #48 GB RAM ##Copyright notice"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {
        "baseConfiguration": "Base",
        "processor": "Apple M4 Pro Chip",
        "memory": "48 GB RAM",
        "legal": ["Copyright notice"],
    }


def test_doctor_passes_with_configuration(configured_env) -> None:  # noqa: ANN001
    result = runner.invoke(app, ["doctor"])

    assert result.exit_code == 0
    assert "comline_password: задан" in result.stdout
    assert "testPassword" not in result.stdout


def test_doctor_fails_without_credentials(configured_env, monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setenv("COMLINE_API_CUSTOMER_NUMBER", "")
    monkeypatch.setenv("COMLINE_API_PASSWORD", "")

    result = runner.invoke(app, ["doctor"])

    assert result.exit_code == 1
    assert "[FAIL] comline_customer_number" in result.stdout


def test_invalid_setting_is_reported(configured_env, monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setenv("COMLINE_HTTP_DNS_RESOLVER", "netty")

    result = runner.invoke(app, ["doctor"])

    assert result.exit_code != 0


@pytest.fixture()
def upstream(monkeypatch, configured_env) -> tuple[list[httpx.Response], list[httpx.Request]]:  # noqa: ANN001
    responses: list[httpx.Response] = []
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return responses.pop(0)

    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(
        cli,
        "build_http_client",
        lambda config: httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    return responses, requests


def test_lookup_prints_product_json(upstream, product_payload) -> None:  # noqa: ANN001
    responses, requests = upstream
    responses.append(httpx.Response(200, content=json.dumps(product_payload).encode("utf-8")))

    result = runner.invoke(app, ["lookup", "CZ1FU-013020", "--access-token", "test-token"])

    assert result.exit_code == 0
    product = json.loads(result.stdout)
    assert product["productIdentifier"] == "CZ1FU-013020"
    assert product["grossPrice"] == 4899
    assert product["attributes"]["keyboard"] == "Beleuchtetes Magic Keyboard mit Touch ID (britisch)"
    assert "accesstoken=test-token" in str(requests[0].url)


def test_lookup_failure_exits_with_error_code(upstream) -> None:  # noqa: ANN001
    responses, _ = upstream
    responses.append(httpx.Response(404))

    result = runner.invoke(app, ["lookup", "X", "--access-token", "test-token"])

    assert result.exit_code == 1
    assert "PRODUCT_NOT_FOUND" in result.stdout
    assert "testPassword" not in result.stdout
