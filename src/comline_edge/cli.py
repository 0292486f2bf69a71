from __future__ import annotations

import asyncio
import uuid

import typer
import uvicorn
from prometheus_client import CollectorRegistry
from rich import print

from comline_edge.config import Settings
from comline_edge.core.logging import configure_logging, get_logger
from comline_edge.core.metrics import LookupMetrics
from comline_edge.core.normalize import PublicProduct
from comline_edge.core.normalize.mapper import attributes_to_dict, public_product_to_dict
from comline_edge.errors import error_code_for
from comline_edge.parsers import parse_attributes
from comline_edge.services import ProductLookupService, run_doctor_checks
from comline_edge.upstream import build_http_client
from comline_edge.web import create_app, dump_json

app = typer.Typer(no_args_is_help=True, help="ComLine edge: выдача карточки товара из ComLine CTO API")


def _load_settings() -> Settings:
    try:
        return Settings.load()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _print_json(payload: object) -> None:
    # Без rich: разметка и перенос строк ломают JSON.
    typer.echo(dump_json(payload, indent=2))


@app.command("serve")
def serve_command(
    host: str | None = typer.Option(None, help="Адрес (по умолчанию COMLINE_HOST)"),
    port: int | None = typer.Option(None, help="Порт (по умолчанию COMLINE_PORT)"),
) -> None:
    settings = _load_settings()
    configure_logging(settings.logs_dir, correlation_id="server", level=settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


async def _run_lookup(settings: Settings, identifier: str, access_token: str, correlation_id: str) -> PublicProduct:
    logger = get_logger("comline_edge.lookup", correlation_id)
    async with build_http_client(settings.http) as client:
        service = ProductLookupService(
            api=settings.api,
            client=client,
            metrics=LookupMetrics(CollectorRegistry()),
            logger=logger,
        )
        return await service.lookup(identifier, access_token)


@app.command("lookup")
def lookup_command(
    identifier: str = typer.Argument(..., help="CTO-номер товара"),
    access_token: str = typer.Option(..., "--access-token", help="Токен доступа клиента"),
) -> None:
    settings = _load_settings()
    correlation_id = uuid.uuid4().hex
    configure_logging(settings.logs_dir, correlation_id=correlation_id, level=settings.log_level)

    try:
        product = asyncio.run(_run_lookup(settings, identifier, access_token, correlation_id))
    except Exception as exc:  # noqa: BLE001
        print(f"[red]{error_code_for(exc)}[/red]: {exc.__class__.__name__}")
        raise typer.Exit(1) from exc

    _print_json(public_product_to_dict(product))


@app.command("parse-attributes")
def parse_attributes_command(
    description: str = typer.Argument(..., help="Текст comline_artikelbeschreibung"),
) -> None:
    _print_json(attributes_to_dict(parse_attributes(description)))


@app.command("doctor")
def doctor_command() -> None:
    settings = _load_settings()
    checks = run_doctor_checks(settings)

    print("Результаты doctor:")
    for check in checks:
        status = check["status"].upper()
        print(f"- [{status}] {check['check']}: {check['detail']}")

    if any(check["status"] == "fail" for check in checks):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
