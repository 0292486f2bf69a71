from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from http import HTTPStatus

import httpx
from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from comline_edge.config import Settings
from comline_edge.core.logging import bind_correlation_id, reset_correlation_id
from comline_edge.core.metrics import LookupMetrics
from comline_edge.core.normalize.mapper import public_product_to_dict
from comline_edge.errors import ComlineError, error_code_for
from comline_edge.services import ProductLookupService
from comline_edge.upstream import build_http_client
from comline_edge.web.responses import ExactJSONResponse

CORRELATION_HEADER = "X-Correlation-ID"

logger = logging.getLogger("comline_edge.web")


def error_response(status: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={
            "error": error,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


def create_app(settings: Settings | None = None, service: ProductLookupService | None = None) -> FastAPI:
    """
    Если `service` передан (тесты, CLI), приложение использует его как есть;
    иначе клиент httpx создаётся в lifespan и закрывается при остановке.
    """
    settings = settings or Settings.load()
    metrics = service.metrics if service is not None else LookupMetrics(CollectorRegistry())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client: httpx.AsyncClient | None = None
        if app.state.lookup_service is None:
            client = build_http_client(settings.http)
            app.state.lookup_service = ProductLookupService(
                api=settings.api,
                client=client,
                metrics=metrics,
                logger=logging.getLogger("comline_edge.lookup"),
            )
        try:
            yield
        finally:
            if client is not None:
                await client.aclose()
                app.state.lookup_service = None

    app = FastAPI(title="ComLine Edge Service", version="1.0.0", lifespan=lifespan)
    app.state.lookup_service = service
    app.state.metrics = metrics

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next):  # noqa: ANN001
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex
        token = bind_correlation_id(correlation_id)
        try:
            response = await call_next(request)
        finally:
            reset_correlation_id(token)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response

    @app.exception_handler(ComlineError)
    async def handle_comline_error(request: Request, exc: ComlineError) -> JSONResponse:
        if exc.http_status == HTTPStatus.NOT_FOUND:
            logger.error("Product not found: %s", exc)
        else:
            logger.error("ComLine lookup failed: %s: %s", exc.__class__.__name__, exc)
        return error_response(exc.http_status, exc.error_code, str(exc))

    @app.exception_handler(httpx.HTTPError)
    async def handle_transport_error(request: Request, exc: httpx.HTTPError) -> JSONResponse:
        # Текст исключения httpx может содержать URL с паролем, наружу отдаём только тип.
        logger.error("ComLine API call failed: %s", exc.__class__.__name__)
        return error_response(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            error_code_for(exc),
            f"ComLine API call failed: {exc.__class__.__name__}",
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        missing = ", ".join(str(err["loc"][-1]) for err in exc.errors())
        return error_response(HTTPStatus.BAD_REQUEST, "BAD_REQUEST", f"Invalid or missing parameters: {missing}")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unexpected error occurred")
        return error_response(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            error_code_for(exc),
            "An unexpected error occurred",
        )

    @app.get("/api/v1/products/{identifier}")
    async def get_product(
        identifier: str,
        request: Request,
        access_token: str = Query(..., alias="accessToken"),
    ) -> JSONResponse:
        logger.info("Received request to get product by CTO number: %s", identifier)
        lookup_service: ProductLookupService = request.app.state.lookup_service
        product = await lookup_service.lookup(identifier, access_token)
        logger.info("Successfully retrieved product with CTO number: %s", identifier)
        return ExactJSONResponse(content=public_product_to_dict(product))

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "UP"}

    @app.get("/metrics")
    async def prometheus_metrics(request: Request) -> Response:
        registry = request.app.state.metrics.registry
        return Response(content=generate_latest(registry), media_type=CONTENT_TYPE_LATEST)

    return app
