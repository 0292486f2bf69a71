from __future__ import annotations

import asyncio
from http import HTTPStatus

import httpx

CANCELLED_REASON = "cancelled"


class ComlineError(Exception):
    """Базовая ошибка обращения к ComLine; `error_code` уходит клиенту в JSON."""

    error_code = "INTERNAL_SERVER_ERROR"
    http_status = HTTPStatus.INTERNAL_SERVER_ERROR
    metric_reason = "internal_error"


class ProductNotFound(ComlineError):
    error_code = "PRODUCT_NOT_FOUND"
    http_status = HTTPStatus.NOT_FOUND
    metric_reason = "not_found"

    def __init__(self, identifier: str, status_code: int | None = None):
        self.identifier = identifier
        self.status_code = status_code
        if status_code is None:
            message = f"Product with CTO number {identifier} not found"
        else:
            message = f"Product with CTO number {identifier} not found (HTTP {status_code})"
        super().__init__(message)


class MalformedUpstreamResponse(ComlineError):
    error_code = "MALFORMED_UPSTREAM_RESPONSE"
    metric_reason = "malformed_response"


class UpstreamServerError(ComlineError):
    error_code = "UPSTREAM_SERVER_ERROR"
    metric_reason = "server_error"

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"ComLine API server error (HTTP {status_code})")


class UnexpectedUpstreamStatus(ComlineError):
    error_code = "UNEXPECTED_UPSTREAM_STATUS"
    metric_reason = "unexpected_status"

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Unexpected HTTP status from ComLine API: {status_code}")


def failure_reason(error: BaseException) -> str:
    if isinstance(error, ComlineError):
        return error.metric_reason
    if isinstance(error, asyncio.CancelledError):
        return CANCELLED_REASON
    # Сетевые ошибки и таймауты считаем как 5xx апстрима.
    if isinstance(error, httpx.HTTPError):
        return UpstreamServerError.metric_reason
    return ComlineError.metric_reason


def error_code_for(error: BaseException) -> str:
    if isinstance(error, ComlineError):
        return error.error_code
    if isinstance(error, httpx.HTTPError):
        return "UPSTREAM_UNAVAILABLE"
    return ComlineError.error_code
