from __future__ import annotations

import asyncio
import logging
import time

import httpx

from comline_edge.config import ComlineApiConfig
from comline_edge.core.metrics import LookupMetrics
from comline_edge.core.normalize import PublicProduct
from comline_edge.core.normalize.mapper import to_public_product
from comline_edge.errors import ProductNotFound, failure_reason
from comline_edge.upstream import build_product_url, interpret_response, sanitize_url_for_logging


class ProductLookupService:
    """Один GET к ComLine на вызов: классификация ответа, маппинг, проверка CTO-номера."""

    def __init__(
        self,
        api: ComlineApiConfig,
        client: httpx.AsyncClient,
        metrics: LookupMetrics,
        logger: logging.Logger | logging.LoggerAdapter,
    ):
        self.api = api
        self.client = client
        self.metrics = metrics
        self.logger = logger

    @staticmethod
    def _elapsed_ms(started: float) -> int:
        return int((time.perf_counter() - started) * 1000)

    async def lookup(self, identifier: str, access_token: str) -> PublicProduct:
        url = build_product_url(self.api, identifier, access_token)
        started = time.perf_counter()
        self.logger.info(
            "Calling ComLine API for product %s: %s",
            identifier,
            sanitize_url_for_logging(url),
            extra={"identifier": identifier},
        )

        try:
            response = await self.client.get(url)
            self.logger.info(
                "ComLine API responded with HTTP %s",
                response.status_code,
                extra={
                    "identifier": identifier,
                    "http_status": response.status_code,
                    "duration_ms": self._elapsed_ms(started),
                },
            )
            record = interpret_response(response.status_code, response.content, identifier, self.logger)

            if record.identifier != identifier:
                self.logger.warning(
                    "CTO number mismatch: requested %s, returned %s",
                    identifier,
                    record.identifier,
                    extra={"identifier": identifier},
                )
                raise ProductNotFound(identifier)

            product = to_public_product(record)
        except asyncio.CancelledError as exc:
            duration_ms = self._elapsed_ms(started)
            self.metrics.record_failure(failure_reason(exc))
            self.metrics.observe_duration(duration_ms / 1000)
            self.logger.warning(
                "ComLine API call for %s cancelled after %sms",
                identifier,
                duration_ms,
                extra={"identifier": identifier, "error_type": exc.__class__.__name__, "duration_ms": duration_ms},
            )
            raise
        except Exception as exc:
            duration_ms = self._elapsed_ms(started)
            self.metrics.record_failure(failure_reason(exc))
            self.metrics.observe_duration(duration_ms / 1000)
            self.logger.error(
                "Error calling ComLine API for %s: %s: %s (%sms)",
                identifier,
                exc.__class__.__name__,
                exc,
                duration_ms,
                extra={
                    "identifier": identifier,
                    "error_type": exc.__class__.__name__,
                    "http_status": getattr(exc, "status_code", None),
                    "duration_ms": duration_ms,
                },
            )
            raise

        duration_ms = self._elapsed_ms(started)
        self.metrics.record_success()
        self.metrics.observe_duration(duration_ms / 1000)
        self.logger.info(
            "Successfully mapped product %s",
            identifier,
            extra={"identifier": identifier, "duration_ms": duration_ms},
        )
        return product
