from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
from prometheus_client import CollectorRegistry

from comline_edge.config import ComlineApiConfig, Settings
from comline_edge.core.metrics import LookupMetrics
from comline_edge.services import ProductLookupService

FIXTURES_DIR = Path(__file__).parent / "fixtures"
CTO_NUMBER = "CZ1FU-013020"


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        api=ComlineApiConfig(
            base_url="https://ctofinder.example.test/4DCGI/direct",
            mid="219",
            action="getCTOConf",
            customer_number="15017319",
            password="testPassword",
        )
    )


@pytest.fixture()
def test_logger() -> logging.Logger:
    logger = logging.getLogger("comline-test")
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.INFO)
    return logger


@pytest.fixture()
def product_payload() -> dict[str, Any]:
    return json.loads((FIXTURES_DIR / "upstream" / "product.json").read_text(encoding="utf-8"))


@pytest.fixture()
def metrics() -> LookupMetrics:
    return LookupMetrics(CollectorRegistry())


@pytest.fixture()
def make_service(settings, metrics, test_logger) -> Callable[..., ProductLookupService]:  # noqa: ANN001
    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> ProductLookupService:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return ProductLookupService(api=settings.api, client=client, metrics=metrics, logger=test_logger)

    return factory


@pytest.fixture()
def calls(metrics) -> Callable[..., float]:  # noqa: ANN001
    def value(result: str, reason: str | None = None) -> float:
        if reason is not None:
            labels = {"result": result, "reason": reason}
            return metrics.registry.get_sample_value("comline_api_calls_total", labels) or 0.0
        return sum(
            sample.value
            for metric in metrics.registry.collect()
            for sample in metric.samples
            if sample.name == "comline_api_calls_total" and sample.labels["result"] == result
        )

    return value
