from __future__ import annotations

import logging
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from pathlib import Path

from pythonjsonlogger import jsonlogger

TRANSPORT_LOGGERS = ("httpx", "httpcore")

_request_correlation_id: ContextVar[str | None] = ContextVar("comline_correlation_id", default=None)


def bind_correlation_id(correlation_id: str) -> Token:
    return _request_correlation_id.set(correlation_id)


def reset_correlation_id(token: Token) -> None:
    _request_correlation_id.reset(token)


def current_correlation_id() -> str | None:
    return _request_correlation_id.get()


class CorrelationIdFilter(logging.Filter):
    """Id запроса из контекста, иначе id процесса, заданный при настройке."""

    def __init__(self, correlation_id: str):
        super().__init__()
        self._correlation_id = correlation_id

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = current_correlation_id() or self._correlation_id
        return True


def configure_logging(log_dir: Path | None, correlation_id: str, level: int = logging.INFO) -> None:
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    correlation_filter = CorrelationIdFilter(correlation_id)

    text_formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(text_formatter)
    stream_handler.addFilter(correlation_filter)
    root.addHandler(stream_handler)

    # httpx пишет полный URL запроса, вместе с pwd и accesstoken, на уровне INFO.
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    if log_dir is None:
        return

    log_dir.mkdir(parents=True, exist_ok=True)
    utc_day = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    text_path = log_dir / f"comline-edge-{utc_day}.log"
    json_path = log_dir / f"comline-edge-{utc_day}.jsonl"

    json_formatter = jsonlogger.JsonFormatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(correlation_id)s %(message)s"
    )

    text_handler = logging.FileHandler(text_path, encoding="utf-8")
    text_handler.setFormatter(text_formatter)
    text_handler.addFilter(correlation_filter)

    json_handler = logging.FileHandler(json_path, encoding="utf-8")
    json_handler.setFormatter(json_formatter)
    json_handler.addFilter(correlation_filter)

    root.addHandler(text_handler)
    root.addHandler(json_handler)


class _CorrelationAdapter(logging.LoggerAdapter):
    def process(self, msg, kwargs):  # noqa: ANN001
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_logger(name: str, correlation_id: str | None = None) -> logging.Logger | logging.LoggerAdapter:
    base_logger = logging.getLogger(name)
    if correlation_id is None:
        return base_logger
    return _CorrelationAdapter(base_logger, extra={"correlation_id": correlation_id})
