from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://ctofinder.comline-shop.de/4DCGI/direct"
DEFAULT_MID = "219"
DEFAULT_ACTION = "getCTOConf"

DNS_RESOLVER_NATIVE = "native"
DNS_RESOLVER_PLATFORM = "platform"
DNS_RESOLVER_MODES = (DNS_RESOLVER_NATIVE, DNS_RESOLVER_PLATFORM)


@dataclass(slots=True)
class ComlineApiConfig:
    base_url: str = DEFAULT_BASE_URL
    mid: str = DEFAULT_MID
    action: str = DEFAULT_ACTION
    customer_number: str = ""
    password: str = ""


@dataclass(slots=True)
class HttpClientConfig:
    connect_timeout_ms: int = 10_000
    read_timeout_ms: int = 30_000
    write_timeout_ms: int = 10_000
    pending_acquire_timeout_ms: int = 45_000
    max_connections: int = 100
    dns_resolver: str = DNS_RESOLVER_NATIVE


@dataclass(slots=True)
class Settings:
    api: ComlineApiConfig = field(default_factory=ComlineApiConfig)
    http: HttpClientConfig = field(default_factory=HttpClientConfig)
    logs_dir: Path | None = None
    log_level: int = logging.INFO
    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def load(cls) -> Settings:
        load_dotenv(override=False)

        api = ComlineApiConfig(
            base_url=os.getenv("COMLINE_API_BASE_URL", DEFAULT_BASE_URL),
            mid=os.getenv("COMLINE_API_MID", DEFAULT_MID),
            action=os.getenv("COMLINE_API_ACTION", DEFAULT_ACTION),
            customer_number=os.getenv("COMLINE_API_CUSTOMER_NUMBER", ""),
            password=os.getenv("COMLINE_API_PASSWORD", ""),
        )

        http = HttpClientConfig(
            connect_timeout_ms=cls._positive_int("COMLINE_HTTP_CONNECT_TIMEOUT_MS", 10_000),
            read_timeout_ms=cls._positive_int("COMLINE_HTTP_READ_TIMEOUT_MS", 30_000),
            write_timeout_ms=cls._positive_int("COMLINE_HTTP_WRITE_TIMEOUT_MS", 10_000),
            pending_acquire_timeout_ms=cls._positive_int("COMLINE_HTTP_PENDING_ACQUIRE_TIMEOUT_MS", 45_000),
            max_connections=cls._positive_int("COMLINE_HTTP_MAX_CONNECTIONS", 100),
            dns_resolver=os.getenv("COMLINE_HTTP_DNS_RESOLVER", DNS_RESOLVER_NATIVE).strip().lower(),
        )
        if http.dns_resolver not in DNS_RESOLVER_MODES:
            raise ValueError(
                f"COMLINE_HTTP_DNS_RESOLVER must be one of {', '.join(DNS_RESOLVER_MODES)}, "
                f"got {http.dns_resolver!r}"
            )

        logs_env = os.getenv("COMLINE_LOG_DIR")
        logs_dir = Path(logs_env).expanduser().resolve() if logs_env else None

        level_name = os.getenv("COMLINE_LOG_LEVEL", "INFO").strip().upper()
        log_level = logging.getLevelName(level_name)
        if not isinstance(log_level, int):
            raise ValueError(f"Unknown COMLINE_LOG_LEVEL: {level_name}")

        return cls(
            api=api,
            http=http,
            logs_dir=logs_dir,
            log_level=log_level,
            host=os.getenv("COMLINE_HOST", "0.0.0.0"),
            port=cls._positive_int("COMLINE_PORT", 8080),
        )

    @staticmethod
    def _positive_int(name: str, default: int) -> int:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError as exc:
            raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
        if value < 1:
            raise ValueError(f"{name} must be >= 1, got {value}")
        return value
