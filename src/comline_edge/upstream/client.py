from __future__ import annotations

import logging

import httpx

from comline_edge.config import DNS_RESOLVER_PLATFORM, HttpClientConfig

logger = logging.getLogger(__name__)

IPV4_ANY = "0.0.0.0"


def build_timeout(config: HttpClientConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.connect_timeout_ms / 1000,
        read=config.read_timeout_ms / 1000,
        write=config.write_timeout_ms / 1000,
        pool=config.pending_acquire_timeout_ms / 1000,
    )


def build_limits(config: HttpClientConfig) -> httpx.Limits:
    return httpx.Limits(
        max_connections=config.max_connections,
        max_keepalive_connections=config.max_connections,
    )


def build_transport(config: HttpClientConfig) -> httpx.AsyncHTTPTransport:
    if config.dns_resolver == DNS_RESOLVER_PLATFORM:
        # Только A-записи через getaddrinfo: обход сетей, где перехват ломает AAAA/IPv6.
        logger.info("Using platform DNS resolution restricted to IPv4")
        return httpx.AsyncHTTPTransport(limits=build_limits(config), local_address=IPV4_ANY)
    logger.info("Using httpx default DNS resolution")
    return httpx.AsyncHTTPTransport(limits=build_limits(config))


def build_http_client(
    config: HttpClientConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    logger.debug(
        "HTTP client configuration: connectTimeout=%sms, readTimeout=%sms, writeTimeout=%sms, "
        "maxConnections=%s, pendingAcquireTimeout=%sms, dnsResolver=%s",
        config.connect_timeout_ms,
        config.read_timeout_ms,
        config.write_timeout_ms,
        config.max_connections,
        config.pending_acquire_timeout_ms,
        config.dns_resolver,
    )
    return httpx.AsyncClient(
        transport=transport or build_transport(config),
        timeout=build_timeout(config),
        follow_redirects=False,
    )
