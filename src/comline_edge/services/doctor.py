from __future__ import annotations

import platform
import sys
from urllib.parse import urlsplit

from comline_edge.config import Settings


def run_doctor_checks(settings: Settings) -> list[dict[str, str]]:
    checks: list[dict[str, str]] = []

    checks.append(
        {
            "check": "python_version",
            "status": "ok" if sys.version_info >= (3, 11) else "warn",
            "detail": platform.python_version(),
        }
    )

    base_url = urlsplit(settings.api.base_url)
    checks.append(
        {
            "check": "comline_base_url",
            "status": "ok" if base_url.scheme in {"http", "https"} and base_url.netloc else "fail",
            "detail": settings.api.base_url,
        }
    )

    for name, value in [
        ("comline_mid", settings.api.mid),
        ("comline_action", settings.api.action),
        ("comline_customer_number", settings.api.customer_number),
    ]:
        checks.append({"check": name, "status": "ok" if value else "fail", "detail": value or "не задано"})

    checks.append(
        {
            "check": "comline_password",
            "status": "ok" if settings.api.password else "fail",
            # Значение пароля в вывод не попадает.
            "detail": "задан" if settings.api.password else "не задан",
        }
    )

    http = settings.http
    checks.append(
        {
            "check": "http_timeouts",
            "status": "ok" if http.read_timeout_ms >= http.connect_timeout_ms else "warn",
            "detail": (
                f"connect={http.connect_timeout_ms}ms read={http.read_timeout_ms}ms "
                f"write={http.write_timeout_ms}ms pool={http.pending_acquire_timeout_ms}ms"
            ),
        }
    )
    checks.append(
        {
            "check": "http_pool",
            "status": "ok",
            "detail": f"max_connections={http.max_connections} dns_resolver={http.dns_resolver}",
        }
    )

    checks.append(
        {
            "check": "log_dir",
            "status": "ok" if settings.logs_dir is None or settings.logs_dir.parent.exists() else "warn",
            "detail": str(settings.logs_dir) if settings.logs_dir else "stderr",
        }
    )

    return checks
