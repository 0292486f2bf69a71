from __future__ import annotations

import re
from urllib.parse import urlencode, urlsplit, urlunsplit

from comline_edge.config import ComlineApiConfig

MASK = "***"

# Только значения параметров pwd/accesstoken; имя должно стоять сразу после ? или &.
SECRET_PARAM_PATTERN = re.compile(r"(?<=[?&])(pwd|accesstoken)=[^&#]*")


def build_query_params(api: ComlineApiConfig, identifier: str, access_token: str) -> list[tuple[str, str]]:
    return [
        ("mid", api.mid),
        ("action", api.action),
        ("kdnr", api.customer_number),
        ("pwd", api.password),
        ("accesstoken", access_token),
        ("cto_nr", identifier),
    ]


def build_product_url(api: ComlineApiConfig, identifier: str, access_token: str) -> str:
    parts = urlsplit(api.base_url)
    query = urlencode(build_query_params(api, identifier, access_token))
    if parts.query:
        query = f"{parts.query}&{query}"
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def sanitize_url_for_logging(url: str) -> str:
    return SECRET_PARAM_PATTERN.sub(lambda match: f"{match.group(1)}={MASK}", url)
