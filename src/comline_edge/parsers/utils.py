from __future__ import annotations

import logging
import re
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

# Символы, которых не может быть в URI (RFC 3986) даже в экранированных частях.
ILLEGAL_URI_CHARS = re.compile(r"[\s\x00-\x1f\x7f<>\"{}|\\^`]")
BROKEN_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def is_valid_uri(url: str) -> bool:
    if ILLEGAL_URI_CHARS.search(url) or BROKEN_PERCENT_ESCAPE.search(url):
        return False
    if url.count("#") > 1:
        return False
    try:
        parts = urlsplit(url)
        # Проверяет диапазон и формат порта.
        parts.port
    except ValueError:
        return False
    if parts.scheme and not parts.netloc and not parts.path:
        return False
    return True


def normalize_image_url(url: str | None) -> str | None:
    """
    '//host/path' -> 'https://host/path', абсолютные URL без изменений,
    пустые и некорректные строки -> None (без исключения).
    """
    if url is None or not url.strip():
        return None

    candidate = url
    if candidate.startswith("//"):
        candidate = "https:" + candidate
        logger.debug("Converted protocol-relative URL: %s -> %s", url, candidate)

    if not is_valid_uri(candidate):
        logger.warning("Failed to convert invalid URL: %r", url)
        return None
    return candidate
