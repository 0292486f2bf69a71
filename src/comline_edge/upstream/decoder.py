from __future__ import annotations

import json
import logging
from decimal import Decimal

from pydantic import ValidationError

from comline_edge.errors import (
    MalformedUpstreamResponse,
    ProductNotFound,
    UnexpectedUpstreamStatus,
    UpstreamServerError,
)
from comline_edge.upstream.models import ENVELOPE_RECORD_FIELD, UpstreamEnvelope, UpstreamProductRecord

MAX_LOGGED_BODY_CHARS = 2000

module_logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> None:
    raise ValueError(f"Non-finite number in JSON: {name}")


def decode_envelope(body: bytes | str) -> UpstreamEnvelope:
    """Разбирает JSON ответа; любая ошибка формата -> MalformedUpstreamResponse."""
    try:
        document = json.loads(body, parse_float=Decimal, parse_constant=_reject_constant)
        return UpstreamEnvelope.model_validate(document)
    except (ValidationError, ValueError, TypeError) as exc:
        raise MalformedUpstreamResponse("Failed to parse product from ComLine API response") from exc


def _body_for_log(body: bytes | str) -> str:
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    if len(text) > MAX_LOGGED_BODY_CHARS:
        return text[:MAX_LOGGED_BODY_CHARS] + "...(truncated)"
    return text


def interpret_response(
    status_code: int,
    body: bytes | str,
    identifier: str,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> UpstreamProductRecord:
    log = logger or module_logger
    fields = {"identifier": identifier, "http_status": status_code}

    if 200 <= status_code < 300:
        log.debug("Parsing ComLine API response for CTO number %s", identifier, extra=fields)
        envelope = decode_envelope(body)
        if envelope.record is None:
            log.error("No %s found in ComLine API response", ENVELOPE_RECORD_FIELD, extra=fields)
            raise MalformedUpstreamResponse(
                f"Invalid response from ComLine API: missing {ENVELOPE_RECORD_FIELD}"
            )
        return envelope.record

    if 400 <= status_code < 500:
        log.warning("ComLine API returned client error %s for %s", status_code, identifier, extra=fields)
        if body:
            log.warning("ComLine API error response body: %s", _body_for_log(body), extra=fields)
        raise ProductNotFound(identifier, status_code)

    if 500 <= status_code < 600:
        log.error("ComLine API returned server error %s for %s", status_code, identifier, extra=fields)
        if body:
            log.error("ComLine API server error response body: %s", _body_for_log(body), extra=fields)
        raise UpstreamServerError(status_code)

    log.warning("ComLine API returned unexpected status %s for %s", status_code, identifier, extra=fields)
    raise UnexpectedUpstreamStatus(status_code)
