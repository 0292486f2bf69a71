from __future__ import annotations

import json
import re
import uuid
from datetime import date
from decimal import Decimal
from typing import Any

from fastapi.responses import JSONResponse


class _ExactNumbers:
    """
    json не умеет писать Decimal числом без потери знаков.
    Decimal подменяется уникальной строкой-меткой, после dumps метка
    (вместе с кавычками) заменяется на str(Decimal): '12.50' остаётся 12.50.
    """

    def __init__(self):
        self._token = uuid.uuid4().hex
        self._numbers: list[str] = []
        self._pattern = re.compile(rf'"{self._token}:(\d+)"')

    def default(self, value: Any) -> Any:
        if isinstance(value, Decimal):
            if not value.is_finite():
                raise ValueError(f"Non-finite Decimal is not JSON compliant: {value}")
            self._numbers.append(str(value))
            return f"{self._token}:{len(self._numbers) - 1}"
        if isinstance(value, date):
            return value.isoformat()
        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")

    def restore(self, text: str) -> str:
        return self._pattern.sub(lambda match: self._numbers[int(match.group(1))], text)


def dump_json(content: Any, indent: int | None = None) -> str:
    numbers = _ExactNumbers()
    text = json.dumps(
        content,
        ensure_ascii=False,
        allow_nan=False,
        indent=indent,
        separators=(",", ":") if indent is None else None,
        default=numbers.default,
    )
    return numbers.restore(text)


class ExactJSONResponse(JSONResponse):
    """JSONResponse, в котором цены Decimal уходят клиенту всеми цифрами."""

    def render(self, content: Any) -> bytes:
        return dump_json(content).encode("utf-8")
