from __future__ import annotations

import math
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from dateutil import parser as dt_parser
from pydantic import BaseModel, ConfigDict, Field, field_validator

ENVELOPE_RECORD_FIELD = "artikeldaten"
ENVELOPE_CUSTOMER_FIELD = "kundendaten"
ENVELOPE_CHECKSUM_FIELD = "checksum"

PRICE_FIELDS = (
    "dealer_net_price",
    "retail_gross_price",
    "retail_net_price",
    "recommended_retail_net_price",
)
MEASURE_FIELDS = ("length", "width", "height", "net_weight", "gross_weight")

_WIRE_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    coerce_numbers_to_str=True,
    allow_inf_nan=False,
)


def _blank_number(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("boolean is not a number")
    if isinstance(value, str) and not value.strip():
        return None
    return value


class UpstreamProductRecord(BaseModel):
    """Содержимое `artikeldaten` из ответа ComLine."""

    model_config = _WIRE_CONFIG

    identifier: str | None = Field(None, alias="comline_artikelnummer")
    name: str | None = Field(None, alias="comline_artikelbezeichnung")
    description: str | None = Field(None, alias="comline_artikelbeschreibung")
    dealer_net_price: Decimal | None = Field(None, alias="haendler_ek_netto")
    retail_gross_price: Decimal | None = Field(None, alias="pos_vk_brutto")
    retail_net_price: Decimal | None = Field(None, alias="pos_vk")
    recommended_retail_net_price: Decimal | None = Field(None, alias="uvp_netto")
    manufacturer_part_number: str | None = Field(None, alias="hersteller_artikelnummer")
    ean: str | None = Field(None, alias="ean")
    length: float | None = Field(None, alias="artikel_laenge")
    width: float | None = Field(None, alias="artikel_breite")
    height: float | None = Field(None, alias="artikel_hoehe")
    net_weight: float | None = Field(None, alias="gewicht_netto")
    gross_weight: float | None = Field(None, alias="gewicht_brutto")
    delivery_date: datetime | None = Field(None, alias="liefertermin")
    image_url: str | None = Field(None, alias="url_bild")
    reference_article: str | None = Field(None, alias="referenz_artikel")

    @field_validator(*PRICE_FIELDS, mode="before")
    @classmethod
    def _price_input(cls, value: Any) -> Any:
        return _blank_number(value)

    @field_validator(*PRICE_FIELDS)
    @classmethod
    def _finite_price(cls, value: Decimal | None) -> Decimal | None:
        if value is not None and not value.is_finite():
            raise ValueError("price must be a finite number")
        return value

    @field_validator(*MEASURE_FIELDS, mode="before")
    @classmethod
    def _measure_input(cls, value: Any) -> Any:
        value = _blank_number(value)
        # Числа из JSON приходят как Decimal, 1e400 здесь превращается в inf.
        if isinstance(value, Decimal):
            value = float(value)
        return value

    @field_validator(*MEASURE_FIELDS)
    @classmethod
    def _finite_measure(cls, value: float | None) -> float | None:
        if value is not None and not math.isfinite(value):
            raise ValueError("measure must be a finite number")
        return value

    @field_validator("delivery_date", mode="before")
    @classmethod
    def _parse_delivery_date(cls, value: Any) -> Any:
        if value is None or isinstance(value, datetime):
            return value
        if not isinstance(value, str):
            raise ValueError("delivery date must be an ISO-8601 string")
        if not value.strip():
            return None
        return dt_parser.isoparse(value.strip())

    @field_validator("delivery_date")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class UpstreamCustomerData(BaseModel):
    model_config = _WIRE_CONFIG

    first_name: str | None = Field(None, alias="person_vorname")
    last_name: str | None = Field(None, alias="person_nachname")
    email: str | None = Field(None, alias="person_email")
    reference_mid: str | None = Field(None, alias="referenz_mid")
    reference_p2: str | None = Field(None, alias="referenz_p2")
    reference_p3: str | None = Field(None, alias="referenz_p3")
    cto_position_title: str | None = Field(None, alias="ctopos_titel")


class UpstreamEnvelope(BaseModel):
    model_config = _WIRE_CONFIG

    record: UpstreamProductRecord | None = Field(None, alias=ENVELOPE_RECORD_FIELD)
    customer: UpstreamCustomerData | None = Field(None, alias=ENVELOPE_CUSTOMER_FIELD)
    checksum: str | None = Field(None, alias=ENVELOPE_CHECKSUM_FIELD)
