from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class ProductAttributes:
    base_configuration: str | None = None
    processor: str | None = None
    memory: str | None = None
    storage: str | None = None
    power_adapter: str | None = None
    keyboard: str | None = None
    display: str | None = None
    legal: tuple[str, ...] = ()
    other: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self == ProductAttributes()


@dataclass(frozen=True, slots=True)
class PublicProduct:
    identifier: str
    name: str | None = None
    description: str | None = None
    database_price: Decimal | None = None
    retail_price: Decimal | None = None
    recommended_retail_price: Decimal | None = None
    gross_price: Decimal | None = None
    manufacturer_product_number: str | None = None
    ean: str | None = None
    length: float | None = None
    width: float | None = None
    height: float | None = None
    net_weight: float | None = None
    product_weight: float | None = None
    delivery_date: date | None = None
    url: str | None = None
    product_image: str | None = None
    attributes: ProductAttributes = field(default_factory=ProductAttributes)
