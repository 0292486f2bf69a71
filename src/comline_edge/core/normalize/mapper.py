from __future__ import annotations

from datetime import date, datetime
from typing import Any

from comline_edge.core.normalize.models import ProductAttributes, PublicProduct
from comline_edge.parsers import normalize_image_url, parse_attributes
from comline_edge.upstream.models import UpstreamProductRecord


def _to_date(value: datetime | None) -> date | None:
    return value.date() if value is not None else None


def to_public_product(record: UpstreamProductRecord) -> PublicProduct:
    """
    Поля ComLine -> публичная модель:
    haendler_ek_netto -> database_price, pos_vk -> retail_price,
    uvp_netto -> recommended_retail_price, pos_vk_brutto -> gross_price,
    gewicht_brutto -> product_weight, url_bild -> url и product_image.
    """
    image_url = normalize_image_url(record.image_url)
    return PublicProduct(
        identifier=record.identifier,
        name=record.name,
        description=record.description,
        database_price=record.dealer_net_price,
        retail_price=record.retail_net_price,
        recommended_retail_price=record.recommended_retail_net_price,
        gross_price=record.retail_gross_price,
        manufacturer_product_number=record.manufacturer_part_number,
        ean=record.ean,
        length=record.length,
        width=record.width,
        height=record.height,
        net_weight=record.net_weight,
        product_weight=record.gross_weight,
        delivery_date=_to_date(record.delivery_date),
        url=image_url,
        product_image=image_url,
        attributes=parse_attributes(record.description),
    )


def _drop_empty(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None and value != []}


def attributes_to_dict(attributes: ProductAttributes) -> dict[str, Any]:
    return _drop_empty(
        {
            "baseConfiguration": attributes.base_configuration,
            "processor": attributes.processor,
            "memory": attributes.memory,
            "storage": attributes.storage,
            "powerAdapter": attributes.power_adapter,
            "keyboard": attributes.keyboard,
            "display": attributes.display,
            "legal": list(attributes.legal),
            "other": list(attributes.other),
        }
    )


def public_product_to_dict(product: PublicProduct) -> dict[str, Any]:
    """JSON-документ ответа; Decimal и date оставляем как есть, их пишет dump_json."""
    payload = _drop_empty(
        {
            "productIdentifier": product.identifier,
            "name": product.name,
            "description": product.description,
            "databasePrice": product.database_price,
            "retailPrice": product.retail_price,
            "recommendedRetailPrice": product.recommended_retail_price,
            "grossPrice": product.gross_price,
            "manufacturerProductNumber": product.manufacturer_product_number,
            "ean": product.ean,
            "length": product.length,
            "width": product.width,
            "height": product.height,
            "netWeight": product.net_weight,
            "productWeight": product.product_weight,
            "deliveryDate": product.delivery_date,
            "url": product.url,
            "productImage": product.product_image,
        }
    )
    payload["attributes"] = attributes_to_dict(product.attributes)
    return payload
