# src/api/decoder.py

"""Strict decoding of API JSON payloads into Product objects."""

import logging
import math
from typing import Any

from src.api.errors import DecodeError
from src.models.product import Product

logger = logging.getLogger("catalog_browser.api")

# API camelCase keys for the optional supplementary fields
_OPTIONAL_TEXT_FIELDS: dict[str, str] = {
    "warrantyInformation": "warranty_information",
    "shippingInformation": "shipping_information",
    "returnPolicy": "return_policy",
}


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _number(value: Any) -> float | None:
    # bool is an int subclass and never a valid price or rating
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _count(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _in_range(
    field_name: str,
    value: float | None,
    low: float,
    high: float = math.inf,
) -> float | None:
    """Return *value* when it lies in [low, high], else ``None``."""
    if value is None:
        return None
    if not math.isfinite(value) or not low <= value <= high:
        logger.debug("Ignored out-of-range %s: %r", field_name, value)
        return None
    return value


class ProductDecoder:
    """Turn untyped JSON into immutable ``Product`` values.

    Absent, mistyped or out-of-range optional fields (negative price or
    stock, rating outside 0..5) decode to ``None`` rather than a zero
    value.  Only ``id`` is mandatory.
    """

    @staticmethod
    def decode_product(raw: Any) -> Product:
        """Decode one product object.

        Raises ``DecodeError`` when *raw* is not an object or has no
        integer ``id``.
        """
        if not isinstance(raw, dict):
            msg = f"Expected a product object, got {type(raw).__name__}"
            raise DecodeError(msg)

        product_id = _count(raw.get("id"))
        if product_id is None:
            msg = f"Product has no usable id: {raw.get('id')!r}"
            raise DecodeError(msg)

        stock = _count(raw.get("stock"))
        if stock is not None and stock < 0:
            logger.debug("Ignored negative stock: %r", stock)
            stock = None

        images = raw.get("images")
        optional = {
            attr: _text(raw.get(key))
            for key, attr in _OPTIONAL_TEXT_FIELDS.items()
        }

        return Product(
            id=product_id,
            title=_text(raw.get("title")),
            description=_text(raw.get("description")),
            category=_text(raw.get("category")),
            price=_in_range("price", _number(raw.get("price")), 0.0),
            rating=_in_range("rating", _number(raw.get("rating")), 0.0, 5.0),
            stock=stock,
            brand=_text(raw.get("brand")),
            thumbnail=_text(raw.get("thumbnail")),
            images=(
                tuple(i for i in images if isinstance(i, str))
                if isinstance(images, list)
                else ()
            ),
            minimum_order_quantity=_count(
                raw.get("minimumOrderQuantity")
            ),
            **optional,
        )

    @staticmethod
    def decode_envelope(payload: Any) -> list[Product]:
        """Decode a ``{products: [...], total, skip, limit}`` envelope.

        Elements without a usable id are dropped and logged; a payload
        that is not an envelope raises ``DecodeError``.
        """
        if not isinstance(payload, dict):
            msg = f"Expected a product envelope, got {type(payload).__name__}"
            raise DecodeError(msg)
        raw_products = payload.get("products")
        if not isinstance(raw_products, list):
            msg = "Product envelope has no 'products' array"
            raise DecodeError(msg)

        products: list[Product] = []
        dropped = 0
        for raw in raw_products:
            try:
                products.append(ProductDecoder.decode_product(raw))
            except DecodeError as exc:
                logger.debug("Dropped malformed product: %s", exc)
                dropped += 1

        if dropped:
            logger.warning(
                "Decoding dropped %d malformed products", dropped
            )
        return products

    @staticmethod
    def decode_categories(payload: Any) -> list[str]:
        """Decode the categories list.

        Accepts plain strings or objects carrying a ``slug``.
        """
        if not isinstance(payload, list):
            msg = f"Expected a category list, got {type(payload).__name__}"
            raise DecodeError(msg)

        categories: list[str] = []
        for entry in payload:
            if isinstance(entry, str):
                categories.append(entry)
            elif isinstance(entry, dict) and isinstance(
                entry.get("slug"), str
            ):
                categories.append(entry["slug"])
            else:
                msg = f"Unrecognised category entry: {entry!r}"
                raise DecodeError(msg)
        return categories
