"""
Module: connectors.sale_record_adapter

Translates raw sale dictionaries from older clients and the storage table
into the normalized SaleRecord model. Two shapes are accepted:

* client shape:  {"productId", "quantity", "priceAtSale", "revenue", "timestamp" (epoch ms)}
* storage shape: {"product_id", "quantity", "price_at_sale", "revenue", "created_at" (ISO string)}
"""

from datetime import datetime
from typing import Any

from models.sales import SaleRecord, to_local_naive


def _first(raw: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


def _to_quantity(value: Any) -> int:
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"Sale quantity must be a whole number: {value!r}")
    try:
        return int(value)
    except TypeError:
        raise ValueError(f"Unsupported sale quantity: {value!r}") from None


def parse_timestamp(value: Any) -> datetime:
    """Accept datetimes, epoch milliseconds or ISO-8601 strings."""
    if isinstance(value, datetime):
        return to_local_naive(value)
    if isinstance(value, bool):
        raise ValueError(f"Unsupported timestamp value: {value!r}")
    if isinstance(value, int | float):
        return datetime.fromtimestamp(value / 1000)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return to_local_naive(datetime.fromisoformat(text))
        except ValueError:
            raise ValueError(f"Unparseable timestamp: {value!r}") from None
    raise ValueError(f"Unsupported timestamp value: {value!r}")


def normalize_sale_record(raw: dict[str, Any] | SaleRecord) -> SaleRecord:
    """
    Build a SaleRecord from either legacy dict shape.

    Missing revenue is derived as quantity x price; a missing timestamp means "now".

    Raises:
        ValueError: if required fields are missing or invalid.
    """
    if isinstance(raw, SaleRecord):
        return raw

    product_id = _first(raw, "product_id", "productId")
    quantity = _first(raw, "quantity", "qty")
    price = _first(raw, "price_at_sale", "priceAtSale")
    if product_id is None or quantity is None or price is None:
        raise ValueError(f"Sale record is missing product id, quantity or price: {raw}")
    quantity = _to_quantity(quantity)

    revenue = _first(raw, "revenue")
    if revenue is None:
        revenue = quantity * float(price)

    fields: dict[str, Any] = {
        "product_id": str(product_id),
        "quantity": quantity,
        "price_at_sale": float(price),
        "revenue": float(revenue),
    }
    timestamp = _first(raw, "created_at", "timestamp")
    if timestamp is not None:
        fields["timestamp"] = parse_timestamp(timestamp)
    sale_id = _first(raw, "id", "sale_id")
    if sale_id is not None:
        fields["sale_id"] = str(sale_id)
    # pydantic.ValidationError is a ValueError subclass
    return SaleRecord(**fields)


def normalize_sales(rows: list[dict[str, Any]]) -> list[SaleRecord]:
    """Normalize a batch of rows, keeping their order."""
    return [normalize_sale_record(row) for row in rows]
