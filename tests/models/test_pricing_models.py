from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from models.enums import Level, PricingStrategyType
from models.pricing import Product
from models.sales import EconomicMetrics, ProductStats, SaleRecord, SalesTrends


@pytest.mark.parametrize(
    "stock, initial_stock, expected",
    [(50, 100, 0.5), (0, 100, 0.0), (100, 100, 1.0), (0, 0, 0.0), (5, 0, 0.0)],
)
def test_product_stock_ratio(stock, initial_stock, expected):
    product = Product(product_id="1", name="Apple", price=1.0, stock=stock, initial_stock=initial_stock)
    assert product.stock_ratio == expected


def test_product_defaults():
    product = Product(product_id="1", name="Apple", price=1.0, stock=1, initial_stock=1)
    assert product.emoji == ""
    assert product.version == 0


def test_sale_record_create_computes_revenue():
    ts = datetime(2024, 1, 1, 9, 0)
    record = SaleRecord.create("1", 3, 2.5, timestamp=ts)
    assert record.revenue == 7.5
    assert record.timestamp == ts
    assert record.sale_id


def test_sale_record_ids_are_unique():
    assert SaleRecord.create("1", 1, 1.0).sale_id != SaleRecord.create("1", 1, 1.0).sale_id


@pytest.mark.parametrize(
    "fields",
    [
        {"quantity": 0, "price_at_sale": 1.0, "revenue": 0.0},
        {"quantity": 1, "price_at_sale": -1.0, "revenue": 0.0},
        {"quantity": 1, "price_at_sale": 1.0, "revenue": -1.0},
    ],
)
def test_sale_record_validation(fields):
    with pytest.raises(ValidationError):
        SaleRecord(product_id="1", **fields)


def test_derived_model_defaults():
    assert EconomicMetrics.empty() == EconomicMetrics(0.0, 0, 0.0, 0.0, 0.0)
    stats = ProductStats(product_id="1")
    assert stats.price_history == []
    assert SalesTrends().hourly == []


def test_enum_values():
    assert PricingStrategyType("hybrid") is PricingStrategyType.HYBRID
    assert [level.value for level in Level] == ["Low", "Medium", "High"]


def test_sale_record_converts_aware_timestamp_to_local_naive():
    aware = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
    record = SaleRecord.create("1", 1, 1.0, timestamp=aware)
    assert record.timestamp.tzinfo is None
    assert record.timestamp == aware.astimezone().replace(tzinfo=None)


def test_product_rejects_negative_price():
    with pytest.raises(ValueError):
        Product(product_id="1", name="Apple", price=-1.0, stock=1, initial_stock=1)
    assert Product(product_id="1", name="Free", price=0.0, stock=1, initial_stock=1).price == 0.0
