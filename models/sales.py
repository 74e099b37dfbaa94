"""
Data models for the sale log and the analytics derived from it.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def to_local_naive(value: datetime) -> datetime:
    # Windowed computations compare against datetime.now(), which is naive local time
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class SaleRecord(BaseModel):
    """Immutable fact appended to the sale log"""

    model_config = ConfigDict(frozen=True)

    sale_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    product_id: str
    quantity: int = Field(gt=0)
    price_at_sale: float = Field(ge=0)
    # Captured at sale time, never re-derived from quantity x price
    revenue: float = Field(ge=0)
    timestamp: datetime = Field(default_factory=datetime.now)

    @field_validator("timestamp")
    @classmethod
    def timestamp_to_local_naive(cls, value: datetime) -> datetime:
        return to_local_naive(value)

    @classmethod
    def create(
        cls,
        product_id: str,
        quantity: int,
        price_at_sale: float,
        timestamp: datetime | None = None,
    ) -> "SaleRecord":
        """Build a record for a sale happening now (or at ``timestamp``)."""
        return cls(
            product_id=product_id,
            quantity=quantity,
            price_at_sale=price_at_sale,
            revenue=quantity * price_at_sale,
            timestamp=timestamp or datetime.now(),
        )


@dataclass(frozen=True)
class PricePoint:
    price: float
    timestamp: datetime


@dataclass
class ProductStats:
    """
    Per-product aggregate over the sale log.
    """

    product_id: str
    total_sold: int = 0
    total_revenue: float = 0.0
    average_price: float = 0.0
    price_history: list[PricePoint] = field(default_factory=list)


@dataclass
class EconomicMetrics:
    """
    Market-wide indicators. All fields are zero for an empty log.
    """

    total_revenue: float = 0.0
    total_transactions: int = 0
    average_transaction_value: float = 0.0
    market_volatility: float = 0.0
    price_inflation: float = 0.0

    @classmethod
    def empty(cls) -> "EconomicMetrics":
        return cls()


@dataclass
class HourlyBucket:
    hour: int  # hours ago
    sales: int = 0
    revenue: float = 0.0


@dataclass
class SalesTrends:
    hourly: list[HourlyBucket] = field(default_factory=list)
    total_sales: int = 0
    total_revenue: float = 0.0
