"""
Pricing-related data models for the retail market engine.
Includes the catalog Product and the diagnostic PricingAnalysis view.
"""

from dataclasses import dataclass

from .enums import Level


@dataclass
class Product:
    """
    Catalog entry as seen by the pricing engine.

    ``initial_stock`` is the scarcity baseline fixed at creation; ``version``
    is bumped by the catalog on every successful write.
    """

    product_id: str
    name: str
    price: float
    stock: int
    initial_stock: int
    emoji: str = ""
    version: int = 0

    def __post_init__(self):
        # Strategy bounds are multiples of the base price and assume it is non-negative
        if self.price < 0:
            raise ValueError(f"Product {self.product_id} price must be non-negative, got {self.price}")

    @property
    def stock_ratio(self) -> float:
        if self.initial_stock == 0:
            return 0.0
        return self.stock / self.initial_stock


@dataclass
class PricingAnalysis:
    """
    Price recommendation combined with demand and stock classification.
    """

    current_price: float
    suggested_price: float
    price_change: float
    price_change_percent: float
    demand_level: Level
    stock_level: Level
