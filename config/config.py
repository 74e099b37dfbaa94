"""
Configuration classes for the retail market engine.
Defines pricing, analytics and admin parameters in a type-safe, extensible way.
"""

import os
from dataclasses import dataclass, field

from utils.env import load_project_dotenv


@dataclass
class PricingConfig:
    strategy: str = "hybrid"
    window_hours: float = 24.0
    min_price_change: float = 0.01


@dataclass
class AnalyticsConfig:
    top_products_limit: int = 5
    inflation_window: int = 10  # records compared at each end of the log
    trend_window_hours: float = 24.0


@dataclass
class AdminLimits:
    min_price: float = 0.0
    max_price: float = 1000.0
    min_stock: int = 0
    max_stock: int = 10000

    def price_in_range(self, price: float) -> bool:
        return self.min_price <= price <= self.max_price

    def stock_in_range(self, stock: int) -> bool:
        return self.min_stock <= stock <= self.max_stock


@dataclass
class MarketConfig:
    pricing: PricingConfig = field(default_factory=PricingConfig)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)
    limits: AdminLimits = field(default_factory=AdminLimits)
    default_quantity_range: tuple[int, int] = (1, 3)


def load_market_config() -> MarketConfig:
    """
    Build a MarketConfig, overriding defaults from environment variables
    (a project-level ``.env`` is loaded first if present).
    """
    load_project_dotenv()
    config = MarketConfig()
    if strategy := os.getenv("MARKET_PRICING_STRATEGY"):
        config.pricing.strategy = strategy.strip().lower()
    if window := os.getenv("MARKET_WINDOW_HOURS"):
        config.pricing.window_hours = float(window)
    if min_change := os.getenv("MARKET_MIN_PRICE_CHANGE"):
        config.pricing.min_price_change = float(min_change)
    if top := os.getenv("MARKET_TOP_PRODUCTS"):
        config.analytics.top_products_limit = int(top)
    return config
