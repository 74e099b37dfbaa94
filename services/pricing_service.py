"""
Pricing service: runs the active pricing strategy and writes price changes
back through the product catalog.

Write failures are soft: they are logged and the original price is kept.
Retry policy belongs to the caller.
"""

import asyncio
import logging
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime

from connectors.interfaces import ProductCatalog
from models.enums import Level, PricingStrategyType
from models.pricing import PricingAnalysis, Product
from models.sales import SaleRecord
from services.pricing_strategy import (
    DEFAULT_WINDOW_HOURS,
    HybridPricing,
    PricingStrategy,
    build_strategy,
    recent_units,
)
from utils.formatters import format_currency

logger = logging.getLogger(__name__)

# Absorbs float noise so a delta of exactly min_delta (e.g. 3.01 - 3.00) still counts
DELTA_TOLERANCE = 1e-9
ANALYSIS_WINDOW_HOURS = 24.0


def classify_demand(units: int) -> Level:
    if units >= 5:
        return Level.HIGH
    if units >= 2:
        return Level.MEDIUM
    return Level.LOW


def classify_stock(stock_ratio: float) -> Level:
    if stock_ratio <= 0.3:
        return Level.LOW
    if stock_ratio <= 0.7:
        return Level.MEDIUM
    return Level.HIGH


class PricingService:
    """
    Orchestrates a pricing strategy against the catalog.

    The only state held is the active strategy and the per-product locks
    callers use to serialize read-compute-write cycles.
    """

    def __init__(
        self,
        catalog: ProductCatalog,
        strategy: PricingStrategy | PricingStrategyType | str | None = None,
        window_hours: float = DEFAULT_WINDOW_HOURS,
    ):
        self.catalog = catalog
        self.strategy: PricingStrategy = HybridPricing()
        if strategy is not None:
            self.set_strategy(strategy)
        self.window_hours = window_hours
        self._locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def set_strategy(self, strategy: PricingStrategy | PricingStrategyType | str) -> None:
        """Replace the active strategy with an instance or a tag like ``"demand"``."""
        if isinstance(strategy, str):
            strategy = build_strategy(strategy)
        self.strategy = strategy
        logger.info(f"Pricing strategy set to {strategy.strategy_type.value}")

    def reprice_lock(self, product_id: str) -> asyncio.Lock:
        """Lock to hold around a read-compute-write cycle for one product."""
        return self._locks[product_id]

    def calculate_price(
        self,
        product: Product,
        sales_log: Sequence[SaleRecord],
        window_hours: float | None = None,
        now: datetime | None = None,
    ) -> float:
        if window_hours is None:
            window_hours = self.window_hours
        return self.strategy.calculate_price(product, sales_log, window_hours, now)

    async def apply_dynamic_pricing(
        self,
        product: Product,
        sales_log: Sequence[SaleRecord],
        min_delta: float = 0.01,
        now: datetime | None = None,
    ) -> float:
        """
        Recompute the product's price and persist it if it moved by at least ``min_delta``.

        Returns:
            The new price if written, otherwise the product's current price.
        """
        price, _ = await self._reprice(product, sales_log, min_delta, now)
        return price

    async def _reprice(
        self,
        product: Product,
        sales_log: Sequence[SaleRecord],
        min_delta: float,
        now: datetime | None,
    ) -> tuple[float, bool]:
        # Returns (resulting price, whether the catalog accepted a write)
        new_price = self.calculate_price(product, sales_log, now=now)
        if abs(new_price - product.price) + DELTA_TOLERANCE < min_delta:
            logger.debug(
                f"Price change for {product.name} below {format_currency(min_delta)}, keeping {format_currency(product.price)}"
            )
            return product.price, False

        logger.info(
            f"Dynamic pricing: {product.name} {format_currency(product.price)} -> {format_currency(new_price)}"
        )
        try:
            success = await self.catalog.set_product_price(
                product.product_id, new_price, expected_version=product.version
            )
        except Exception as e:
            logger.error(
                f"Failed to update price for {product.name} ({product.product_id}) to {new_price:.4f}: {type(e).__name__}: {e}"
            )
            return product.price, False
        if not success:
            logger.error(
                f"Failed to update price for {product.name} ({product.product_id}) to {new_price:.4f}: write rejected"
            )
            return product.price, False
        return new_price, True

    async def apply_dynamic_pricing_batch(
        self,
        products: Sequence[Product],
        sales_log: Sequence[SaleRecord],
        min_delta: float = 0.01,
        now: datetime | None = None,
    ) -> list[Product]:
        """Reprice each product independently; returns updated copies in input order."""
        updated: list[Product] = []
        for product in products:
            async with self.reprice_lock(product.product_id):
                new_price, written = await self._reprice(product, sales_log, min_delta, now)
            if written:
                # The catalog bumps the version on every accepted write
                updated.append(replace(product, price=new_price, version=product.version + 1))
            else:
                updated.append(replace(product))
        return updated

    def get_pricing_analysis(
        self,
        product: Product,
        sales_log: Sequence[SaleRecord],
        now: datetime | None = None,
    ) -> PricingAnalysis:
        suggested = self.calculate_price(product, sales_log, now=now)
        change = suggested - product.price
        change_percent = (change / product.price) * 100 if product.price else 0.0
        units = recent_units(product.product_id, sales_log, ANALYSIS_WINDOW_HOURS, now)
        return PricingAnalysis(
            current_price=product.price,
            suggested_price=suggested,
            price_change=change,
            price_change_percent=change_percent,
            demand_level=classify_demand(units),
            stock_level=classify_stock(product.stock_ratio),
        )
