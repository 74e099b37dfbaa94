"""
Market simulator: ties the catalog, the sale log, pricing and analytics
together into the sell -> log -> reprice cycle of the retail economy.
"""

import logging
import random
from collections.abc import Iterable
from datetime import datetime

from config.config import MarketConfig
from connectors.interfaces import ProductCatalog, SaleLog
from models.pricing import PricingAnalysis, Product
from models.sales import EconomicMetrics, ProductStats, SaleRecord, SalesTrends
from services.analytics import AnalyticsService
from services.pricing_service import PricingService
from utils.formatters import format_currency

logger = logging.getLogger(__name__)


class MarketSimulator:
    """
    Drives the economy against a catalog and a sale log.

    A sale is appended to the log before repricing runs, so every sale
    influences its own repricing pass. Repricing of one product is serialized
    through ``PricingService.reprice_lock``.
    """

    def __init__(
        self,
        catalog: ProductCatalog,
        sale_log: SaleLog,
        config: MarketConfig | None = None,
        pricing: PricingService | None = None,
        analytics: AnalyticsService | None = None,
    ):
        self.catalog = catalog
        self.sale_log = sale_log
        self.config = config or MarketConfig()
        self.pricing = pricing or PricingService(
            catalog,
            strategy=self.config.pricing.strategy,
            window_hours=self.config.pricing.window_hours,
        )
        self.analytics = analytics or AnalyticsService(self.config.analytics)
        self.products: list[Product] = []
        self.sales: list[SaleRecord] = []

    async def refresh(self) -> None:
        """Reload products and sales from the collaborators."""
        self.products = await self.catalog.list_products()
        self.sales = await self.sale_log.list_sales()
        logger.debug(f"Market refreshed: {len(self.products)} products, {len(self.sales)} sales")

    def find_product(self, product_id: str) -> Product | None:
        return next((p for p in self.products if p.product_id == product_id), None)

    async def record_sale(self, product_id: str, quantity: int) -> SaleRecord | None:
        """
        Sell ``quantity`` units at the current price, then reprice the product.

        Returns the appended record, or None if the product is unknown, stock
        is insufficient or the log rejected the append.
        """
        async with self.pricing.reprice_lock(product_id):
            record = await self._sell(product_id, quantity)
            if record is None:
                return None
            await self._reprice_locked(product_id)
        await self.refresh()
        return record

    async def _sell(self, product_id: str, quantity: int) -> SaleRecord | None:
        product = await self.catalog.get_product(product_id)
        if product is None:
            logger.warning(f"Sale ignored: unknown product {product_id}")
            return None
        if quantity <= 0 or product.stock < quantity:
            logger.warning(
                f"Sale ignored for {product.name}: requested {quantity}, in stock {product.stock}"
            )
            return None

        record = SaleRecord.create(product_id, quantity, product.price)
        try:
            appended = await self.sale_log.append_sale(record)
        except Exception as e:
            logger.error(f"Failed to append sale for {product.name}: {type(e).__name__}: {e}")
            return None
        if not appended:
            logger.error(f"Failed to append sale for {product.name}: append rejected")
            return None

        if not await self.catalog.set_product_stock(product_id, product.stock - quantity):
            logger.error(
                f"Failed to update stock for {product.name} to {product.stock - quantity}"
            )
        logger.info(
            f"Sold {quantity} x {product.name} at {format_currency(product.price)} (revenue {format_currency(record.revenue)})"
        )
        return record

    async def checkout(self, cart: Iterable[tuple[str, int]]) -> list[SaleRecord]:
        """Record every (product_id, quantity) line; lines that fail are skipped."""
        recorded = []
        for product_id, quantity in cart:
            record = await self.record_sale(product_id, quantity)
            if record is not None:
                recorded.append(record)
        return recorded

    async def simulate_purchase(
        self, product_id: str, rng: random.Random | None = None
    ) -> SaleRecord | None:
        """Buy a random quantity drawn from ``default_quantity_range``."""
        low, high = self.config.default_quantity_range
        quantity = (rng or random).randint(low, high)
        return await self.record_sale(product_id, quantity)

    async def reprice(self, product_id: str) -> float | None:
        """Reprice one product against the current log. None for unknown ids."""
        async with self.pricing.reprice_lock(product_id):
            new_price = await self._reprice_locked(product_id)
        if new_price is not None:
            await self.refresh()
        return new_price

    async def _reprice_locked(self, product_id: str) -> float | None:
        # Caller must hold reprice_lock(product_id); asyncio locks are not reentrant
        product = await self.catalog.get_product(product_id)
        if product is None:
            return None
        sales = await self.sale_log.list_sales()
        return await self.pricing.apply_dynamic_pricing(
            product, sales, min_delta=self.config.pricing.min_price_change
        )

    async def reprice_all(self) -> list[Product]:
        await self.refresh()
        updated = await self.pricing.apply_dynamic_pricing_batch(
            self.products, self.sales, min_delta=self.config.pricing.min_price_change
        )
        await self.refresh()
        return updated

    async def update_product_price(self, product_id: str, price: float) -> bool:
        """
        Admin price edit.

        Raises:
            ValueError: if the price is outside the configured admin limits.
        """
        limits = self.config.limits
        if not limits.price_in_range(price):
            raise ValueError(
                f"Price must be between {format_currency(limits.min_price)} and {format_currency(limits.max_price)}"
            )
        ok = await self.catalog.set_product_price(product_id, price)
        if not ok:
            logger.error(f"Failed to update price for {product_id} to {price}")
        await self.refresh()
        return ok

    async def update_product_stock(self, product_id: str, stock: int) -> bool:
        """
        Admin stock edit.

        Raises:
            ValueError: if the stock is outside the configured admin limits.
        """
        limits = self.config.limits
        if not limits.stock_in_range(stock):
            raise ValueError(f"Stock must be between {limits.min_stock} and {limits.max_stock}")
        ok = await self.catalog.set_product_stock(product_id, stock)
        if not ok:
            logger.error(f"Failed to update stock for {product_id} to {stock}")
        await self.refresh()
        return ok

    async def reset_economy(self) -> None:
        """Restore every product's stock to its initial level."""
        for product in await self.catalog.list_products():
            if not await self.catalog.set_product_stock(product.product_id, product.initial_stock):
                logger.error(f"Failed to reset stock for {product.name}")
        await self.refresh()

    # --- Analytics over the last refreshed state ---

    def metrics(self) -> EconomicMetrics:
        return self.analytics.economic_metrics(self.sales, self.products)

    def top_products(self, limit: int | None = None) -> list[ProductStats]:
        return self.analytics.top_products(self.sales, limit)

    def product_stats(self, product_id: str) -> ProductStats:
        return self.analytics.product_stats(product_id, self.sales)

    def sales_trends(self, window_hours: float | None = None, now: datetime | None = None) -> SalesTrends:
        return self.analytics.sales_trends(self.sales, window_hours, now)

    def pricing_analysis(self, product_id: str, now: datetime | None = None) -> PricingAnalysis | None:
        product = self.find_product(product_id)
        if product is None:
            return None
        return self.pricing.get_pricing_analysis(product, self.sales, now)
