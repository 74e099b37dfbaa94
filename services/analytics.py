"""
Market analytics over the append-only sale log.

All functions are pure: they read the log (and product list) passed in and
return fresh result objects. Empty inputs yield zero-valued results.
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta

import numpy as np

from config.config import AnalyticsConfig
from models.pricing import Product
from models.sales import (
    EconomicMetrics,
    HourlyBucket,
    PricePoint,
    ProductStats,
    SaleRecord,
    SalesTrends,
)

logger = logging.getLogger(__name__)

HOUR = timedelta(hours=1)


class AnalyticsService:
    """Statistical calculations and market insights for the economy simulation."""

    def __init__(self, config: AnalyticsConfig | None = None):
        self.config = config or AnalyticsConfig()

    def product_stats(self, product_id: str, sales_log: Sequence[SaleRecord]) -> ProductStats:
        """
        Sales volume, revenue, realized average price and price history for one product.

        Args:
            product_id: Product to analyze.
            sales_log: Complete sale history, oldest first.

        Returns:
            ProductStats; all zeros with an empty history if the product never sold.
        """
        product_sales = [sale for sale in sales_log if sale.product_id == product_id]
        total_sold = sum(sale.quantity for sale in product_sales)
        total_revenue = sum(sale.revenue for sale in product_sales)
        return ProductStats(
            product_id=product_id,
            total_sold=total_sold,
            total_revenue=total_revenue,
            average_price=total_revenue / total_sold if total_sold > 0 else 0.0,
            price_history=[
                PricePoint(price=sale.price_at_sale, timestamp=sale.timestamp)
                for sale in product_sales
            ],
        )

    def economic_metrics(
        self, sales_log: Sequence[SaleRecord], products: Sequence[Product]
    ) -> EconomicMetrics:
        """
        Revenue, transaction counts, volatility and inflation for the whole market.
        """
        if not sales_log:
            return EconomicMetrics.empty()

        total_revenue = float(sum(sale.revenue for sale in sales_log))
        total_transactions = len(sales_log)
        metrics = EconomicMetrics(
            total_revenue=total_revenue,
            total_transactions=total_transactions,
            average_transaction_value=total_revenue / total_transactions,
            market_volatility=self.market_volatility(sales_log, products),
            price_inflation=self.price_inflation(sales_log),
        )
        logger.debug(f"Economic metrics recomputed over {total_transactions} sales: {metrics}")
        return metrics

    def market_volatility(
        self, sales_log: Sequence[SaleRecord], products: Sequence[Product]
    ) -> float:
        """
        Unweighted mean across products of the RMS successive change in realized price.

        Products with fewer than two sales contribute 0.
        """
        if not products:
            return 0.0
        volatilities = []
        for product in products:
            prices = np.array(
                [s.price_at_sale for s in sales_log if s.product_id == product.product_id],
                dtype=float,
            )
            if len(prices) < 2:
                volatilities.append(0.0)
                continue
            jumps = np.diff(prices)
            volatilities.append(float(np.sqrt(np.sum(jumps**2) / (len(prices) - 1))))
        return float(np.mean(volatilities))

    def price_inflation(self, sales_log: Sequence[SaleRecord]) -> float:
        """
        Percent change between the mean sale price of the earliest and latest
        ``inflation_window`` records of the log.

        With fewer than two windows' worth of records the windows overlap;
        that is kept as-is.
        """
        window = self.config.inflation_window
        old_sales = sales_log[:window]
        recent_sales = sales_log[-window:] if window > 0 else []
        if not old_sales or not recent_sales:
            return 0.0
        old_avg = float(np.mean([s.price_at_sale for s in old_sales]))
        recent_avg = float(np.mean([s.price_at_sale for s in recent_sales]))
        if old_avg <= 0:
            return 0.0
        return (recent_avg - old_avg) / old_avg * 100

    def top_products(
        self, sales_log: Sequence[SaleRecord], limit: int | None = None
    ) -> list[ProductStats]:
        """Best sellers by units, ties kept in order of first appearance in the log."""
        if limit is None:
            limit = self.config.top_products_limit
        product_ids = list(dict.fromkeys(sale.product_id for sale in sales_log))
        stats = [self.product_stats(pid, sales_log) for pid in product_ids]
        stats.sort(key=lambda s: s.total_sold, reverse=True)
        return stats[: max(limit, 0)]

    def sales_trends(
        self,
        sales_log: Sequence[SaleRecord],
        window_hours: float | None = None,
        now: datetime | None = None,
    ) -> SalesTrends:
        """
        Units and revenue per "hours ago" bucket within the window, plus totals.
        """
        if window_hours is None:
            window_hours = self.config.trend_window_hours
        now = now or datetime.now()
        window = timedelta(hours=window_hours)

        buckets: dict[int, HourlyBucket] = {}
        trends = SalesTrends()
        for sale in sales_log:
            age = now - sale.timestamp
            if age > window:
                continue
            hour = age // HOUR
            bucket = buckets.setdefault(hour, HourlyBucket(hour=hour))
            bucket.sales += sale.quantity
            bucket.revenue += sale.revenue
            trends.total_sales += sale.quantity
            trends.total_revenue += sale.revenue

        trends.hourly = [buckets[hour] for hour in sorted(buckets)]
        return trends
