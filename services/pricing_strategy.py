"""
Pricing algorithms for the retail market engine.

Three variants share one interface, ``calculate_price(product, sales_log,
window_hours, now)``:

* DemandBasedPricing - scales the price by units sold in a trailing window.
* SupplyBasedPricing - scales the price by remaining stock (scarcity).
* HybridPricing      - 60/40 blend of the two, the default.

The set is closed; use ``build_strategy`` to obtain a variant by tag.
"""

from collections.abc import Sequence
from datetime import datetime, timedelta

from models.enums import PricingStrategyType
from models.pricing import Product
from models.sales import SaleRecord

DEFAULT_WINDOW_HOURS = 24.0

# (min recent units, multiplier), highest tier first
DEMAND_TIERS: tuple[tuple[int, float], ...] = (
    (10, 1.30),
    (5, 1.15),
    (2, 1.00),
    (1, 0.95),
)
DEMAND_FLOOR_MULTIPLIER = 0.80


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def recent_units(
    product_id: str,
    sales_log: Sequence[SaleRecord],
    window_hours: float = DEFAULT_WINDOW_HOURS,
    now: datetime | None = None,
) -> int:
    """Sum of quantities sold for ``product_id`` within ``window_hours`` of ``now``."""
    now = now or datetime.now()
    window = timedelta(hours=window_hours)
    return sum(
        sale.quantity
        for sale in sales_log
        if sale.product_id == product_id and now - sale.timestamp <= window
    )


def demand_multiplier(units: int) -> float:
    for threshold, multiplier in DEMAND_TIERS:
        if units >= threshold:
            return multiplier
    return DEMAND_FLOOR_MULTIPLIER


def supply_multiplier(stock_ratio: float) -> float:
    if stock_ratio <= 0.1:
        return 1.2
    if stock_ratio <= 0.3:
        return 1.1
    if stock_ratio >= 0.8:
        return 0.95
    return 1.0


class DemandBasedPricing:
    """Raise prices for products that sold well recently, cut them for slow movers."""

    strategy_type = PricingStrategyType.DEMAND
    min_factor = 0.7
    max_factor = 1.5

    def calculate_price(
        self,
        product: Product,
        sales_log: Sequence[SaleRecord],
        window_hours: float | None = None,
        now: datetime | None = None,
    ) -> float:
        units = recent_units(
            product.product_id,
            sales_log,
            DEFAULT_WINDOW_HOURS if window_hours is None else window_hours,
            now,
        )
        base_price = product.price
        return clamp(
            base_price * demand_multiplier(units),
            base_price * self.min_factor,
            base_price * self.max_factor,
        )


class SupplyBasedPricing:
    """Scarcity pricing from the current/initial stock ratio. The sale log is ignored."""

    strategy_type = PricingStrategyType.SUPPLY
    min_factor = 0.8
    max_factor = 1.4

    def calculate_price(
        self,
        product: Product,
        sales_log: Sequence[SaleRecord] = (),
        window_hours: float | None = None,
        now: datetime | None = None,
    ) -> float:
        base_price = product.price
        return clamp(
            base_price * supply_multiplier(product.stock_ratio),
            base_price * self.min_factor,
            base_price * self.max_factor,
        )


class HybridPricing:
    """Weighted blend of demand and supply prices."""

    strategy_type = PricingStrategyType.HYBRID
    demand_weight = 0.6
    supply_weight = 0.4
    min_factor = 0.5
    max_factor = 2.0

    def __init__(self):
        self.demand_strategy = DemandBasedPricing()
        self.supply_strategy = SupplyBasedPricing()

    def blend(self, demand_price: float, supply_price: float) -> float:
        return demand_price * self.demand_weight + supply_price * self.supply_weight

    def calculate_price(
        self,
        product: Product,
        sales_log: Sequence[SaleRecord],
        window_hours: float | None = None,
        now: datetime | None = None,
    ) -> float:
        demand_price = self.demand_strategy.calculate_price(
            product, sales_log, window_hours, now
        )
        supply_price = self.supply_strategy.calculate_price(product)
        base_price = product.price
        return clamp(
            self.blend(demand_price, supply_price),
            base_price * self.min_factor,
            base_price * self.max_factor,
        )


PricingStrategy = DemandBasedPricing | SupplyBasedPricing | HybridPricing

_STRATEGIES: dict[PricingStrategyType, type[PricingStrategy]] = {
    PricingStrategyType.DEMAND: DemandBasedPricing,
    PricingStrategyType.SUPPLY: SupplyBasedPricing,
    PricingStrategyType.HYBRID: HybridPricing,
}


def build_strategy(strategy: PricingStrategyType | str) -> PricingStrategy:
    """
    Return a fresh strategy for a tag such as ``"hybrid"`` (case-insensitive).

    Raises:
        ValueError: if the tag does not name one of the known variants.
    """
    if isinstance(strategy, PricingStrategyType):
        return _STRATEGIES[strategy]()
    try:
        strategy_type = PricingStrategyType(strategy.strip().lower())
    except ValueError:
        known = ", ".join(t.value for t in PricingStrategyType)
        raise ValueError(f"Unknown pricing strategy '{strategy}'. Expected one of: {known}") from None
    return _STRATEGIES[strategy_type]()
