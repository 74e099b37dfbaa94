"""
Demonstration of the retail market engine.

Seeds an in-memory catalog, simulates a burst of purchases, and prints the
resulting prices, market metrics and best sellers. No external services needed.
"""

import asyncio
import random

from config.config import load_market_config
from connectors.in_memory_catalog import InMemoryCatalog
from connectors.in_memory_sale_log import InMemorySaleLog
from models.pricing import Product
from services.market import MarketSimulator
from utils.formatters import format_currency, format_percentage, format_timestamp
from utils.logger import get_logger

logger = get_logger("market-simulation-demo")

SEED_PRODUCTS = [
    Product(product_id="1", name="Apple", emoji="🍎", price=3.00, stock=100, initial_stock=100),
    Product(product_id="2", name="Bread", emoji="🍞", price=2.50, stock=40, initial_stock=50),
    Product(product_id="3", name="Cheese", emoji="🧀", price=6.75, stock=12, initial_stock=60),
    Product(product_id="4", name="Milk", emoji="🥛", price=1.20, stock=80, initial_stock=80),
]


async def run_market_simulation_demo(rounds: int = 25, seed: int = 42):
    """Run a short simulated trading session and log the outcome."""
    logger.info("--- Starting Market Simulation Demo ---")
    config = load_market_config()
    market = MarketSimulator(InMemoryCatalog(SEED_PRODUCTS), InMemorySaleLog(), config)
    await market.refresh()

    rng = random.Random(seed)
    for _ in range(rounds):
        product = rng.choice(market.products)
        await market.simulate_purchase(product.product_id, rng)

    for product in market.products:
        analysis = market.pricing_analysis(product.product_id)
        logger.info(
            f"{product.emoji} {product.name}: {format_currency(product.price)} "
            f"(stock {product.stock}/{product.initial_stock}, "
            f"demand {analysis.demand_level.value}, stock level {analysis.stock_level.value})"
        )

    metrics = market.metrics()
    logger.info(
        f"Revenue {format_currency(metrics.total_revenue)} over {metrics.total_transactions} sales, "
        f"avg {format_currency(metrics.average_transaction_value)}, "
        f"volatility {metrics.market_volatility:.3f}, "
        f"inflation {format_percentage(metrics.price_inflation)}"
    )
    for rank, stats in enumerate(market.top_products(), start=1):
        logger.info(
            f"#{rank} product {stats.product_id}: {stats.total_sold} sold, "
            f"{format_currency(stats.total_revenue)} revenue, "
            f"last sold {format_timestamp(stats.price_history[-1].timestamp)}"
        )
    logger.info("--- Market Simulation Demo Finished ---")


if __name__ == "__main__":
    try:
        asyncio.run(run_market_simulation_demo())
    except KeyboardInterrupt:
        logger.info("Demo stopped by user.")
