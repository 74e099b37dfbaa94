"""
Module: connectors.in_memory_catalog

Provides an in-memory product catalog for demos and tests.
"""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import replace

from models.pricing import Product

logger = logging.getLogger(__name__)


class InMemoryCatalog:
    """
    In-memory product catalog with optimistic versioning.

    Reads return copies, so callers can never mutate stored state directly.
    Every accepted write bumps the product's ``version``.
    """

    def __init__(self, products: Iterable[Product] = ()):
        self._products: dict[str, Product] = {}
        for product in products:
            self._products[product.product_id] = replace(product)

    async def list_products(self) -> list[Product]:
        """Return all products in insertion order."""
        await asyncio.sleep(0)
        return [replace(p) for p in self._products.values()]

    async def get_product(self, product_id: str) -> Product | None:
        await asyncio.sleep(0)
        product = self._products.get(product_id)
        return replace(product) if product else None

    async def set_product_price(
        self, product_id: str, price: float, expected_version: int | None = None
    ) -> bool:
        """Update a price. Rejects unknown ids, negative prices and stale versions."""
        await asyncio.sleep(0)
        product = self._products.get(product_id)
        if product is None:
            logger.warning(f"Price update rejected: unknown product {product_id}")
            return False
        if price < 0:
            logger.warning(f"Price update rejected for {product_id}: negative price {price}")
            return False
        if expected_version is not None and expected_version != product.version:
            logger.warning(
                f"Price update rejected for {product_id}: version {expected_version} is stale (current {product.version})"
            )
            return False
        product.price = price
        product.version += 1
        return True

    async def set_product_stock(self, product_id: str, stock: int) -> bool:
        await asyncio.sleep(0)
        product = self._products.get(product_id)
        if product is None or stock < 0:
            logger.warning(f"Stock update rejected for {product_id}: stock={stock}")
            return False
        product.stock = stock
        product.version += 1
        return True
