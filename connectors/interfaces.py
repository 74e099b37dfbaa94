"""
Module: connectors.interfaces

Collaborator contracts the pricing and analytics services depend on.
Any storage backend (SQL, REST, in-memory) only has to satisfy these.
"""

from typing import Protocol

from models.pricing import Product
from models.sales import SaleRecord


class ProductCatalog(Protocol):
    async def list_products(self) -> list[Product]: ...

    async def get_product(self, product_id: str) -> Product | None: ...

    async def set_product_price(
        self, product_id: str, price: float, expected_version: int | None = None
    ) -> bool:
        """Write a new price. Returns False if rejected (unknown id, stale version...)."""
        ...

    async def set_product_stock(self, product_id: str, stock: int) -> bool: ...


class SaleLog(Protocol):
    async def list_sales(self) -> list[SaleRecord]:
        """All-time sales in insertion order."""
        ...

    async def append_sale(self, record: SaleRecord) -> bool: ...
