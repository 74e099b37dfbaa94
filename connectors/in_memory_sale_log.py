"""
Module: connectors.in_memory_sale_log

Provides an append-only in-memory sale log for demos and tests.
"""

import asyncio
from collections.abc import Iterable

from models.sales import SaleRecord


class InMemorySaleLog:
    """
    Append-only sale log. Records are frozen, so handing them out is safe.
    """

    def __init__(self, records: Iterable[SaleRecord] = ()):
        self._records: list[SaleRecord] = list(records)

    async def list_sales(self) -> list[SaleRecord]:
        """Return all sales, oldest first."""
        await asyncio.sleep(0)
        return list(self._records)

    async def append_sale(self, record: SaleRecord) -> bool:
        await asyncio.sleep(0)
        if not isinstance(record, SaleRecord):
            return False
        self._records.append(record)
        return True

    def __len__(self) -> int:
        return len(self._records)
