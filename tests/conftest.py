import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Ensure project root is on sys.path to allow `import services`, `import models`, etc.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from models.pricing import Product  # noqa: E402
from models.sales import SaleRecord  # noqa: E402

FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0)


@pytest.fixture
def now() -> datetime:
    """A fixed reference instant so time windows are deterministic."""
    return FIXED_NOW


@pytest.fixture
def apple() -> Product:
    return Product(product_id="1", name="Apple", price=3.00, stock=100, initial_stock=100)


@pytest.fixture
def bread() -> Product:
    return Product(product_id="2", name="Bread", price=2.50, stock=20, initial_stock=100)


@pytest.fixture
def make_sale():
    """Factory for sale records placed ``hours_ago`` before FIXED_NOW."""

    def _make_sale(product_id: str, quantity: int = 1, price: float = 2.0, hours_ago: float = 1.0) -> SaleRecord:
        return SaleRecord.create(
            product_id, quantity, price, timestamp=FIXED_NOW - timedelta(hours=hours_ago)
        )

    return _make_sale
