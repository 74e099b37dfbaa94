from datetime import datetime

import pytest

from utils.formatters import format_currency, format_percentage, format_timestamp


@pytest.mark.parametrize(
    "amount, expected",
    [(3.21, "€3.21"), (0, "€0.00"), (2.005, "€2.00"), (1234.5, "€1234.50")],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


def test_format_percentage():
    assert format_percentage(10.0) == "10.0%"
    assert format_percentage(-2.346, decimals=2) == "-2.35%"


def test_format_timestamp():
    assert format_timestamp(datetime(2024, 5, 1, 23, 59)) == "2024-05-01"
