"""
Formatting helpers for prices, percentages and dates shown in logs and reports.
"""

from datetime import datetime


def format_currency(amount: float) -> str:
    return f"€{amount:.2f}"


def format_percentage(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%"


def format_timestamp(timestamp: datetime) -> str:
    return timestamp.strftime("%Y-%m-%d")
