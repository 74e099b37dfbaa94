from unittest.mock import patch

import pytest

from config.config import (
    AdminLimits,
    AnalyticsConfig,
    MarketConfig,
    PricingConfig,
    load_market_config,
)


def test_pricing_config_defaults():
    """Test PricingConfig initializes with correct default values."""
    config = PricingConfig()
    assert config.strategy == "hybrid"
    assert config.window_hours == 24.0
    assert config.min_price_change == 0.01


def test_analytics_config_defaults():
    config = AnalyticsConfig()
    assert config.top_products_limit == 5
    assert config.inflation_window == 10
    assert config.trend_window_hours == 24.0


@pytest.mark.parametrize(
    "price, expected",
    [(0.0, True), (1000.0, True), (-0.01, False), (1000.01, False)],
)
def test_admin_limits_price(price, expected):
    assert AdminLimits().price_in_range(price) is expected


@pytest.mark.parametrize("stock, expected", [(0, True), (10000, True), (-1, False), (10001, False)])
def test_admin_limits_stock(stock, expected):
    assert AdminLimits().stock_in_range(stock) is expected


def test_market_config_default_factory():
    """Sub-configs are separate instances per MarketConfig."""
    config1 = MarketConfig()
    config2 = MarketConfig()
    assert config1.pricing == config2.pricing
    assert config1.pricing is not config2.pricing
    config1.pricing.strategy = "demand"
    assert config2.pricing.strategy == "hybrid"
    assert config1.default_quantity_range == (1, 3)


@patch("config.config.load_project_dotenv")
def test_load_market_config_defaults(mock_dotenv, monkeypatch):
    for var in (
        "MARKET_PRICING_STRATEGY",
        "MARKET_WINDOW_HOURS",
        "MARKET_MIN_PRICE_CHANGE",
        "MARKET_TOP_PRODUCTS",
    ):
        monkeypatch.delenv(var, raising=False)
    config = load_market_config()
    mock_dotenv.assert_called_once()
    assert config == MarketConfig()


@patch("config.config.load_project_dotenv")
def test_load_market_config_from_env(mock_dotenv, monkeypatch):
    monkeypatch.setenv("MARKET_PRICING_STRATEGY", " Demand ")
    monkeypatch.setenv("MARKET_WINDOW_HOURS", "12")
    monkeypatch.setenv("MARKET_MIN_PRICE_CHANGE", "0.05")
    monkeypatch.setenv("MARKET_TOP_PRODUCTS", "3")
    config = load_market_config()
    assert config.pricing.strategy == "demand"
    assert config.pricing.window_hours == 12.0
    assert config.pricing.min_price_change == 0.05
    assert config.analytics.top_products_limit == 3


@patch("config.config.load_project_dotenv")
def test_load_market_config_bad_number(mock_dotenv, monkeypatch):
    monkeypatch.setenv("MARKET_WINDOW_HOURS", "a day")
    with pytest.raises(ValueError):
        load_market_config()
