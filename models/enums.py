"""
Centralized Enum definitions for the project.
"""

from enum import Enum


class PricingStrategyType(str, Enum):
    """Closed set of pricing algorithms the engine can run"""

    DEMAND = "demand"
    SUPPLY = "supply"
    HYBRID = "hybrid"


class Level(str, Enum):
    """Coarse classification used by the pricing analysis dashboard"""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
