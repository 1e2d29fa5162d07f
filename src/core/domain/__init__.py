"""
Domain models and value objects.

Contains the value objects exchanged by the pricing core: QuotePoint,
ConsensusStats, BlendedPrice and the premium tier models.
"""

from src.core.domain.price import BlendedPrice, ConsensusStats
from src.core.domain.quote import QuotePoint
from src.core.domain.tier import (
    TIER_MULTIPLIERS,
    DepreciationSummary,
    Tier,
    TierListing,
    TierPrices,
)

__all__ = [
    # Quote model
    "QuotePoint",
    # Price models
    "ConsensusStats",
    "BlendedPrice",
    # Tier models
    "TIER_MULTIPLIERS",
    "Tier",
    "TierListing",
    "DepreciationSummary",
    "TierPrices",
]
