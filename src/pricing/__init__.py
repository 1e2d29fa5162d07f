"""
Pricing — оценка справедливой цены предмета

Decayed Robust Estimator, Consensus Aggregator, Price Blender и
проекция цен премиальных уровней.
"""

from src.pricing.blender import blend_prices, source_weight
from src.pricing.config import (
    DEFAULT_CONFIG,
    PricingConfig,
    load_config_from_env,
    load_pricing_config,
)
from src.pricing.consensus import consensus_stats, quote_stats
from src.pricing.engine import FairPriceEngine
from src.pricing.estimator import recency_weights, representative_price
from src.pricing.quotes import clean_quote_points, quote_from_listing
from src.pricing.tiers import depreciation_summary, tier_depreciation, tier_prices

__all__ = [
    # Config
    "DEFAULT_CONFIG",
    "PricingConfig",
    "load_config_from_env",
    "load_pricing_config",
    # Quotes
    "clean_quote_points",
    "quote_from_listing",
    # Decayed Robust Estimator
    "recency_weights",
    "representative_price",
    # Consensus Aggregator
    "consensus_stats",
    "quote_stats",
    # Price Blender
    "blend_prices",
    "source_weight",
    # Engine
    "FairPriceEngine",
    # Tiers
    "depreciation_summary",
    "tier_depreciation",
    "tier_prices",
]
