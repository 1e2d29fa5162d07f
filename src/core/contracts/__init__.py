"""
Contract Validation Module

Модуль для валидации JSON контрактов ценового ядра.
"""

from .validators import (
    BlendedPriceValidator,
    ConsensusStatsValidator,
    ContractValidator,
    DepreciationSummaryValidator,
    SchemaLoader,
    validate_blended_price,
    validate_consensus_stats,
    validate_depreciation_summary,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ConsensusStatsValidator",
    "BlendedPriceValidator",
    "DepreciationSummaryValidator",
    # Functions
    "validate_consensus_stats",
    "validate_blended_price",
    "validate_depreciation_summary",
]
