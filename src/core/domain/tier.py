"""
Tier — премиальные уровни предмета и их обесценивание

Уровни gold / diamond / emerald теоретически стоят 4 / 16 / 64 обычных
предмета. Фактическая рыночная цена ниже; обесценивание в процентах:

    depreciation = 100 · (1 − actual / (regular · multiplier))
"""

from enum import Enum
from typing import Final, Optional

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class Tier(str, Enum):
    """Премиальный уровень предмета."""

    GOLD = "gold"
    DIAMOND = "diamond"
    EMERALD = "emerald"

    @property
    def multiplier(self) -> int:
        """Сколько обычных предметов теоретически стоит один предмет уровня."""
        return TIER_MULTIPLIERS[self]


TIER_MULTIPLIERS: Final[dict[Tier, int]] = {
    Tier.GOLD: 4,
    Tier.DIAMOND: 16,
    Tier.EMERALD: 64,
}


# =============================================================================
# MODELS
# =============================================================================


class TierListing(BaseModel):
    """Один листинг с уже разобранными ценами по уровням (любая может отсутствовать)."""

    regular: Optional[float] = Field(None, description="Цена обычного предмета")
    gold: Optional[float] = Field(None, description="Цена gold")
    diamond: Optional[float] = Field(None, description="Цена diamond")
    emerald: Optional[float] = Field(None, description="Цена emerald")

    model_config = {"frozen": True}

    def price_for(self, tier: Tier) -> Optional[float]:
        return getattr(self, tier.value)


class DepreciationSummary(BaseModel):
    """
    Сводка среднего обесценивания по уровням.

    Совместимость с JSON Schema (contracts/schema/depreciation_summary.json).
    Среднее равно 0, если для уровня нет ни одного наблюдения.
    """

    total_listings: int = Field(..., ge=0, description="Всего листингов на входе")
    listings_with_valid_regular_price: int = Field(
        ..., ge=0, description="Листингов с валидной обычной ценой"
    )
    average_gold_depreciation: float = Field(0.0, description="Среднее обесценивание gold, %")
    gold_count: int = Field(0, ge=0)
    average_diamond_depreciation: float = Field(
        0.0, description="Среднее обесценивание diamond, %"
    )
    diamond_count: int = Field(0, ge=0)
    average_emerald_depreciation: float = Field(
        0.0, description="Среднее обесценивание emerald, %"
    )
    emerald_count: int = Field(0, ge=0)

    model_config = {"frozen": True}

    def average_for(self, tier: Tier) -> float:
        return getattr(self, f"average_{tier.value}_depreciation")

    def count_for(self, tier: Tier) -> int:
        return getattr(self, f"{tier.value}_count")


class TierPrices(BaseModel):
    """Прогноз цен премиальных уровней от базовой (обычной) цены."""

    gold: Optional[int] = None
    diamond: Optional[int] = None
    emerald: Optional[int] = None

    model_config = {"frozen": True}

    def price_for(self, tier: Tier) -> Optional[int]:
        return getattr(self, tier.value)
