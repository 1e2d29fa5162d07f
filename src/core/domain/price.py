"""
ConsensusStats / BlendedPrice — результаты агрегации и смешивания цен

Immutable Pydantic модели. Полная совместимость с JSON Schema
(contracts/schema/consensus_stats.json, contracts/schema/blended_price.json).

"Неизвестно" всегда представлено None, никогда нулём.
"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from src.core.math.numerical_safeguards import EPS_WEIGHT


# =============================================================================
# CONSENSUS STATS
# =============================================================================


class ConsensusStats(BaseModel):
    """
    Агрегированное мнение одного источника (котировки или сообщество).

    price/dispersion равны None, когда выборка слишком мала; sample_size
    сообщается всегда, чтобы можно было показать "всего N мнений".
    """

    price: Optional[float] = Field(None, ge=0, description="Оценка цены (None = неизвестно)")
    dispersion: Optional[float] = Field(
        None, ge=0, description="Coefficient of variation σ/μ (None = неизвестно)"
    )
    sample_size: int = Field(..., ge=0, description="Количество валидных наблюдений")

    model_config = {"frozen": True}

    @property
    def is_known(self) -> bool:
        """Есть ли у источника оценка цены."""
        return self.price is not None


# =============================================================================
# BLENDED PRICE
# =============================================================================


class BlendedPrice(BaseModel):
    """
    Итоговая цена и прозрачная разбивка вкладов источников.

    Инвариант: weight_quotes + weight_community == 1, если хотя бы один вес
    ненулевой; оба равны 0 только когда ни у одного источника нет веса.
    """

    final: Optional[float] = Field(None, ge=0, description="Итоговая цена (None = неизвестно)")
    weight_quotes: float = Field(..., ge=0, le=1, description="Нормированный вес котировок")
    weight_community: float = Field(
        ..., ge=0, le=1, description="Нормированный вес сообщества"
    )
    quotes: ConsensusStats = Field(..., description="Статистика котировок")
    community: ConsensusStats = Field(..., description="Статистика сообщества")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_weights_normalized(self) -> "BlendedPrice":
        total = self.weight_quotes + self.weight_community
        if total > EPS_WEIGHT and abs(total - 1.0) > EPS_WEIGHT:
            raise ValueError(
                f"weights must sum to 1 or both be 0, got "
                f"{self.weight_quotes} + {self.weight_community} = {total}"
            )
        return self

    @property
    def is_single_source(self) -> bool:
        """
        Итог известен, но опирается только на один источник.

        Включает случай "цена есть, веса 0/0": low confidence, single source.
        """
        if self.final is None:
            return False
        return not (self.quotes.is_known and self.community.is_known) or (
            self.weight_quotes == 0.0 or self.weight_community == 0.0
        )

    def contribution_pct(self) -> tuple[float, float]:
        """Вклады источников в процентах (котировки, сообщество)."""
        return (self.weight_quotes * 100.0, self.weight_community * 100.0)
