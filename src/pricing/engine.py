"""
FairPriceEngine — stateless фасад над тремя компонентами

Порядок на один запрос:
1. quote_stats: котировки → ConsensusStats (Decayed Robust Estimator)
2. consensus_stats: мнения сообщества → ConsensusStats
3. blend_prices: две статистики → BlendedPrice

Экземпляр хранит только immutable конфигурацию и безопасен для
одновременного использования из любого числа потоков.
"""

from typing import Any, Iterable, Optional

from loguru import logger

from src.core.domain.price import BlendedPrice, ConsensusStats
from src.core.domain.quote import QuotePoint
from src.core.domain.tier import DepreciationSummary, TierPrices
from src.pricing.blender import blend_prices
from src.pricing.config import PricingConfig
from src.pricing.consensus import consensus_stats, quote_stats
from src.pricing.estimator import representative_price
from src.pricing.tiers import tier_prices


class FairPriceEngine:
    """Оценка справедливой цены предмета из котировок и мнений сообщества."""

    def __init__(self, config: Optional[PricingConfig] = None):
        """
        Args:
            config: Конфигурация ядра (default: PricingConfig())
        """
        self.config = config or PricingConfig()
        logger.debug(
            f"FairPriceEngine ready: effective half-life "
            f"{self.config.effective_half_life_months:.2f} month(s), "
            f"min sample {self.config.min_sample_size}"
        )

    def representative_price(
        self, points: Optional[Iterable[QuotePoint]], now: Any
    ) -> Optional[int]:
        return representative_price(points, now, self.config)

    def consensus_stats(self, values: Optional[Iterable[Any]]) -> ConsensusStats:
        return consensus_stats(values, self.config)

    def quote_stats(self, points: Optional[Iterable[QuotePoint]], now: Any) -> ConsensusStats:
        return quote_stats(points, now, self.config)

    def blend(self, quotes: ConsensusStats, community: ConsensusStats) -> BlendedPrice:
        return blend_prices(quotes, community, self.config)

    def evaluate(
        self,
        quotes: Optional[Iterable[QuotePoint]],
        opinions: Optional[Iterable[Any]],
        now: Any,
    ) -> BlendedPrice:
        """
        Полный расчёт: котировки + мнения → BlendedPrice.

        Args:
            quotes: Исторические котировки предмета
            opinions: Числовые мнения сообщества о цене
            now: Опорный момент для возраста котировок

        Returns:
            BlendedPrice (final = None, если данных недостаточно)
        """
        quotes_summary = self.quote_stats(quotes, now)
        community_summary = self.consensus_stats(opinions)
        blended = self.blend(quotes_summary, community_summary)

        quotes_pct, community_pct = blended.contribution_pct()
        logger.debug(
            f"Evaluated fair price {blended.final} "
            f"(quotes {quotes_pct:.1f}%, community {community_pct:.1f}%"
            f"{', single source' if blended.is_single_source else ''})"
        )
        return blended

    def evaluate_with_tiers(
        self,
        quotes: Optional[Iterable[QuotePoint]],
        opinions: Optional[Iterable[Any]],
        now: Any,
        summary: Optional[DepreciationSummary],
    ) -> tuple[BlendedPrice, TierPrices]:
        """evaluate + прогноз цен премиальных уровней от итоговой цены."""
        blended = self.evaluate(quotes, opinions, now)
        return blended, tier_prices(blended.final, summary)
