"""
Consensus Aggregator — сводка недатированных мнений сообщества

Мнения — плоский пул без весов по давности:
    μ = mean(x), σ = pstdev(x), dispersion = σ / μ, price = round(μ)

quote_stats упаковывает котировки в тот же ConsensusStats: sample_size и
dispersion считаются по плоскому пулу пригодных котировок, а price —
результат Decayed Robust Estimator.
"""

from typing import Any, Iterable, Optional

from loguru import logger

from src.core.domain.price import ConsensusStats
from src.core.domain.quote import QuotePoint
from src.core.math.moments import coefficient_of_variation, mean
from src.core.math.numerical_safeguards import round_half_up, valid_prices
from src.pricing.config import DEFAULT_CONFIG, PricingConfig
from src.pricing.estimator import representative_price
from src.pricing.quotes import clean_quote_points


def consensus_stats(
    values: Optional[Iterable[Any]],
    config: Optional[PricingConfig] = None,
) -> ConsensusStats:
    """
    Среднее, coefficient of variation и размер выборки мнений.

    Examples:
        >>> consensus_stats([100, 100, 100])
        ConsensusStats(price=100.0, dispersion=0.0, sample_size=3)
        >>> consensus_stats([10, 20])
        ConsensusStats(price=None, dispersion=None, sample_size=2)
    """
    cfg = config or DEFAULT_CONFIG

    nums = valid_prices(values)
    n = len(nums)

    if n < cfg.min_sample_size:
        logger.debug(f"Only {n} usable opinion(s), need {cfg.min_sample_size}")
        return ConsensusStats(price=None, dispersion=None, sample_size=n)

    mu = mean(nums)
    return ConsensusStats(
        price=round_half_up(mu),
        dispersion=coefficient_of_variation(nums),
        sample_size=n,
    )


def quote_stats(
    points: Optional[Iterable[QuotePoint]],
    now: Any,
    config: Optional[PricingConfig] = None,
) -> ConsensusStats:
    """
    Котировки в форме ConsensusStats для Price Blender.

    Плоская дисперсия по котировкам + цена от Decayed Robust Estimator;
    если оценка неизвестна, остаётся плоское среднее.
    """
    cfg = config or DEFAULT_CONFIG

    usable = [QuotePoint(price=p, timestamp=d) for p, d in clean_quote_points(points)]
    flat = consensus_stats([point.price for point in usable], cfg)
    estimate = representative_price(usable, now, cfg)

    if estimate is None:
        return flat
    return flat.model_copy(update={"price": float(estimate)})
