"""
Price Blender — итоговая цена из двух источников + нормированные веса

ФОРМУЛЫ:
    raw_w = base_trust · n / (n + k) · 1 / (1 + dispersion)
    raw_w = 0, если n < min_sample_size или dispersion неизвестна
    Z     = raw_w_quotes + raw_w_community
    w_i   = raw_w_i / Z  (оба 0, если Z == 0)

    final = round(p_q·w_q + p_c·w_c), если Z > 0 и обе цены известны
          = цена единственного известного источника, иначе
          = None, если цен нет

Одношаговое комбинирование без состояния.
"""

from typing import Optional

from loguru import logger

from src.core.domain.price import BlendedPrice, ConsensusStats
from src.core.math.numerical_safeguards import (
    is_valid_float,
    round_half_up,
)
from src.pricing.config import DEFAULT_CONFIG, PricingConfig


def source_weight(
    stats: ConsensusStats,
    base_trust: float,
    saturation_k: float,
    min_sample_size: int,
) -> float:
    """
    Ненормированный вес источника.

    Examples:
        >>> source_weight(ConsensusStats(price=1000, dispersion=0.0, sample_size=5), 1.0, 5.0, 3)
        0.5
        >>> source_weight(ConsensusStats(sample_size=2), 1.0, 5.0, 3)
        0.0
    """
    n = stats.sample_size
    if n < min_sample_size or stats.dispersion is None:
        return 0.0
    if not is_valid_float(stats.dispersion):
        return 0.0

    size_factor = n / (n + saturation_k)
    dispersion_factor = 1.0 / (1.0 + stats.dispersion)
    return base_trust * size_factor * dispersion_factor


def blend_prices(
    quotes: ConsensusStats,
    community: ConsensusStats,
    config: Optional[PricingConfig] = None,
) -> BlendedPrice:
    """
    Смешивание статистик котировок и сообщества.

    Args:
        quotes: Статистика котировок (см. quote_stats)
        community: Статистика мнений сообщества (см. consensus_stats)
        config: Конфигурация (default: PricingConfig())

    Returns:
        BlendedPrice с итоговой ценой и весами
    """
    cfg = config or DEFAULT_CONFIG

    raw_quotes = source_weight(
        quotes, cfg.base_trust_quotes, cfg.saturation_k, cfg.min_sample_size
    )
    raw_community = source_weight(
        community, cfg.base_trust_community, cfg.saturation_k, cfg.min_sample_size
    )

    z = raw_quotes + raw_community
    if z > 0:
        weight_quotes = raw_quotes / z
        weight_community = raw_community / z
    else:
        weight_quotes = weight_community = 0.0

    if z > 0 and quotes.price is not None and community.price is not None:
        final: Optional[float] = round_half_up(
            quotes.price * weight_quotes + community.price * weight_community
        )
    elif quotes.price is not None:
        final = quotes.price
    else:
        final = community.price

    logger.debug(
        f"Blend: final={final}, weights quotes={weight_quotes:.4f} "
        f"community={weight_community:.4f} (n={quotes.sample_size}/{community.sample_size})"
    )

    return BlendedPrice(
        final=final,
        weight_quotes=weight_quotes,
        weight_community=weight_community,
        quotes=quotes,
        community=community,
    )
