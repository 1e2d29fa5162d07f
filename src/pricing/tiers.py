"""
Tier projection — цены премиальных уровней от итоговой обычной цены

depreciation_summary усредняет фактическое обесценивание уровней по всем
листингам; tier_prices применяет его к базовой цене:

    tier_price = round(base · multiplier · (1 − clamp(dep, −200, 100) / 100))
"""

from typing import Final, Iterable, Optional

from loguru import logger

from src.core.domain.tier import (
    DepreciationSummary,
    Tier,
    TierListing,
    TierPrices,
)
from src.core.math.moments import mean
from src.core.math.numerical_safeguards import (
    clamp,
    is_valid_float,
    is_valid_price,
    round_half_up,
)

# Допустимый диапазон обесценивания при проекции, %
DEPRECIATION_MIN_PCT: Final[float] = -200.0
DEPRECIATION_MAX_PCT: Final[float] = 100.0


def tier_depreciation(regular: float, actual: float, tier: Tier) -> Optional[float]:
    """
    Обесценивание уровня в процентах относительно теоретической цены.

    Examples:
        >>> tier_depreciation(100.0, 300.0, Tier.GOLD)
        25.0
        >>> tier_depreciation(0.0, 300.0, Tier.GOLD) is None
        True
    """
    if not is_valid_price(regular) or not is_valid_float(actual):
        return None

    theoretical = regular * tier.multiplier
    depreciation = 100.0 * (1.0 - actual / theoretical)
    return depreciation if is_valid_float(depreciation) else None


def depreciation_summary(listings: Optional[Iterable[TierListing]]) -> DepreciationSummary:
    """Среднее обесценивание каждого уровня по набору листингов."""
    listings = list(listings or [])

    samples: dict[Tier, list[float]] = {tier: [] for tier in Tier}
    with_regular = 0

    for listing in listings:
        if not is_valid_price(listing.regular):
            continue
        with_regular += 1
        for tier in Tier:
            actual = listing.price_for(tier)
            if actual is None:
                continue
            depreciation = tier_depreciation(listing.regular, actual, tier)
            if depreciation is not None:
                samples[tier].append(depreciation)

    logger.debug(
        f"Depreciation summary over {len(listings)} listing(s), "
        f"{with_regular} with valid regular price"
    )

    return DepreciationSummary(
        total_listings=len(listings),
        listings_with_valid_regular_price=with_regular,
        average_gold_depreciation=mean(samples[Tier.GOLD]) or 0.0,
        gold_count=len(samples[Tier.GOLD]),
        average_diamond_depreciation=mean(samples[Tier.DIAMOND]) or 0.0,
        diamond_count=len(samples[Tier.DIAMOND]),
        average_emerald_depreciation=mean(samples[Tier.EMERALD]) or 0.0,
        emerald_count=len(samples[Tier.EMERALD]),
    )


def tier_prices(
    base_price: Optional[float],
    summary: Optional[DepreciationSummary],
) -> TierPrices:
    """
    Прогноз цен уровней.

    Все уровни None, если базовая цена неизвестна/нулевая или сводки нет.
    """
    if summary is None or not is_valid_price(base_price):
        return TierPrices()

    projected: dict[str, Optional[int]] = {}
    for tier in Tier:
        depreciation = summary.average_for(tier)
        if not is_valid_float(depreciation):
            projected[tier.value] = None
            continue
        effective = clamp(depreciation, DEPRECIATION_MIN_PCT, DEPRECIATION_MAX_PCT)
        price = base_price * tier.multiplier * (1.0 - effective / 100.0)
        # Базовая цена около float max не проецируется на старшие уровни
        projected[tier.value] = round_half_up(price) if is_valid_float(price) else None

    return TierPrices(**projected)
