"""
Decayed Robust Estimator — одна цена из датированных котировок

Алгоритм:
1. Отбор пригодных котировок (< min_sample_size → None)
2. Вес каждой котировки по давности: 0.5 ^ (alpha · age / half_life),
   возраст отсчитывается от самой свежей котировки (max вес = 1)
3. Pass 1: взвешенные μ0, σ0; σ0 = max(σ0, sigma_floor)
4. Winsorization: цены клипуются в [μ0 − clip_sigma·σ0, μ0 + clip_sigma·σ0]
5. Pass 2: взвешенное среднее клипованных цен, округление half-up

Функция чистая: "now" передаётся явно, результат детерминирован.
"""

from datetime import datetime
from typing import Any, Iterable, Optional

from loguru import logger

from src.core.domain.quote import QuotePoint
from src.core.math.decay import age_in_months, relative_decay_weights, to_datetime
from src.core.math.moments import weighted_mean, weighted_pstdev
from src.core.math.numerical_safeguards import clamp, round_half_up
from src.pricing.config import DEFAULT_CONFIG, PricingConfig
from src.pricing.quotes import clean_quote_points


def recency_weights(
    observed: Iterable[datetime],
    now: datetime,
    config: Optional[PricingConfig] = None,
) -> list[float]:
    """
    Веса по давности для набора моментов наблюдения.

    Веса нормированы на самое свежее наблюдение: общий множитель не меняет
    взвешенных моментов, а выборка из старых или будущих котировок не
    обнуляется и не переполняется.
    """
    cfg = config or DEFAULT_CONFIG
    ages = [age_in_months(then, now, cfg.days_per_month) for then in observed]
    return relative_decay_weights(
        ages,
        alpha=cfg.decay_alpha,
        half_life_months=cfg.half_life_months,
    )


def representative_price(
    points: Optional[Iterable[QuotePoint]],
    now: Any,
    config: Optional[PricingConfig] = None,
) -> Optional[int]:
    """
    Де-шумленная, взвешенная по давности цена.

    Args:
        points: Исторические котировки (непригодные отбрасываются)
        now: Опорный момент для возраста котировок
        config: Конфигурация (default: PricingConfig())

    Returns:
        Целая цена или None, если пригодных котировок меньше min_sample_size
        (или now не интерпретируется как дата)
    """
    cfg = config or DEFAULT_CONFIG

    reference = to_datetime(now)
    if reference is None:
        logger.debug(f"Reference time {now!r} is not a date, estimate unknown")
        return None

    cleaned = clean_quote_points(points)
    if len(cleaned) < cfg.min_sample_size:
        logger.debug(
            f"Only {len(cleaned)} usable quote(s), need {cfg.min_sample_size}: estimate unknown"
        )
        return None

    prices = [p for p, _ in cleaned]
    weights = recency_weights((d for _, d in cleaned), reference, cfg)

    # Pass 1: rough center
    mu0 = weighted_mean(prices, weights)
    sigma0 = max(weighted_pstdev(prices, weights, mean=mu0) or 0.0, cfg.sigma_floor)

    # Winsorization (у цен около float max границы уходят в ±inf)
    lo = mu0 - cfg.clip_sigma * sigma0
    hi = mu0 + cfg.clip_sigma * sigma0
    clipped = [clamp(p, lo, hi) for p in prices]

    # Pass 2: final estimate
    mu = weighted_mean(clipped, weights)

    estimate = round_half_up(mu)
    logger.debug(
        f"Quote estimate {estimate} from {len(prices)} point(s) "
        f"(mu0={mu0:.2f}, sigma0={sigma0:.2f}, clip=[{lo:.2f}, {hi:.2f}])"
    )
    return estimate
