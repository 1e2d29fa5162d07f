"""
Moments — взвешенные и простые моменты выборки

Population-моменты (делитель n или ΣW, не n-1): выборка мнений и котировок
рассматривается как вся доступная генеральная совокупность.

ФОРМУЛЫ:
    mean_w   = Σ w_i·x_i / Σ w_i
    pstdev_w = sqrt( Σ w_i·(x_i − mean_w)² / Σ w_i )
    cv       = pstdev / mean

Суммы считаются на масштабированных величинах (w / max(w), x / max|x|),
поэтому не переполняются для значений около float max и не теряют
выборку с очень малыми весами.
"""

import math
from typing import Optional, Sequence

from src.core.math.numerical_safeguards import safe_divide


def _unit_weights(weights: Sequence[float]) -> Optional[list[float]]:
    """Веса, делённые на максимальный (None, если положительного веса нет)."""
    w_max = max(weights)
    if not math.isfinite(w_max) or w_max <= 0:
        return None
    return [w / w_max for w in weights]


def _value_scale(values: Sequence[float]) -> Optional[float]:
    """Масштаб значений max|x| (1.0 для нулевой выборки, None для NaN/Inf)."""
    scale = max(abs(x) for x in values)
    if not math.isfinite(scale):
        return None
    return scale or 1.0


def weighted_mean(values: Sequence[float], weights: Sequence[float]) -> Optional[float]:
    """
    Взвешенное среднее.

    Returns:
        Среднее или None, если выборка пуста / нет положительного веса

    Raises:
        ValueError: Если длины values и weights различаются
    """
    if len(values) != len(weights):
        raise ValueError(
            f"values and weights length mismatch: {len(values)} != {len(weights)}"
        )
    if not values:
        return None

    unit = _unit_weights(weights)
    scale = _value_scale(values)
    if unit is None or scale is None:
        return None

    total_weight = math.fsum(unit)
    weighted_sum = math.fsum((x / scale) * w for x, w in zip(values, unit))
    return scale * (weighted_sum / total_weight)


def weighted_pstdev(
    values: Sequence[float],
    weights: Sequence[float],
    mean: Optional[float] = None,
) -> Optional[float]:
    """
    Взвешенное population стандартное отклонение.

    Args:
        values: Значения
        weights: Неотрицательные веса той же длины
        mean: Заранее посчитанное взвешенное среднее (optional)

    Returns:
        σ или None, если среднее не определено
    """
    if not values:
        return None

    if mean is None:
        mean = weighted_mean(values, weights)
        if mean is None:
            return None

    unit = _unit_weights(weights)
    scale = _value_scale(values)
    if unit is None or scale is None:
        return None

    total_weight = math.fsum(unit)
    centre = mean / scale
    sq_dev = math.fsum(w * (x / scale - centre) ** 2 for x, w in zip(values, unit))
    return scale * math.sqrt(max(sq_dev / total_weight, 0.0))


def mean(values: Sequence[float]) -> Optional[float]:
    """Простое арифметическое среднее (None для пустой выборки)."""
    return weighted_mean(values, [1.0] * len(values))


def pstdev(values: Sequence[float], mu: Optional[float] = None) -> Optional[float]:
    """Population стандартное отклонение без весов."""
    return weighted_pstdev(values, [1.0] * len(values), mean=mu)


def coefficient_of_variation(values: Sequence[float]) -> Optional[float]:
    """
    Coefficient of variation σ/μ.

    Returns:
        cv >= 0 или None, если μ не определено или равно нулю

    Examples:
        >>> coefficient_of_variation([100.0, 100.0, 100.0])
        0.0
    """
    mu = mean(values)
    if mu is None:
        return None
    sigma = pstdev(values, mu)
    if sigma is None:
        return None
    return safe_divide(sigma, mu, fallback=None)
