"""
Decay — возраст наблюдения и экспоненциальный вес по давности

ФОРМУЛЫ:
    age_months = (Δyear·12 + Δmonth) + Δday / DAYS_PER_MONTH
    weight     = 0.5 ^ (alpha · age_months / half_life_months)

При alpha=0.6 и half_life=1 эффективный период полураспада ≈ 1.67 месяца.

Δday — разница календарных дней месяца (без учёта времени суток).
Момент "now" всегда передаётся явно: модуль не читает системные часы.
"""

import math
from datetime import date, datetime, timezone
from typing import Any, Final, Optional, Sequence

from src.core.math.numerical_safeguards import validate_positive

# =============================================================================
# DECAY ПАРАМЕТРЫ ПО УМОЛЧАНИЮ
# =============================================================================

# Средняя длина месяца в днях (365.25 / 12, округлено)
DAYS_PER_MONTH: Final[float] = 30.44

# Скорость затухания
DECAY_ALPHA: Final[float] = 0.6

# Базовый half-life в месяцах (эффективный = HALF_LIFE_MONTHS / DECAY_ALPHA)
HALF_LIFE_MONTHS: Final[float] = 1.0


# =============================================================================
# TIMESTAMP COERCION
# =============================================================================


def to_datetime(value: Any) -> Optional[datetime]:
    """
    Интерпретация значения как календарной даты.

    Поддерживаются datetime, date и ISO-8601 строки (включая суффикс "Z").
    Aware значения переводятся в UTC, naive считаются UTC. Результат всегда
    naive (UTC), чтобы разница календарных полей была сопоставимой.

    Returns:
        datetime или None, если значение нельзя интерпретировать как дату

    Examples:
        >>> to_datetime("2024-05-15")
        datetime.datetime(2024, 5, 15, 0, 0)
        >>> to_datetime("not a date") is None
        True
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        except OverflowError:
            # 0001-01-01 с положительным смещением выходит за datetime.min
            return None
    return parsed


# =============================================================================
# AGE & WEIGHT
# =============================================================================


def age_in_months(
    then: datetime,
    now: datetime,
    days_per_month: float = DAYS_PER_MONTH,
) -> float:
    """
    Непрерывный возраст наблюдения в месяцах относительно now.

    Отрицательный результат означает дату в будущем относительно now.

    Examples:
        >>> age_in_months(datetime(2024, 4, 15), datetime(2024, 6, 15))
        2.0
        >>> round(age_in_months(datetime(2024, 6, 1), datetime(2024, 6, 16)), 4)
        0.4928
    """
    validate_positive(days_per_month, "days_per_month")

    then = to_datetime(then)
    now = to_datetime(now)
    if then is None or now is None:
        raise ValueError("then and now must be dates")

    whole_months = (now.year - then.year) * 12 + (now.month - then.month)
    return whole_months + (now.day - then.day) / days_per_month


def decay_weight(
    age_months: float,
    alpha: float = DECAY_ALPHA,
    half_life_months: float = HALF_LIFE_MONTHS,
) -> float:
    """
    Экспоненциальный вес наблюдения по его возрасту.

    Для дат далеко в будущем вес переполняет float и возвращается inf.
    Для взвешивания выборки используйте relative_decay_weights.

    Examples:
        >>> decay_weight(0.0)
        1.0
        >>> round(decay_weight(1.0 / 0.6), 6)
        0.5
    """
    validate_positive(alpha, "alpha")
    validate_positive(half_life_months, "half_life_months")

    try:
        return 0.5 ** (alpha * age_months / half_life_months)
    except OverflowError:
        return math.inf


def relative_decay_weights(
    ages_months: Sequence[float],
    alpha: float = DECAY_ALPHA,
    half_life_months: float = HALF_LIFE_MONTHS,
) -> list[float]:
    """
    Веса выборки, отсчитанные от самого свежего наблюдения.

    Умножение всех весов на общий множитель не меняет взвешенных моментов,
    поэтому возраст берётся относительно минимального: максимальный вес
    равен 1, и веса не переполняются и не обнуляются все разом.

    Examples:
        >>> relative_decay_weights([1000.0, 1000.0])
        [1.0, 1.0]
        >>> relative_decay_weights([])
        []
    """
    if not ages_months:
        return []

    youngest = min(ages_months)
    return [decay_weight(age - youngest, alpha, half_life_months) for age in ages_months]
