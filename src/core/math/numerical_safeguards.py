"""
Numerical Safeguards — Safe Math Primitives для ценовых оценок

Модуль обеспечивает численную устойчивость всех вычислений цены:
- Проверка входных чисел (finite, strictly positive)
- Безопасное деление с fallback вместо ZeroDivisionError
- Ограничение значения диапазоном (winsorization bounds)
- Округление half-up до целой денежной единицы
- Валидация параметров конфигурации

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на ноль никогда не происходит (возвращается fallback)
2. NaN/Inf никогда не попадают в результат
3. Округление детерминировано: x.5 всегда округляется вверх
"""

import math
from numbers import Real
from typing import Any, Final, Optional

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для сравнения знаменателя с нулём
EPS_CALC: Final[float] = 1e-12

# Абсолютная толерантность для сравнения весов и долей
EPS_WEIGHT: Final[float] = 1e-9


# =============================================================================
# ПРОВЕРКА ВХОДНЫХ ЧИСЕЛ
# =============================================================================


def is_valid_float(value: Any) -> bool:
    """
    Проверка, что value — вещественное число и оно finite.

    bool не считается числом: True/False из внешних данных отбрасываются.

    Examples:
        >>> is_valid_float(10.0)
        True
        >>> is_valid_float(float('nan'))
        False
        >>> is_valid_float("10")
        False
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def is_valid_price(value: Any) -> bool:
    """
    Проверка цены: finite и строго больше нуля.

    Examples:
        >>> is_valid_price(950)
        True
        >>> is_valid_price(0)
        False
        >>> is_valid_price(float('inf'))
        False
    """
    return is_valid_float(value) and value > 0


def valid_prices(values: Any) -> list[float]:
    """Оставляет только валидные цены (порядок сохраняется)."""
    if values is None:
        return []
    return [float(v) for v in values if is_valid_price(v)]


# =============================================================================
# БЕЗОПАСНОЕ ДЕЛЕНИЕ
# =============================================================================


def safe_divide(
    numerator: float,
    denominator: float,
    fallback: Optional[float] = 0.0,
    eps: float = EPS_CALC,
) -> Optional[float]:
    """
    Деление с fallback при |denominator| < eps или невалидном результате.

    Args:
        numerator: Числитель
        denominator: Знаменатель
        fallback: Значение при делении на ноль (может быть None)
        eps: Порог "нулевого" знаменателя

    Returns:
        numerator / denominator или fallback

    Examples:
        >>> safe_divide(10.0, 4.0)
        2.5
        >>> safe_divide(10.0, 0.0)
        0.0
        >>> safe_divide(10.0, 0.0, fallback=None) is None
        True
    """
    if not is_valid_float(numerator) or not is_valid_float(denominator):
        return fallback

    if abs(denominator) < eps:
        return fallback

    result = numerator / denominator
    if not math.isfinite(result):
        return fallback
    return result


# =============================================================================
# ОГРАНИЧЕНИЕ И ОКРУГЛЕНИЕ
# =============================================================================


def clamp(
    value: float,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
) -> float:
    """
    Ограничение значения диапазоном [min_value, max_value].

    Examples:
        >>> clamp(1500.0, 800.0, 1200.0)
        1200.0
        >>> clamp(-250.0, -200.0, 100.0)
        -200.0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result


def round_half_up(value: float) -> int:
    """
    Округление до ближайшего целого, половина — вверх (к +inf).

    Встроенный round() использует banker's rounding (round(2.5) == 2),
    что даёт разные цены для соседних .5 значений.

    Examples:
        >>> round_half_up(1014.5)
        1015
        >>> round_half_up(1014.49)
        1014
        >>> round_half_up(-2.5)
        -2
    """
    return int(math.floor(value + 0.5))


# =============================================================================
# ВАЛИДАЦИЯ ПАРАМЕТРОВ
# =============================================================================


def validate_positive(value: float, name: str) -> None:
    """
    Валидация, что параметр finite и строго положительный.

    Raises:
        ValueError: Если value <= 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a finite number, got {value!r}")

    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
