"""
Quote helpers — отбор пригодных котировок и построение котировки из листинга

Котировка пригодна, если цена finite и > 0, а дату можно интерпретировать
как календарную. Непригодные точки молча отбрасываются.
"""

from datetime import datetime
from typing import Any, Iterable, Optional

from loguru import logger

from src.core.domain.quote import QuotePoint
from src.core.math.decay import to_datetime
from src.core.math.numerical_safeguards import is_valid_price


def clean_quote_points(points: Optional[Iterable[QuotePoint]]) -> list[tuple[float, datetime]]:
    """
    Отбор пригодных котировок.

    Элементы, не являющиеся QuotePoint, считаются непригодными.

    Returns:
        Список (price, observed_at) в исходном порядке
    """
    if points is None:
        return []

    cleaned: list[tuple[float, datetime]] = []
    dropped = 0
    for point in points:
        if not isinstance(point, QuotePoint) or not point.is_usable:
            dropped += 1
            continue
        cleaned.append((float(point.price), point.observed_at))

    if dropped:
        logger.debug(f"Dropped {dropped} unusable quote point(s), kept {len(cleaned)}")
    return cleaned


def quote_from_listing(buy: Any, sell: Any, observed_at: Any) -> Optional[QuotePoint]:
    """
    Котировка из пары цен покупки/продажи одного листинга.

    Цена — середина спреда, если обе стороны валидны, иначе валидная сторона.

    Returns:
        QuotePoint или None, если нет ни одной валидной цены или дата не разбирается

    Examples:
        >>> quote_from_listing(900, 1100, "2024-05-15").price
        1000.0
        >>> quote_from_listing(None, 1100, "2024-05-15").price
        1100.0
        >>> quote_from_listing(900, 1100, "soon") is None
        True
    """
    timestamp = to_datetime(observed_at)
    if timestamp is None:
        return None

    buy_ok = is_valid_price(buy)
    sell_ok = is_valid_price(sell)

    if buy_ok and sell_ok:
        # Полусумма без переполнения для цен около float max
        price = float(buy) / 2.0 + float(sell) / 2.0
    elif buy_ok:
        price = float(buy)
    elif sell_ok:
        price = float(sell)
    else:
        return None

    return QuotePoint(price=price, timestamp=timestamp)
