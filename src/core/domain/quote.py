"""
QuotePoint — Модель исторической котировки

Одна наблюдённая цена сделки с датой наблюдения. Создаётся на каждый запрос
из внешних данных листинга и не хранится ядром.

Модель намеренно "мягкая": price может быть NaN/Inf/None, timestamp —
строкой, которую не удаётся разобрать. Такие точки не вызывают ошибок,
а отбрасываются оценщиком (см. src.pricing.quotes.clean_quote_points).
"""

from datetime import date, datetime
from typing import Optional, Union

from pydantic import BaseModel, Field

from src.core.math.decay import to_datetime
from src.core.math.numerical_safeguards import is_valid_price


# =============================================================================
# QUOTE POINT MODEL
# =============================================================================


class QuotePoint(BaseModel):
    """
    Историческая котировка предмета.

    Immutable модель (frozen=True).
    """

    price: Optional[float] = Field(..., description="Цена сделки в базовой валюте")
    timestamp: Union[datetime, date, str, None] = Field(
        ..., description="Момент наблюдения (datetime, date или ISO-8601 строка)"
    )

    model_config = {"frozen": True}

    @property
    def observed_at(self) -> Optional[datetime]:
        """Момент наблюдения как naive UTC datetime (None, если не разбирается)."""
        return to_datetime(self.timestamp)

    @property
    def is_usable(self) -> bool:
        """Точка пригодна для оценки: валидная цена и разбираемая дата."""
        return is_valid_price(self.price) and self.observed_at is not None
