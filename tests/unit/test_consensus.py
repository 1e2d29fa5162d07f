"""
Тесты для Consensus Aggregator и quote_stats

Покрытие:
- Порог выборки (sample_size сообщается всегда)
- Фильтрация мусорных мнений
- μ, population σ, CV, округление half-up
- Отсутствие взвешивания по давности
- quote_stats: цена от оценщика, дисперсия по плоскому пулу
"""

import math
from datetime import datetime

import pytest

from src.core.domain import ConsensusStats, QuotePoint
from src.pricing import PricingConfig, consensus_stats, quote_stats

NOW = datetime(2024, 6, 15)


class TestConsensusStats:
    """Тесты для consensus_stats"""

    def test_identical_opinions(self) -> None:
        assert consensus_stats([100, 100, 100]) == ConsensusStats(
            price=100, dispersion=0.0, sample_size=3
        )

    def test_too_few_opinions(self) -> None:
        stats = consensus_stats([10, 20])
        assert stats.price is None
        assert stats.dispersion is None
        assert stats.sample_size == 2

    def test_empty_and_none(self) -> None:
        assert consensus_stats([]).sample_size == 0
        assert consensus_stats(None) == ConsensusStats(sample_size=0)

    def test_garbage_filtered(self) -> None:
        """Нечисловые, нулевые, отрицательные и NaN/Inf мнения отбрасываются"""
        raw = [100, -5, 0, math.nan, math.inf, None, "x", True, 200, 300]
        stats = consensus_stats(raw)
        assert stats.sample_size == 3
        assert stats.price == 200
        assert stats.dispersion == pytest.approx(math.sqrt(20000.0 / 3.0) / 200.0)

    def test_population_cv(self) -> None:
        stats = consensus_stats([950, 1000, 1050])
        assert stats.price == 1000
        assert stats.dispersion == pytest.approx(math.sqrt(5000.0 / 3.0) / 1000.0)

    def test_half_rounds_up(self) -> None:
        """Среднее 2.5 округляется до 3"""
        assert consensus_stats([1, 2, 3, 4]).price == 3

    def test_order_independent(self) -> None:
        assert consensus_stats([300, 100, 200]) == consensus_stats([100, 200, 300])

    def test_custom_threshold(self) -> None:
        stats = consensus_stats([10, 20], PricingConfig(min_sample_size=2))
        assert stats.price == 15
        assert stats.sample_size == 2


class TestQuoteStats:
    """Тесты для quote_stats"""

    @pytest.fixture
    def quotes(self):
        return [
            QuotePoint(price=900, timestamp="2024-04-15"),
            QuotePoint(price=1000, timestamp="2024-05-15"),
            QuotePoint(price=1100, timestamp="2024-06-15"),
        ]

    def test_price_from_estimator(self, quotes) -> None:
        """Цена — взвешенная по давности оценка, а не плоское среднее 1000"""
        stats = quote_stats(quotes, NOW)
        assert stats.price == 1027
        assert stats.sample_size == 3
        assert stats.dispersion == pytest.approx(math.sqrt(20000.0 / 3.0) / 1000.0)

    def test_unusable_quotes_excluded_everywhere(self, quotes) -> None:
        """Котировка без даты не попадает ни в n, ни в дисперсию"""
        polluted = quotes + [
            QuotePoint(price=5000, timestamp="someday"),
            QuotePoint(price=-1, timestamp=NOW),
        ]
        assert quote_stats(polluted, NOW) == quote_stats(quotes, NOW)

    def test_too_few_quotes(self, quotes) -> None:
        stats = quote_stats(quotes[:2], NOW)
        assert stats == ConsensusStats(price=None, dispersion=None, sample_size=2)

    def test_aggregator_ignores_dates(self) -> None:
        """consensus_stats по тем же ценам даёт плоское среднее"""
        assert consensus_stats([900, 1000, 1100]).price == 1000


class TestHugeValues:
    """Мнения и котировки около float max"""

    def test_identical_huge_opinions(self) -> None:
        stats = consensus_stats([1e308, 1e308, 1e308])
        assert stats.price == 1e308
        assert stats.dispersion == 0.0
        assert stats.sample_size == 3

    def test_mixed_huge_opinions(self) -> None:
        stats = consensus_stats([1e308, 1.5e308, 1.7e308])
        assert stats.price == pytest.approx(1.4e308)
        assert math.isfinite(stats.dispersion)
        assert stats.dispersion == pytest.approx(
            math.sqrt((0.16 + 0.01 + 0.09) / 3.0) / 1.4
        )

    def test_huge_quotes(self) -> None:
        stats = quote_stats(
            [QuotePoint(price=1e308, timestamp=NOW) for _ in range(3)], NOW
        )
        assert stats.price == float(int(1e308))
        assert stats.dispersion == 0.0
