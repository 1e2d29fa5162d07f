"""
Тесты для проекции цен премиальных уровней

Проверяет tier_depreciation, depreciation_summary и tier_prices.
"""

import math

import pytest

from src.core.domain import DepreciationSummary, Tier, TierListing
from src.pricing import depreciation_summary, tier_depreciation, tier_prices


@pytest.fixture
def listings():
    return [
        TierListing(regular=100, gold=300, diamond=800),
        TierListing(regular=200, gold=600, diamond=1600, emerald=12800),
        TierListing(regular=None, gold=500),
        TierListing(regular=0, gold=10),
        TierListing(regular=150, gold=math.nan),
    ]


class TestTierDepreciation:
    """Тесты для tier_depreciation"""

    def test_depreciation_pct(self) -> None:
        assert tier_depreciation(100.0, 300.0, Tier.GOLD) == pytest.approx(25.0)
        assert tier_depreciation(100.0, 1600.0, Tier.DIAMOND) == pytest.approx(0.0)

    def test_premium_above_theoretical_negative(self) -> None:
        assert tier_depreciation(100.0, 800.0, Tier.GOLD) == pytest.approx(-100.0)

    def test_invalid_inputs(self) -> None:
        assert tier_depreciation(0.0, 300.0, Tier.GOLD) is None
        assert tier_depreciation(100.0, math.nan, Tier.GOLD) is None


class TestDepreciationSummary:
    """Тесты для depreciation_summary"""

    def test_summary(self, listings) -> None:
        summary = depreciation_summary(listings)
        assert summary.total_listings == 5
        assert summary.listings_with_valid_regular_price == 3
        assert summary.average_gold_depreciation == pytest.approx(25.0)
        assert summary.gold_count == 2
        assert summary.average_diamond_depreciation == pytest.approx(50.0)
        assert summary.diamond_count == 2
        assert summary.average_emerald_depreciation == pytest.approx(0.0)
        assert summary.emerald_count == 1

    def test_empty(self) -> None:
        summary = depreciation_summary([])
        assert summary.total_listings == 0
        assert all(summary.average_for(tier) == 0.0 for tier in Tier)
        assert all(summary.count_for(tier) == 0 for tier in Tier)
        assert depreciation_summary(None) == summary


class TestTierPrices:
    """Тесты для tier_prices"""

    @pytest.fixture
    def summary(self, listings):
        return depreciation_summary(listings)

    def test_projection(self, summary) -> None:
        prices = tier_prices(1000, summary)
        assert prices.gold == 3000
        assert prices.diamond == 8000
        assert prices.emerald == 64000

    def test_depreciation_clamped(self) -> None:
        """Обесценивание ограничено диапазоном [-200, 100]"""
        summary = DepreciationSummary(
            total_listings=1,
            listings_with_valid_regular_price=1,
            average_gold_depreciation=-500.0,
            average_diamond_depreciation=150.0,
        )
        prices = tier_prices(100, summary)
        assert prices.gold == 1200
        assert prices.diamond == 0
        assert prices.emerald == 6400

    def test_unknown_base(self, summary) -> None:
        assert tier_prices(None, summary).gold is None
        assert tier_prices(0, summary).diamond is None

    def test_no_summary(self) -> None:
        assert tier_prices(1000, None).emerald is None

    def test_overflowing_projection_unknown(self) -> None:
        """Проекция за пределы float даёт None, младшие уровни считаются"""
        summary = DepreciationSummary(total_listings=1, listings_with_valid_regular_price=1)
        prices = tier_prices(1e307, summary)
        assert prices.gold == int(4e307)
        assert prices.diamond == int(1.6e308)
        assert prices.emerald is None
