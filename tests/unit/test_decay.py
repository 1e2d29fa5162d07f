"""
Тесты для модуля Decay

Проверяет:
1. Интерпретацию timestamp (datetime, date, ISO строки, мусор)
2. Возраст в месяцах (календарные поля + доля месяца)
3. Экспоненциальный вес и эффективный half-life
4. Веса выборки относительно самого свежего наблюдения
"""

import math
from datetime import date, datetime, timedelta, timezone

import pytest

from src.core.math.decay import (
    DAYS_PER_MONTH,
    age_in_months,
    decay_weight,
    relative_decay_weights,
    to_datetime,
)

NOW = datetime(2024, 6, 15)


# =============================================================================
# TIMESTAMP COERCION
# =============================================================================


class TestToDatetime:
    """Тесты для to_datetime"""

    def test_naive_datetime_unchanged(self) -> None:
        assert to_datetime(NOW) == NOW

    def test_date_becomes_midnight(self) -> None:
        assert to_datetime(date(2024, 5, 15)) == datetime(2024, 5, 15)

    def test_iso_strings(self) -> None:
        assert to_datetime("2024-05-15") == datetime(2024, 5, 15)
        assert to_datetime("2024-05-15T10:30:00") == datetime(2024, 5, 15, 10, 30)

    def test_zulu_suffix(self) -> None:
        assert to_datetime("2024-05-15T10:30:00Z") == datetime(2024, 5, 15, 10, 30)

    def test_aware_converted_to_utc(self) -> None:
        """Aware значения переводятся в UTC и становятся naive"""
        tz = timezone(timedelta(hours=-2))
        result = to_datetime(datetime(2024, 6, 15, 23, 0, tzinfo=tz))
        assert result == datetime(2024, 6, 16, 1, 0)
        assert result.tzinfo is None

    def test_unparseable_is_none(self) -> None:
        assert to_datetime("not a date") is None
        assert to_datetime("") is None
        assert to_datetime("   ") is None
        assert to_datetime(None) is None
        assert to_datetime(1718409600) is None
        assert to_datetime("2024-13-45") is None

    def test_offset_past_datetime_range_is_none(self) -> None:
        """Смещение, выводящее момент за пределы datetime, даёт None"""
        assert to_datetime("0001-01-01T00:00:00+01:00") is None
        assert to_datetime("9999-12-31T23:00:00-02:00") is None
        tz = timezone(timedelta(hours=3))
        assert to_datetime(datetime(1, 1, 1, 1, 0, tzinfo=tz)) is None

    def test_offset_inside_datetime_range(self) -> None:
        assert to_datetime("0001-01-01T05:00:00+01:00") == datetime(1, 1, 1, 4, 0)


# =============================================================================
# AGE IN MONTHS
# =============================================================================


class TestAgeInMonths:
    """Тесты для age_in_months"""

    def test_same_day_of_month_gives_whole_months(self) -> None:
        assert age_in_months(datetime(2024, 4, 15), NOW) == 2.0
        assert age_in_months(datetime(2024, 5, 15), NOW) == 1.0
        assert age_in_months(NOW, NOW) == 0.0

    def test_day_fraction_uses_fixed_month_length(self) -> None:
        result = age_in_months(datetime(2024, 6, 1), NOW)
        assert result == pytest.approx(14.0 / DAYS_PER_MONTH)

    def test_year_boundary(self) -> None:
        """Δyear·12 + Δmonth + Δday / 30.44 через границу года"""
        result = age_in_months(datetime(2023, 12, 20), datetime(2024, 1, 10))
        assert result == pytest.approx(1.0 - 10.0 / DAYS_PER_MONTH)

    def test_time_of_day_ignored(self) -> None:
        """Учитываются только календарные поля"""
        morning = age_in_months(datetime(2024, 5, 15, 1, 0), NOW)
        evening = age_in_months(datetime(2024, 5, 15, 23, 0), NOW)
        assert morning == evening == 1.0

    def test_future_date_negative(self) -> None:
        assert age_in_months(datetime(2024, 7, 15), NOW) == -1.0

    def test_accepts_strings(self) -> None:
        assert age_in_months("2024-04-15", "2024-06-15") == 2.0

    def test_invalid_dates_raise(self) -> None:
        with pytest.raises(ValueError, match="must be dates"):
            age_in_months("garbage", NOW)

    def test_invalid_month_length_raises(self) -> None:
        with pytest.raises(ValueError, match="days_per_month must be positive"):
            age_in_months(NOW, NOW, days_per_month=0.0)


# =============================================================================
# DECAY WEIGHT
# =============================================================================


class TestDecayWeight:
    """Тесты для decay_weight"""

    def test_fresh_quote_full_weight(self) -> None:
        assert decay_weight(0.0) == 1.0

    def test_effective_half_life(self) -> None:
        """При alpha=0.6 вес падает вдвое за ≈1.67 месяца"""
        assert decay_weight(1.0 / 0.6) == pytest.approx(0.5)

    def test_one_and_two_months(self) -> None:
        assert decay_weight(1.0) == pytest.approx(2 ** -0.6)
        assert decay_weight(2.0) == pytest.approx(2 ** -1.2)

    def test_monotonic_decrease(self) -> None:
        weights = [decay_weight(age) for age in (0.0, 0.5, 1.0, 3.0, 12.0)]
        assert weights == sorted(weights, reverse=True)

    def test_custom_parameters(self) -> None:
        assert decay_weight(2.0, alpha=1.0, half_life_months=2.0) == pytest.approx(0.5)

    def test_far_future_overflows_to_inf(self) -> None:
        assert decay_weight(-1e6) == math.inf

    def test_far_past_underflows_to_zero(self) -> None:
        assert decay_weight(1e6) == 0.0

    def test_invalid_alpha_raises(self) -> None:
        with pytest.raises(ValueError, match="alpha must be positive"):
            decay_weight(1.0, alpha=-0.6)


# =============================================================================
# RELATIVE DECAY WEIGHTS
# =============================================================================


class TestRelativeDecayWeights:
    """Тесты для relative_decay_weights"""

    def test_freshest_gets_unit_weight(self) -> None:
        weights = relative_decay_weights([74.0, 73.0, 72.0])
        assert weights == pytest.approx([2 ** -1.2, 2 ** -0.6, 1.0])

    def test_ratios_match_absolute_weights(self) -> None:
        ages = [0.0, 1.0, 2.5]
        absolute = [decay_weight(age) for age in ages]
        relative = relative_decay_weights(ages)
        assert relative == pytest.approx(absolute)

    def test_very_old_sample_not_zero(self) -> None:
        assert relative_decay_weights([1e6, 1e6, 1e6]) == [1.0, 1.0, 1.0]

    def test_future_ages_stay_finite(self) -> None:
        weights = relative_decay_weights([0.0, -1706.0])
        assert weights[1] == 1.0
        assert 0.0 <= weights[0] < 1e-300

    def test_empty(self) -> None:
        assert relative_decay_weights([]) == []

    def test_custom_parameters(self) -> None:
        weights = relative_decay_weights([12.0, 10.0], alpha=1.0, half_life_months=2.0)
        assert weights == pytest.approx([0.5, 1.0])
