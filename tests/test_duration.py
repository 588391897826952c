import math

import pytest

from qa_pricing.dictionaries import DEFAULT_CALCULATOR_CONFIG
from qa_pricing.duration import ceil_to_tenth, estimate_duration, select_hours_per_week


def test_weeks_months_years_use_ceiling_not_rounding():
    duration = estimate_duration(171.85, 20)

    assert duration.estimated_weeks == pytest.approx(8.5925)
    # 8.5925 / 4 = 2.148 -> 2.2 (nearest rounding would give 2.1)
    assert duration.estimated_months == 2.2
    # from the rounded months: 2.2 / 12 = 0.183 -> 0.2
    assert duration.estimated_years == 0.2


def test_zero_throughput_gives_zero_duration():
    duration = estimate_duration(171.85, 0)

    assert duration.estimated_weeks == 0
    assert duration.estimated_months == 0
    assert duration.estimated_years == 0


def test_years_compound_from_rounded_months():
    duration = estimate_duration(110.0, 25)

    assert duration.estimated_weeks == pytest.approx(4.4)
    assert duration.estimated_months == ceil_to_tenth(duration.estimated_weeks / 4)
    assert duration.estimated_years == ceil_to_tenth(duration.estimated_months / 12)


def test_ceil_to_tenth():
    assert ceil_to_tenth(2.01) == 2.1
    assert ceil_to_tenth(2.0) == 2.0
    assert ceil_to_tenth(0.0) == 0.0


def test_rush_uses_rush_throughput():
    assert select_hours_per_week(False, DEFAULT_CALCULATOR_CONFIG) == 25
    assert select_hours_per_week(True, DEFAULT_CALCULATOR_CONFIG) == 35


def test_ceil_to_tenth_passes_non_finite_values_through():
    assert ceil_to_tenth(float("inf")) == float("inf")
    assert math.isnan(ceil_to_tenth(float("nan")))
    # finite, but too large to scale by ten
    assert ceil_to_tenth(1.7e308) == 1.7e308


def test_infinite_hours_do_not_raise():
    duration = estimate_duration(float("inf"), 25)

    assert math.isinf(duration.estimated_weeks)
    assert math.isinf(duration.estimated_months)
    assert math.isinf(duration.estimated_years)
