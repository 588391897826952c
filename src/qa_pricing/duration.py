from __future__ import annotations

import math

from .models.config import PricingConfig
from .models.result import DurationEstimate


def ceil_to_tenth(value: float) -> float:
    if not math.isfinite(value):
        return value
    scaled = value * 10
    if not math.isfinite(scaled):
        return value
    return math.ceil(scaled) / 10


def select_hours_per_week(is_rush: bool, config: PricingConfig) -> float:
    return config.hours_per_week_rush if is_rush else config.hours_per_week_standard


def estimate_duration(final_hours: float, hours_per_week: float) -> DurationEstimate:
    """Calendar span at a fixed weekly throughput.

    Months are derived from weeks and years from the already rounded months,
    each ceiled to one decimal.
    """
    weeks = final_hours / hours_per_week if hours_per_week > 0 else 0.0
    months = ceil_to_tenth(weeks / 4)
    years = ceil_to_tenth(months / 12)
    return DurationEstimate(
        hours_per_week=hours_per_week,
        estimated_weeks=weeks,
        estimated_months=months,
        estimated_years=years,
    )


__all__ = ["ceil_to_tenth", "select_hours_per_week", "estimate_duration"]
