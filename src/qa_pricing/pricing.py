from __future__ import annotations

from .models.config import PricingConfig
from .models.result import EstimateRange, HoursBreakdown, PriceBreakdown


def rush_adjustment(price: float, is_rush: bool, config: PricingConfig) -> float:
    return price * config.rush_fee_multiplier if is_rush else 0.0


def price_detailed(
    hours: HoursBreakdown,
    support_price: float,
    is_rush: bool,
    config: PricingConfig,
) -> PriceBreakdown:
    """Single quoted price for the internal calculator.

    ``final_hours`` already carries the support hours, billed here at the
    standard rate, and ``support_price`` is then added again on top. This
    double count matches the pricing sheet the numbers come from and is kept
    until the sheet itself changes.
    """
    intermediate = hours.final_hours * config.base_hourly_rate
    base_price = max(intermediate, config.minimum_price)
    rush = rush_adjustment(base_price, is_rush, config)
    return PriceBreakdown(
        base_price=base_price,
        rush_adjustment=rush,
        final_price=base_price + rush + support_price,
    )


def price_estimate_range(hours: HoursBreakdown, is_rush: bool, config: PricingConfig) -> EstimateRange:
    """Customer-facing ± band around the contingency-inclusive project price.

    The minimum price only lifts the lower bound, and nothing is quoted at
    all when no hours were selected.
    """
    factor = config.estimate_range_factor
    project_price = (hours.total_base_hours + hours.contingency_hours) * config.base_hourly_rate
    rush = rush_adjustment(project_price, is_rush, config)
    center = project_price + rush

    if hours.final_hours <= 0:
        return EstimateRange(center_price=center, rush_adjustment=rush)

    raw_price_min = max(0.0, center * (1 - factor))
    raw_price_max = center * (1 + factor)
    price_min = max(config.minimum_price, raw_price_min)
    return EstimateRange(
        center_price=center,
        rush_adjustment=rush,
        hours_min=max(0.0, hours.final_hours * (1 - factor)),
        hours_max=hours.final_hours * (1 + factor),
        price_min=price_min,
        price_max=max(price_min, raw_price_max),
    )


__all__ = ["rush_adjustment", "price_detailed", "price_estimate_range"]
