from __future__ import annotations

from typing import Mapping

from pydantic import BaseModel, Field

from .scope import SupportTier


class HoursBreakdown(BaseModel):
    e2e_hours: float = 0.0
    cross_browser_hours: float = 0.0
    unit_hours: float = 0.0
    test_case_hours: float = 0.0
    how_to_hours: float = 0.0
    scenario_hours: float = 0.0
    accessibility_hours: float = 0.0
    performance_hours: float = 0.0
    compliance_hours: float = 0.0
    support_package_hours: float = 0.0
    total_base_hours: float = 0.0
    contingency_hours: float = 0.0
    final_hours: float = 0.0

    @property
    def documentation_hours(self) -> float:
        return self.how_to_hours + self.scenario_hours

    @property
    def specialized_hours(self) -> float:
        return self.accessibility_hours + self.performance_hours + self.compliance_hours


class SpecializedPricing(BaseModel):
    accessibility_price: float = 0.0
    performance_price: float = 0.0
    compliance_price: float = 0.0


class SupportPricing(BaseModel):
    tier_prices: Mapping[SupportTier, float] = Field(
        default_factory=dict, description="Price of each tier as if it were selected"
    )
    selected_hours: float = 0.0
    selected_price: float = 0.0


class PriceBreakdown(BaseModel):
    base_price: float = 0.0
    rush_adjustment: float = 0.0
    final_price: float = 0.0


class DurationEstimate(BaseModel):
    hours_per_week: float = 0.0
    estimated_weeks: float = 0.0
    estimated_months: float = 0.0
    estimated_years: float = 0.0


class EstimateRange(BaseModel):
    center_price: float = 0.0
    rush_adjustment: float = 0.0
    hours_min: float = 0.0
    hours_max: float = 0.0
    price_min: float = 0.0
    price_max: float = 0.0


class CalculationResult(BaseModel):
    hours: HoursBreakdown
    specialized: SpecializedPricing
    support: SupportPricing
    pricing: PriceBreakdown
    duration: DurationEstimate

    @property
    def effective_rate(self) -> float:
        if self.hours.final_hours <= 0:
            return 0.0
        return self.pricing.final_price / self.hours.final_hours

    @property
    def is_complete(self) -> bool:
        return self.pricing.final_price > 0


class EstimateAssumptionsUsed(BaseModel):
    base_hourly_rate_used: float
    contingency_buffer_used: float
    complexity_factor_used: float
    documentation_factor_used: float = 0.0
    specialized_factor_used: float = 0.0
    rush_factor_used: float = 0.0


class QuickEstimateResult(BaseModel):
    hours: HoursBreakdown
    specialized: SpecializedPricing
    estimate: EstimateRange
    assumptions: EstimateAssumptionsUsed


__all__ = [
    "HoursBreakdown",
    "SpecializedPricing",
    "SupportPricing",
    "PriceBreakdown",
    "DurationEstimate",
    "EstimateRange",
    "CalculationResult",
    "EstimateAssumptionsUsed",
    "QuickEstimateResult",
]
