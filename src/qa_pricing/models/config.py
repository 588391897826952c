from __future__ import annotations

from enum import Enum
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

from .scope import SpecializedCategory, SpecializedTier, SupportTier


class SpecializedBase(str, Enum):
    """Which quantity the specialized tier factors multiply."""

    e2e_hours = "E2E_HOURS"
    features_complexity_browsers = "FEATURES_COMPLEXITY_BROWSERS"


class SupportPackage(BaseModel):
    model_config = ConfigDict(frozen=True)

    hours: float
    rate_adjustment: float = 1.0


class PricingConfig(BaseModel):
    """Read-only snapshot of every rate and factor a calculation uses."""

    model_config = ConfigDict(frozen=True)

    base_hourly_rate: float
    minimum_price: float = 0.0
    contingency_buffer: float = 0.0
    rush_fee_multiplier: float = 0.0
    hours_per_week_standard: float = 0.0
    hours_per_week_rush: float = 0.0
    estimate_range_factor: float = 0.0

    e2e_hours_per_feature: float = 0.0
    cross_browser_hours_per_feature: float = 0.0
    unit_hours_per_feature: float = 0.0
    test_case_hours_per_feature: float = 0.0
    how_to_hours_per_doc: float = 0.0
    scenario_hours_per_doc: float = 0.0

    specialized_base: SpecializedBase = SpecializedBase.e2e_hours
    specialized_factors: Mapping[SpecializedCategory, Mapping[SpecializedTier, float]] = Field(
        default_factory=dict
    )
    support_packages: Mapping[SupportTier, SupportPackage] = Field(default_factory=dict)

    def support_package(self, tier: SupportTier) -> SupportPackage:
        return self.support_packages.get(tier) or SupportPackage(hours=0.0, rate_adjustment=0.0)


__all__ = ["PricingConfig", "SpecializedBase", "SupportPackage"]
