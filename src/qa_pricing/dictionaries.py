from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .models.config import PricingConfig, SpecializedBase, SupportPackage
from .models.scope import SpecializedCategory, SpecializedTier, SupportTier

BASE_HOURLY_RATE = 125.0
HOURS_PER_WEEK_STANDARD = 25
HOURS_PER_WEEK_RUSH = 35
MIN_PRICE = 10000.0
CONTINGENCY_BUFFER = 0.15
RUSH_FEE_MULTIPLIER = 0.2
ESTIMATE_RANGE_FACTOR = 0.2


# Hours for one unit of work at 100% coverage and complexity 1.0.
BASE_EFFORT: Mapping[str, float] = {
    "e2e_hours_per_feature": 3,
    "cross_browser_hours_per_feature": 3,
    "unit_hours_per_feature": 1,
    "test_case_hours_per_feature": 1.5,
    "how_to_hours_per_doc": 2,
    "scenario_hours_per_doc": 1.5,
}


SPECIALIZED_FACTORS: Mapping[SpecializedCategory, Mapping[SpecializedTier, float]] = {
    SpecializedCategory.accessibility: {
        SpecializedTier.tier_1: 1,
        SpecializedTier.tier_2: 1.5,
    },
    SpecializedCategory.performance: {
        SpecializedTier.tier_1: 1,
        SpecializedTier.tier_2: 1.8,
    },
    SpecializedCategory.compliance: {
        SpecializedTier.tier_1: 1.2,
        SpecializedTier.tier_2: 2,
    },
}


# Tier 1 is monthly hours; tiers 2 and 3 are package totals (3 and 6 months).
SUPPORT_PACKAGES: Mapping[SupportTier, SupportPackage] = {
    SupportTier.tier_1: SupportPackage(hours=10, rate_adjustment=1.2),
    SupportTier.tier_2: SupportPackage(hours=40, rate_adjustment=0.85),
    SupportTier.tier_3: SupportPackage(hours=90, rate_adjustment=0.85),
}


DEFAULT_CALCULATOR_CONFIG = PricingConfig(
    base_hourly_rate=BASE_HOURLY_RATE,
    minimum_price=MIN_PRICE,
    contingency_buffer=CONTINGENCY_BUFFER,
    rush_fee_multiplier=RUSH_FEE_MULTIPLIER,
    hours_per_week_standard=HOURS_PER_WEEK_STANDARD,
    hours_per_week_rush=HOURS_PER_WEEK_RUSH,
    specialized_base=SpecializedBase.e2e_hours,
    specialized_factors=SPECIALIZED_FACTORS,
    support_packages=SUPPORT_PACKAGES,
    **BASE_EFFORT,
)


# The public estimate only ever activates tier 1 and never sells support.
DEFAULT_ESTIMATE_CONFIG = PricingConfig(
    base_hourly_rate=BASE_HOURLY_RATE,
    minimum_price=MIN_PRICE,
    contingency_buffer=CONTINGENCY_BUFFER,
    rush_fee_multiplier=RUSH_FEE_MULTIPLIER,
    estimate_range_factor=ESTIMATE_RANGE_FACTOR,
    specialized_base=SpecializedBase.e2e_hours,
    specialized_factors={
        category: {SpecializedTier.tier_1: factors[SpecializedTier.tier_1]}
        for category, factors in SPECIALIZED_FACTORS.items()
    },
    **BASE_EFFORT,
)


@dataclass(frozen=True)
class EstimateAssumptions:
    """Fixed guesses the public estimate makes on the customer's behalf."""

    complexity: float = 1.5
    browsers_with_e2e: int = 2
    browsers_default: int = 1
    e2e_coverage: float = 0.75
    unit_coverage: float = 0.8
    test_case_coverage: float = 0.8
    docs_base_count: int = 2
    docs_per_feature_rate: float = 0.15


DEFAULT_ESTIMATE_ASSUMPTIONS = EstimateAssumptions()


# Initial text shown in the internal calculator form.
CALCULATOR_INITIAL_STATE: Mapping[str, str | bool] = {
    "base_hourly_rate": f"{BASE_HOURLY_RATE:.2f}",
    "hours_per_week": str(HOURS_PER_WEEK_STANDARD),
    "rush_hours_per_week": str(HOURS_PER_WEEK_RUSH),
    "min_price": f"{MIN_PRICE:.2f}",
    "contingency_buffer": str(CONTINGENCY_BUFFER),
    "rush_fee_multiplier": str(RUSH_FEE_MULTIPLIER),
    "e2e_hours_base": "3",
    "cross_browser_hours_base": "3",
    "unit_hours_base": "1",
    "test_case_hours_base": "1.5",
    "how_to_hours_per_doc": "2",
    "scenario_hours_per_doc": "1.5",
    "accessibility_factor_t1": "1",
    "accessibility_factor_t2": "1.5",
    "performance_factor_t1": "1",
    "performance_factor_t2": "1.8",
    "compliance_factor_t1": "1.2",
    "compliance_factor_t2": "2",
    "support_rate_adj_t1": "1.2",
    "support_rate_adj_t2": "0.85",
    "support_rate_adj_t3": "0.85",
    "support_hours_t1": "10",
    "support_hours_t2": "40",
    "support_hours_t3": "90",
    "project_name": "",
    "num_features": "10",
    "complexity": "1.5",
    "browsers": "1",
    "e2e_coverage": "75",
    "cross_browser_coverage": "",
    "unit_coverage": "80",
    "test_case_coverage": "80",
    "how_to_docs_count": "2",
    "scenario_docs_count": "5",
    "is_accessibility_t1": False,
    "is_accessibility_t2": False,
    "is_performance_t1": False,
    "is_performance_t2": False,
    "is_compliance_t1": False,
    "is_compliance_t2": False,
    "is_support_t1": False,
    "is_support_t2": False,
    "is_support_t3": False,
    "is_rush": False,
}


__all__ = [
    "BASE_EFFORT",
    "SPECIALIZED_FACTORS",
    "SUPPORT_PACKAGES",
    "DEFAULT_CALCULATOR_CONFIG",
    "DEFAULT_ESTIMATE_CONFIG",
    "DEFAULT_ESTIMATE_ASSUMPTIONS",
    "CALCULATOR_INITIAL_STATE",
    "EstimateAssumptions",
]
