from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Mapping

from .models.config import PricingConfig, SpecializedBase
from .models.result import HoursBreakdown, SpecializedPricing, SupportPricing
from .models.scope import ProjectScopeInput, SpecializedCategory, SpecializedTier, SupportTier


@dataclass
class HoursEstimate:
    hours: HoursBreakdown
    specialized: SpecializedPricing
    support: SupportPricing


def suite_hours(
    count: float,
    base_effort: float,
    coverage: float = 1.0,
    complexity: float = 1.0,
    browser_factor: float = 1.0,
) -> float:
    return count * base_effort * coverage * complexity * browser_factor


def specialized_base_hours(scope: ProjectScopeInput, config: PricingConfig, e2e_hours: float) -> float:
    if config.specialized_base is SpecializedBase.features_complexity_browsers:
        return scope.num_features * scope.complexity * scope.browser_count
    return e2e_hours


def specialized_hours(
    base_hours: float,
    factors: Mapping[SpecializedTier, float],
    active: AbstractSet[SpecializedTier],
) -> float:
    """Sum ``base_hours * factor`` over every active tier, tier 1 first."""
    hours = 0.0
    for tier in SpecializedTier:
        if tier in active:
            hours += base_hours * factors.get(tier, 0.0)
    return hours


def support_pricing(scope: ProjectScopeInput, config: PricingConfig) -> SupportPricing:
    tier_prices: dict[SupportTier, float] = {}
    selected_hours = 0.0
    selected_price = 0.0
    for tier in SupportTier:
        package = config.support_package(tier)
        tier_prices[tier] = config.base_hourly_rate * package.hours * package.rate_adjustment
        if tier in scope.support_tiers:
            selected_hours += package.hours
            selected_price += tier_prices[tier]
    return SupportPricing(tier_prices=tier_prices, selected_hours=selected_hours, selected_price=selected_price)


def compute_hours(scope: ProjectScopeInput, config: PricingConfig) -> HoursEstimate:
    e2e = suite_hours(scope.num_features, config.e2e_hours_per_feature, scope.e2e_coverage, scope.complexity)
    cross_browser = suite_hours(
        scope.num_features,
        config.cross_browser_hours_per_feature,
        scope.cross_browser_coverage,
        scope.complexity,
        scope.browser_count,
    )
    unit = suite_hours(scope.num_features, config.unit_hours_per_feature, scope.unit_coverage, scope.complexity)
    test_case = suite_hours(
        scope.num_features, config.test_case_hours_per_feature, scope.test_case_coverage, scope.complexity
    )
    how_to = scope.how_to_doc_count * config.how_to_hours_per_doc
    scenario = scope.scenario_doc_count * config.scenario_hours_per_doc

    base = specialized_base_hours(scope, config, e2e)
    by_category = {
        category: specialized_hours(
            base,
            config.specialized_factors.get(category, {}),
            scope.active_tiers(category),
        )
        for category in SpecializedCategory
    }
    accessibility = by_category[SpecializedCategory.accessibility]
    performance = by_category[SpecializedCategory.performance]
    compliance = by_category[SpecializedCategory.compliance]

    support = support_pricing(scope, config)

    # Support hours stay out of the subtotal so contingency never applies to them.
    total_base = (
        e2e + cross_browser + unit + test_case + how_to + scenario + accessibility + performance + compliance
    )
    contingency = total_base * config.contingency_buffer
    final = total_base + contingency + support.selected_hours

    hours = HoursBreakdown(
        e2e_hours=e2e,
        cross_browser_hours=cross_browser,
        unit_hours=unit,
        test_case_hours=test_case,
        how_to_hours=how_to,
        scenario_hours=scenario,
        accessibility_hours=accessibility,
        performance_hours=performance,
        compliance_hours=compliance,
        support_package_hours=support.selected_hours,
        total_base_hours=total_base,
        contingency_hours=contingency,
        final_hours=final,
    )
    specialized = SpecializedPricing(
        accessibility_price=accessibility * config.base_hourly_rate,
        performance_price=performance * config.base_hourly_rate,
        compliance_price=compliance * config.base_hourly_rate,
    )
    return HoursEstimate(hours=hours, specialized=specialized, support=support)


__all__ = [
    "HoursEstimate",
    "suite_hours",
    "specialized_base_hours",
    "specialized_hours",
    "support_pricing",
    "compute_hours",
]
