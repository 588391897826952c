from __future__ import annotations

from typing import Union

from pydantic import BaseModel

from ..parsing import parse_currency, parse_float_strict, parse_int_strict, parse_percent
from .config import PricingConfig, SpecializedBase, SupportPackage
from .scope import ProjectScopeInput, SpecializedCategory, SpecializedTier, SupportTier

FieldText = Union[str, float]


class CalculatorForm(BaseModel):
    """Raw field values of the internal calculator, exactly as typed.

    Every numeric field may hold arbitrary text; conversion goes through
    the parsing helpers so that junk becomes zero rather than an error.
    """

    # Rates and buffers
    base_hourly_rate: FieldText = ""
    hours_per_week: FieldText = ""
    rush_hours_per_week: FieldText = ""
    min_price: FieldText = ""
    contingency_buffer: FieldText = ""
    rush_fee_multiplier: FieldText = ""

    # Effort per unit
    e2e_hours_base: FieldText = ""
    cross_browser_hours_base: FieldText = ""
    unit_hours_base: FieldText = ""
    test_case_hours_base: FieldText = ""
    how_to_hours_per_doc: FieldText = ""
    scenario_hours_per_doc: FieldText = ""

    accessibility_factor_t1: FieldText = ""
    accessibility_factor_t2: FieldText = ""
    performance_factor_t1: FieldText = ""
    performance_factor_t2: FieldText = ""
    compliance_factor_t1: FieldText = ""
    compliance_factor_t2: FieldText = ""

    support_rate_adj_t1: FieldText = ""
    support_rate_adj_t2: FieldText = ""
    support_rate_adj_t3: FieldText = ""
    support_hours_t1: FieldText = ""
    support_hours_t2: FieldText = ""
    support_hours_t3: FieldText = ""

    # Project scope
    project_name: str = ""
    num_features: FieldText = ""
    complexity: FieldText = ""
    browsers: FieldText = ""
    e2e_coverage: FieldText = ""
    cross_browser_coverage: FieldText = ""
    unit_coverage: FieldText = ""
    test_case_coverage: FieldText = ""
    how_to_docs_count: FieldText = ""
    scenario_docs_count: FieldText = ""

    is_accessibility_t1: bool = False
    is_accessibility_t2: bool = False
    is_performance_t1: bool = False
    is_performance_t2: bool = False
    is_compliance_t1: bool = False
    is_compliance_t2: bool = False
    is_support_t1: bool = False
    is_support_t2: bool = False
    is_support_t3: bool = False
    is_rush: bool = False

    notes: str | None = None

    def to_config(self, *, specialized_base: SpecializedBase = SpecializedBase.e2e_hours) -> PricingConfig:
        return PricingConfig(
            base_hourly_rate=parse_currency(self.base_hourly_rate),
            minimum_price=parse_currency(self.min_price),
            contingency_buffer=parse_float_strict(self.contingency_buffer),
            rush_fee_multiplier=parse_float_strict(self.rush_fee_multiplier),
            hours_per_week_standard=parse_int_strict(self.hours_per_week),
            hours_per_week_rush=parse_int_strict(self.rush_hours_per_week),
            e2e_hours_per_feature=parse_float_strict(self.e2e_hours_base),
            cross_browser_hours_per_feature=parse_float_strict(self.cross_browser_hours_base),
            unit_hours_per_feature=parse_float_strict(self.unit_hours_base),
            test_case_hours_per_feature=parse_float_strict(self.test_case_hours_base),
            how_to_hours_per_doc=parse_float_strict(self.how_to_hours_per_doc),
            scenario_hours_per_doc=parse_float_strict(self.scenario_hours_per_doc),
            specialized_base=specialized_base,
            specialized_factors={
                SpecializedCategory.accessibility: {
                    SpecializedTier.tier_1: parse_float_strict(self.accessibility_factor_t1),
                    SpecializedTier.tier_2: parse_float_strict(self.accessibility_factor_t2),
                },
                SpecializedCategory.performance: {
                    SpecializedTier.tier_1: parse_float_strict(self.performance_factor_t1),
                    SpecializedTier.tier_2: parse_float_strict(self.performance_factor_t2),
                },
                SpecializedCategory.compliance: {
                    SpecializedTier.tier_1: parse_float_strict(self.compliance_factor_t1),
                    SpecializedTier.tier_2: parse_float_strict(self.compliance_factor_t2),
                },
            },
            support_packages={
                SupportTier.tier_1: SupportPackage(
                    hours=parse_int_strict(self.support_hours_t1),
                    rate_adjustment=parse_float_strict(self.support_rate_adj_t1),
                ),
                SupportTier.tier_2: SupportPackage(
                    hours=parse_int_strict(self.support_hours_t2),
                    rate_adjustment=parse_float_strict(self.support_rate_adj_t2),
                ),
                SupportTier.tier_3: SupportPackage(
                    hours=parse_int_strict(self.support_hours_t3),
                    rate_adjustment=parse_float_strict(self.support_rate_adj_t3),
                ),
            },
        )

    def to_scope(self) -> ProjectScopeInput:
        flags = {
            SpecializedCategory.accessibility: (self.is_accessibility_t1, self.is_accessibility_t2),
            SpecializedCategory.performance: (self.is_performance_t1, self.is_performance_t2),
            SpecializedCategory.compliance: (self.is_compliance_t1, self.is_compliance_t2),
        }
        specialized_tiers = {
            category: frozenset(
                tier for tier, active in zip(SpecializedTier, tier_flags) if active
            )
            for category, tier_flags in flags.items()
        }
        support_flags = (self.is_support_t1, self.is_support_t2, self.is_support_t3)
        return ProjectScopeInput(
            project_name=self.project_name or None,
            num_features=parse_int_strict(self.num_features),
            complexity=parse_float_strict(self.complexity),
            browser_count=parse_int_strict(self.browsers),
            e2e_coverage=parse_percent(self.e2e_coverage),
            cross_browser_coverage=parse_percent(self.cross_browser_coverage),
            unit_coverage=parse_percent(self.unit_coverage),
            test_case_coverage=parse_percent(self.test_case_coverage),
            how_to_doc_count=parse_int_strict(self.how_to_docs_count),
            scenario_doc_count=parse_int_strict(self.scenario_docs_count),
            specialized_tiers=specialized_tiers,
            support_tiers=frozenset(
                tier for tier, active in zip(SupportTier, support_flags) if active
            ),
            is_rush=self.is_rush,
        )


__all__ = ["CalculatorForm", "FieldText"]
