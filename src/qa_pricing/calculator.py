from __future__ import annotations

import logging
import math

from .dictionaries import (
    CALCULATOR_INITIAL_STATE,
    DEFAULT_CALCULATOR_CONFIG,
    DEFAULT_ESTIMATE_ASSUMPTIONS,
    DEFAULT_ESTIMATE_CONFIG,
    EstimateAssumptions,
)
from .duration import estimate_duration, select_hours_per_week
from .hours import compute_hours
from .models.config import PricingConfig, SpecializedBase
from .models.forms import CalculatorForm
from .models.quote import CalculatorQuotePayload, EstimateSubmission
from .models.result import (
    CalculationResult,
    EstimateAssumptionsUsed,
    HoursBreakdown,
    QuickEstimateResult,
)
from .models.scope import (
    CustomerEstimateInputs,
    ProjectScopeInput,
    SpecializedCategory,
    SpecializedTier,
)
from .parsing import parse_int_strict
from .pricing import price_detailed, price_estimate_range

logger = logging.getLogger(__name__)


def initial_calculator_form() -> CalculatorForm:
    return CalculatorForm.model_validate(dict(CALCULATOR_INITIAL_STATE))


class DetailedCalculator:
    """Internal calculator: full breakdown, single price and a duration."""

    def __init__(self, *, config: PricingConfig = DEFAULT_CALCULATOR_CONFIG) -> None:
        self._config = config

    def calculate(self, scope: ProjectScopeInput, config: PricingConfig | None = None) -> CalculationResult:
        if config is None:
            config = self._config
        estimate = compute_hours(scope, config)
        pricing = price_detailed(estimate.hours, estimate.support.selected_price, scope.is_rush, config)
        duration = estimate_duration(estimate.hours.final_hours, select_hours_per_week(scope.is_rush, config))
        result = CalculationResult(
            hours=estimate.hours,
            specialized=estimate.specialized,
            support=estimate.support,
            pricing=pricing,
            duration=duration,
        )
        logger.debug(
            "Calculated detailed quote",
            extra={
                "final_hours": result.hours.final_hours,
                "final_price": result.pricing.final_price,
                "is_rush": scope.is_rush,
            },
        )
        return result

    def calculate_form(
        self,
        form: CalculatorForm,
        *,
        specialized_base: SpecializedBase | None = None,
    ) -> CalculationResult:
        config = form.to_config(specialized_base=specialized_base or self._config.specialized_base)
        return self.calculate(form.to_scope(), config)

    def build_quote_payload(
        self,
        scope: ProjectScopeInput,
        result: CalculationResult,
        *,
        config: PricingConfig | None = None,
        notes: str | None = None,
    ) -> CalculatorQuotePayload:
        if config is None:
            config = self._config
        return CalculatorQuotePayload(
            project_name=scope.project_name,
            scope=scope,
            result=result,
            base_hourly_rate=config.base_hourly_rate,
            contingency_buffer_used=config.contingency_buffer,
            rush_fee_multiplier_used=config.rush_fee_multiplier,
            effective_rate=result.effective_rate,
            notes=notes,
        )

    def quote_form(self, form: CalculatorForm) -> CalculatorQuotePayload:
        config = form.to_config(specialized_base=self._config.specialized_base)
        scope = form.to_scope()
        result = self.calculate(scope, config)
        return self.build_quote_payload(scope, result, config=config, notes=form.notes)


class QuickEstimator:
    """Public estimate: a few checkboxes in, an hour and price band out."""

    def __init__(
        self,
        *,
        config: PricingConfig = DEFAULT_ESTIMATE_CONFIG,
        assumptions: EstimateAssumptions = DEFAULT_ESTIMATE_ASSUMPTIONS,
    ) -> None:
        self._config = config
        self._assumptions = assumptions

    def to_scope(self, inputs: CustomerEstimateInputs) -> ProjectScopeInput:
        assumptions = self._assumptions
        num_features = parse_int_strict(inputs.num_features)
        doc_count = 0
        if inputs.docs_requested:
            doc_count = assumptions.docs_base_count + math.ceil(num_features * assumptions.docs_per_feature_rate)

        needs = {
            SpecializedCategory.accessibility: inputs.needs_accessibility,
            SpecializedCategory.performance: inputs.needs_performance,
            SpecializedCategory.compliance: inputs.needs_compliance,
        }
        return ProjectScopeInput(
            project_name=inputs.project_name,
            num_features=num_features,
            complexity=assumptions.complexity,
            browser_count=assumptions.browsers_with_e2e if inputs.is_e2e else assumptions.browsers_default,
            e2e_coverage=assumptions.e2e_coverage if inputs.is_e2e else 0.0,
            cross_browser_coverage=0.0,
            unit_coverage=assumptions.unit_coverage if inputs.is_unit_integration else 0.0,
            test_case_coverage=assumptions.test_case_coverage if inputs.needs_docs_test_case_management else 0.0,
            how_to_doc_count=doc_count,
            scenario_doc_count=doc_count,
            specialized_tiers={
                category: frozenset({SpecializedTier.tier_1}) if needed else frozenset()
                for category, needed in needs.items()
            },
            support_tiers=frozenset(),
            is_rush=inputs.is_rush,
        )

    def estimate(self, inputs: CustomerEstimateInputs) -> QuickEstimateResult:
        scope = self.to_scope(inputs)
        estimate = compute_hours(scope, self._config)
        band = price_estimate_range(estimate.hours, scope.is_rush, self._config)
        return QuickEstimateResult(
            hours=estimate.hours,
            specialized=estimate.specialized,
            estimate=band,
            assumptions=self._assumptions_used(estimate.hours, scope.is_rush),
        )

    def build_submission(
        self,
        inputs: CustomerEstimateInputs,
        *,
        user_name: str,
        user_email: str,
    ) -> EstimateSubmission:
        # Recomputed here so the mail always matches the submitted inputs.
        result = self.estimate(inputs)
        return EstimateSubmission(
            user_name=user_name,
            user_email=user_email,
            customer_inputs=inputs,
            estimate=result.estimate,
            assumptions=result.assumptions,
        )

    def _assumptions_used(self, hours: HoursBreakdown, is_rush: bool) -> EstimateAssumptionsUsed:
        divisor = hours.total_base_hours or 1
        return EstimateAssumptionsUsed(
            base_hourly_rate_used=self._config.base_hourly_rate,
            contingency_buffer_used=self._config.contingency_buffer,
            complexity_factor_used=self._assumptions.complexity,
            documentation_factor_used=hours.documentation_hours / divisor,
            specialized_factor_used=hours.specialized_hours / divisor,
            rush_factor_used=self._config.rush_fee_multiplier if is_rush else 0.0,
        )


__all__ = ["DetailedCalculator", "QuickEstimator", "initial_calculator_form"]
