import math
from pathlib import Path

import pytest

from qa_pricing.calculator import DetailedCalculator, initial_calculator_form
from qa_pricing.dictionaries import DEFAULT_CALCULATOR_CONFIG
from qa_pricing.models.config import SpecializedBase
from qa_pricing.models.forms import CalculatorForm
from qa_pricing.models.scope import ProjectScopeInput, SpecializedCategory, SpecializedTier, SupportTier

FIXTURES = Path(__file__).resolve().parents[1] / "data" / "scenarios"


def load_fixture(name: str) -> CalculatorForm:
    fixture_path = FIXTURES / f"{name}.json"
    return CalculatorForm.model_validate_json(fixture_path.read_text(encoding="utf-8"))


def test_reference_scenario_end_to_end():
    form = load_fixture("duration_reference")
    result = DetailedCalculator().calculate_form(form)

    assert result.hours.e2e_hours == pytest.approx(33.75)
    assert result.hours.unit_hours == pytest.approx(13.5)
    assert result.hours.how_to_hours == pytest.approx(10.0)
    assert result.hours.accessibility_hours == pytest.approx(37.125)
    assert result.hours.performance_hours == pytest.approx(40.5)
    assert result.hours.total_base_hours == pytest.approx(134.875)
    assert result.hours.contingency_hours == pytest.approx(26.975)
    assert result.hours.support_package_hours == 10
    assert result.hours.final_hours == pytest.approx(171.85)

    assert result.support.selected_price == pytest.approx(1500.0)
    assert result.pricing.base_price == pytest.approx(171.85 * 125)
    assert result.pricing.rush_adjustment == 0
    assert result.pricing.final_price == pytest.approx(171.85 * 125 + 1500.0)

    assert result.duration.hours_per_week == 20
    assert result.duration.estimated_weeks == pytest.approx(8.5925)
    assert result.duration.estimated_months == 2.2
    assert result.duration.estimated_years == 0.2


def test_rush_changes_prices_but_not_hours():
    form = load_fixture("duration_reference")
    calculator = DetailedCalculator()

    normal = calculator.calculate_form(form)
    rush = calculator.calculate_form(form.model_copy(update={"is_rush": True}))

    assert rush.hours == normal.hours
    assert rush.specialized == normal.specialized
    assert rush.support == normal.support
    assert rush.pricing.rush_adjustment == pytest.approx(normal.pricing.base_price * 0.2)
    assert rush.pricing.final_price > normal.pricing.final_price
    # rush throughput comes from the rush field (35 hours/week)
    assert rush.duration.hours_per_week == 35


def test_final_price_identity():
    scope = ProjectScopeInput(
        num_features=25,
        complexity=2.0,
        browser_count=3,
        e2e_coverage=0.6,
        cross_browser_coverage=0.4,
        unit_coverage=0.8,
        test_case_coverage=0.5,
        how_to_doc_count=4,
        scenario_doc_count=8,
        specialized_tiers={SpecializedCategory.compliance: frozenset(SpecializedTier)},
        support_tiers=frozenset({SupportTier.tier_1, SupportTier.tier_3}),
        is_rush=True,
    )

    result = DetailedCalculator().calculate(scope)

    assert result.pricing.final_price == (
        result.pricing.base_price + result.pricing.rush_adjustment + result.support.selected_price
    )
    assert result.hours.final_hours == (
        result.hours.total_base_hours + result.hours.contingency_hours + result.hours.support_package_hours
    )
    assert result.pricing.base_price >= DEFAULT_CALCULATOR_CONFIG.minimum_price


def test_empty_scope_is_zero_hours_at_minimum_price():
    result = DetailedCalculator().calculate(ProjectScopeInput())

    assert all(value == 0 for value in result.hours.model_dump().values())
    assert result.pricing.base_price == DEFAULT_CALCULATOR_CONFIG.minimum_price
    assert result.duration.estimated_weeks == 0
    assert result.effective_rate == 0


def test_initial_form_matches_default_config():
    form = initial_calculator_form()

    assert form.to_config() == DEFAULT_CALCULATOR_CONFIG
    scope = form.to_scope()
    assert scope.num_features == 10
    assert scope.complexity == 1.5
    assert scope.e2e_coverage == pytest.approx(0.75)
    assert scope.cross_browser_coverage == 0
    assert scope.support_tiers == frozenset()
    assert scope.project_name is None


def test_form_coerces_junk_to_zero():
    form = CalculatorForm(
        base_hourly_rate="$1,000.00",
        num_features="ten",
        complexity="abc",
        e2e_coverage="75%",
        e2e_hours_base="3",
        how_to_docs_count="2.7",
        how_to_hours_per_doc="2",
    )

    config = form.to_config()
    scope = form.to_scope()

    assert config.base_hourly_rate == 1000.0
    assert config.minimum_price == 0
    assert scope.num_features == 0
    assert scope.complexity == 0
    assert scope.e2e_coverage == pytest.approx(0.75)
    assert scope.how_to_doc_count == 2

    result = DetailedCalculator().calculate(scope, config)
    assert result.hours.e2e_hours == 0
    assert result.hours.how_to_hours == 4
    assert result.pricing.final_price == pytest.approx(4 * 1000.0)


def test_form_flags_map_to_tier_sets():
    form = CalculatorForm(
        is_accessibility_t2=True,
        is_performance_t1=True,
        is_performance_t2=True,
        is_support_t2=True,
        is_support_t3=True,
    )

    scope = form.to_scope()

    assert scope.active_tiers(SpecializedCategory.accessibility) == {SpecializedTier.tier_2}
    assert scope.active_tiers(SpecializedCategory.performance) == set(SpecializedTier)
    assert scope.active_tiers(SpecializedCategory.compliance) == set()
    assert scope.support_tiers == {SupportTier.tier_2, SupportTier.tier_3}


def test_calculator_honours_configured_specialized_base():
    form = load_fixture("duration_reference").model_copy(update={"e2e_coverage": "0"})

    by_e2e = DetailedCalculator().calculate_form(form)
    by_product = DetailedCalculator().calculate_form(
        form, specialized_base=SpecializedBase.features_complexity_browsers
    )

    assert by_e2e.hours.accessibility_hours == 0
    # 10 features * 1.5 complexity * 2 browsers * 1.1
    assert by_product.hours.accessibility_hours == pytest.approx(33.0)


def test_quote_payload_carries_plain_numbers():
    form = load_fixture("duration_reference")

    payload = DetailedCalculator().quote_form(form)

    assert payload.project_name == "Checkout revamp"
    assert payload.base_hourly_rate == 125.0
    assert payload.contingency_buffer_used == 0.2
    assert payload.rush_fee_multiplier_used == 0.2
    assert payload.effective_rate == pytest.approx(payload.result.pricing.final_price / 171.85)
    assert payload.notes.startswith("Quarterly")

    dumped = payload.model_dump(mode="json")
    assert isinstance(dumped["result"]["pricing"]["final_price"], float)
    assert dumped["scope"]["is_rush"] is False


def test_oversized_feature_count_coerces_to_zero():
    form = initial_calculator_form().model_copy(update={"num_features": "9" * 400})

    result = DetailedCalculator().calculate_form(form)

    assert result.hours.e2e_hours == 0
    assert result.pricing.base_price == DEFAULT_CALCULATOR_CONFIG.minimum_price


def test_overflowing_hours_stay_infinite_instead_of_raising():
    form = initial_calculator_form().model_copy(update={"complexity": "1e300", "e2e_hours_base": "1e300"})

    result = DetailedCalculator().calculate_form(form)

    assert math.isinf(result.hours.e2e_hours)
    assert math.isinf(result.hours.final_hours)
    assert math.isinf(result.pricing.final_price)
    assert math.isinf(result.duration.estimated_months)
