import pytest

from qa_pricing.calculator import QuickEstimator
from qa_pricing.dictionaries import DEFAULT_ESTIMATE_CONFIG
from qa_pricing.models.scope import CustomerEstimateInputs, SpecializedCategory, SpecializedTier


def make_inputs(**overrides) -> CustomerEstimateInputs:
    values = dict(project_name="Checkout flow", num_features="10", is_e2e=True)
    values.update(overrides)
    return CustomerEstimateInputs(**values)


def test_checkboxes_map_to_fixed_assumptions():
    scope = QuickEstimator().to_scope(make_inputs(is_unit_integration=True))

    assert scope.num_features == 10
    assert scope.complexity == 1.5
    assert scope.browser_count == 2
    assert scope.e2e_coverage == 0.75
    assert scope.cross_browser_coverage == 0
    assert scope.unit_coverage == 0.8
    assert scope.test_case_coverage == 0
    assert scope.how_to_doc_count == 0
    assert scope.scenario_doc_count == 0
    assert scope.support_tiers == frozenset()


def test_browser_default_without_e2e():
    scope = QuickEstimator().to_scope(make_inputs(is_e2e=False))

    assert scope.browser_count == 1
    assert scope.e2e_coverage == 0


@pytest.mark.parametrize("flag", ["needs_docs_how_to", "needs_docs_test_case_management"])
def test_either_docs_box_sets_both_doc_counts(flag):
    scope = QuickEstimator().to_scope(make_inputs(**{flag: True}))

    # 2 + ceil(10 * 0.15)
    assert scope.how_to_doc_count == 4
    assert scope.scenario_doc_count == 4


def test_test_case_coverage_follows_docs_box():
    scope = QuickEstimator().to_scope(make_inputs(needs_docs_test_case_management=True))

    assert scope.test_case_coverage == 0.8


def test_specialized_needs_only_activate_tier_one():
    scope = QuickEstimator().to_scope(
        make_inputs(needs_accessibility=True, needs_performance=True, needs_compliance=True)
    )

    for category in SpecializedCategory:
        assert scope.active_tiers(category) == {SpecializedTier.tier_1}


def test_estimate_band_for_typical_request():
    result = QuickEstimator().estimate(make_inputs(needs_docs_how_to=True, needs_accessibility=True))
    hours = result.hours

    assert hours.e2e_hours == pytest.approx(33.75)
    assert hours.how_to_hours == pytest.approx(8.0)
    assert hours.scenario_hours == pytest.approx(6.0)
    assert hours.accessibility_hours == pytest.approx(33.75)
    assert hours.total_base_hours == pytest.approx(81.5)
    assert hours.contingency_hours == pytest.approx(12.225)
    assert hours.support_package_hours == 0
    assert hours.final_hours == pytest.approx(93.725)

    band = result.estimate
    assert band.center_price == pytest.approx(11715.625)
    # 0.8 * centre is under the minimum, so the lower bound is floored
    assert band.price_min == DEFAULT_ESTIMATE_CONFIG.minimum_price
    assert band.price_max == pytest.approx(11715.625 * 1.2)
    assert band.hours_min == pytest.approx(93.725 * 0.8)
    assert band.hours_max == pytest.approx(93.725 * 1.2)
    assert band.price_min <= band.price_max


def test_assumptions_report_factors_against_base_hours():
    result = QuickEstimator().estimate(
        make_inputs(needs_docs_how_to=True, needs_accessibility=True, is_rush=True)
    )
    assumptions = result.assumptions

    assert assumptions.base_hourly_rate_used == 125.0
    assert assumptions.contingency_buffer_used == 0.15
    assert assumptions.complexity_factor_used == 1.5
    assert assumptions.documentation_factor_used == pytest.approx(14.0 / 81.5)
    assert assumptions.specialized_factor_used == pytest.approx(33.75 / 81.5)
    assert assumptions.rush_factor_used == 0.2


def test_rush_raises_centre_by_multiplier():
    estimator = QuickEstimator()
    normal = estimator.estimate(make_inputs(num_features="40"))
    rush = estimator.estimate(make_inputs(num_features="40", is_rush=True))

    assert rush.hours == normal.hours
    assert rush.estimate.rush_adjustment == pytest.approx(normal.estimate.center_price * 0.2)
    assert rush.estimate.price_max == pytest.approx(normal.estimate.price_max * 1.2)


@pytest.mark.parametrize("num_features", ["0", "", "lots"])
def test_no_features_and_no_docs_quotes_nothing(num_features):
    result = QuickEstimator().estimate(make_inputs(num_features=num_features, needs_accessibility=True))

    assert result.hours.final_hours == 0
    assert result.estimate.price_min == 0
    assert result.estimate.price_max == 0
    assert result.estimate.hours_min == 0
    assert result.estimate.hours_max == 0
    assert result.assumptions.documentation_factor_used == 0
    assert result.assumptions.specialized_factor_used == 0


def test_build_submission_recomputes_estimate():
    inputs = make_inputs(needs_performance=True, notes="Launch in spring")
    estimator = QuickEstimator()

    submission = estimator.build_submission(inputs, user_name="Jordan Lee", user_email="jordan@example.com")

    assert submission.user_email == "jordan@example.com"
    assert submission.customer_inputs == inputs
    assert submission.estimate == estimator.estimate(inputs).estimate
    assert submission.assumptions.rush_factor_used == 0
