"""Display helpers for the notification consumer.

The engine hands out plain numbers; this is the only place they turn into
currency, hour and percent strings.
"""

from __future__ import annotations

import math
from typing import AbstractSet

from .models.quote import CalculatorQuotePayload, ContactMessage, EstimateSubmission
from .models.scope import SpecializedCategory, SpecializedTier, SupportTier

_SUPPORT_LABELS = {
    SupportTier.tier_3: "Tier 3 (Strategic)",
    SupportTier.tier_2: "Tier 2 (Growth)",
    SupportTier.tier_1: "Tier 1 (Essential)",
}


def _is_number(value: float | None) -> bool:
    return value is not None and math.isfinite(value)


def format_currency(amount: float | None) -> str:
    if not _is_number(amount):
        return "$ -"
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_hours(hours: float | None) -> str:
    if not _is_number(hours):
        return "- hrs"
    return "0 hrs" if hours == 0 else f"{hours:.1f} hrs"


def format_percent(value: float | None) -> str:
    if not _is_number(value):
        return "- %"
    return f"{value * 100:.0f}%"


def format_boolean(value: bool | None) -> str:
    return "Yes" if value else "No"


def tier_label(active: AbstractSet[SpecializedTier]) -> str:
    """Highest active tier, for display only; the price sums every tier."""
    if SpecializedTier.tier_2 in active:
        return "Tier 2"
    if SpecializedTier.tier_1 in active:
        return "Tier 1"
    return "No"


def support_tier_label(active: AbstractSet[SupportTier]) -> str:
    for tier, label in _SUPPORT_LABELS.items():
        if tier in active:
            return label
    return "None Selected"


def build_quote_summary(payload: CalculatorQuotePayload) -> str:
    result = payload.result
    hours = result.hours
    scope = payload.scope
    lines = [
        "## Internal Quote",
        f"- Project: {payload.project_name or 'Unnamed project'}",
        f"- Final price: {format_currency(result.pricing.final_price)}",
        f"- Final hours: {format_hours(hours.final_hours)}",
        f"- Estimated duration: {result.duration.estimated_weeks:.1f} weeks"
        f" / {result.duration.estimated_months:.1f} months",
        f"- Effective hourly rate: {format_currency(payload.effective_rate)}",
        "",
        "## Cost Breakdown",
        f"- Base price (excl. rush): {format_currency(result.pricing.base_price)}",
        f"- Accessibility ({tier_label(scope.active_tiers(SpecializedCategory.accessibility))}): "
        f"{format_currency(result.specialized.accessibility_price)}",
        f"- Performance ({tier_label(scope.active_tiers(SpecializedCategory.performance))}): "
        f"{format_currency(result.specialized.performance_price)}",
        f"- Compliance prep ({tier_label(scope.active_tiers(SpecializedCategory.compliance))}): "
        f"{format_currency(result.specialized.compliance_price)}",
        f"- Support ({support_tier_label(scope.support_tiers)}): "
        f"{format_currency(result.support.selected_price)}",
        f"- Rush adjustment: {format_currency(result.pricing.rush_adjustment)}",
        "",
        "## Hours",
        f"- E2E: {format_hours(hours.e2e_hours)}",
        f"- Cross-browser: {format_hours(hours.cross_browser_hours)}",
        f"- Unit/integration: {format_hours(hours.unit_hours)}",
        f"- Test cases: {format_hours(hours.test_case_hours)}",
        f"- How-to docs: {format_hours(hours.how_to_hours)}",
        f"- Scenario docs: {format_hours(hours.scenario_hours)}",
        f"- Total base: {format_hours(hours.total_base_hours)}",
        f"- Contingency ({format_percent(payload.contingency_buffer_used)}): "
        f"{format_hours(hours.contingency_hours)}",
        f"- Support: {format_hours(hours.support_package_hours)}",
        "",
        "## Settings",
        f"- Base hourly rate: {format_currency(payload.base_hourly_rate)}",
        f"- Rush: {format_boolean(scope.is_rush)} ({format_percent(payload.rush_fee_multiplier_used)})",
    ]
    if payload.notes:
        lines.extend(["", "## Notes", payload.notes])
    return "\n".join(lines)


def build_estimate_summary(submission: EstimateSubmission) -> str:
    inputs = submission.customer_inputs
    estimate = submission.estimate
    needs = [
        ("E2E testing", inputs.is_e2e),
        ("Unit/integration testing", inputs.is_unit_integration),
        ("Test case management docs", inputs.needs_docs_test_case_management),
        ("How-to docs", inputs.needs_docs_how_to),
        ("Accessibility", inputs.needs_accessibility),
        ("Performance", inputs.needs_performance),
        ("Compliance prep", inputs.needs_compliance),
        ("Rush", inputs.is_rush),
    ]
    lines = [
        "## Estimate Request",
        f"- From: {submission.user_name} <{submission.user_email}>",
        f"- Project: {inputs.project_name or 'Not provided'}",
        f"- Features: {inputs.num_features}",
        f"- Hours: {format_hours(estimate.hours_min)} – {format_hours(estimate.hours_max)}",
        f"- Price: {format_currency(estimate.price_min)} – {format_currency(estimate.price_max)}",
        "",
        "## Selections",
        *(f"- {label}: {format_boolean(flag)}" for label, flag in needs),
        "",
        "## Assumptions",
        f"- Base hourly rate: {format_currency(submission.assumptions.base_hourly_rate_used)}",
        f"- Contingency: {format_percent(submission.assumptions.contingency_buffer_used)}",
        f"- Complexity factor: {submission.assumptions.complexity_factor_used}",
    ]
    if inputs.notes:
        lines.extend(["", "## Notes", inputs.notes])
    return "\n".join(lines)


def build_contact_summary(contact: ContactMessage) -> str:
    return "\n".join(
        [
            "## Contact Message",
            f"- From: {contact.sender_email}",
            "",
            contact.message,
        ]
    )


__all__ = [
    "format_currency",
    "format_hours",
    "format_percent",
    "format_boolean",
    "tier_label",
    "support_tier_label",
    "build_quote_summary",
    "build_estimate_summary",
    "build_contact_summary",
]
