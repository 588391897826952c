from __future__ import annotations

from enum import Enum
from typing import AbstractSet, Mapping

from pydantic import BaseModel, Field


class SpecializedCategory(str, Enum):
    accessibility = "ACCESSIBILITY"
    performance = "PERFORMANCE"
    compliance = "COMPLIANCE"


class SpecializedTier(str, Enum):
    tier_1 = "TIER_1"
    tier_2 = "TIER_2"


class SupportTier(str, Enum):
    tier_1 = "TIER_1"
    tier_2 = "TIER_2"
    tier_3 = "TIER_3"


class ProjectScopeInput(BaseModel):
    """Numeric scope of one calculation, already coerced from form text."""

    project_name: str | None = None
    num_features: int = 0
    complexity: float = 1.0
    browser_count: int = 1
    e2e_coverage: float = Field(default=0.0, description="Fraction of features covered by E2E tests")
    cross_browser_coverage: float = 0.0
    unit_coverage: float = 0.0
    test_case_coverage: float = 0.0
    how_to_doc_count: int = 0
    scenario_doc_count: int = 0
    specialized_tiers: Mapping[SpecializedCategory, frozenset[SpecializedTier]] = Field(default_factory=dict)
    support_tiers: frozenset[SupportTier] = Field(default_factory=frozenset)
    is_rush: bool = False

    def active_tiers(self, category: SpecializedCategory) -> AbstractSet[SpecializedTier]:
        return self.specialized_tiers.get(category, frozenset())


class CustomerEstimateInputs(BaseModel):
    """Checkbox-level choices made on the public estimate page."""

    project_name: str | None = None
    num_features: str | int = ""
    is_e2e: bool = False
    is_unit_integration: bool = False
    needs_docs_test_case_management: bool = False
    needs_docs_how_to: bool = False
    needs_accessibility: bool = False
    needs_performance: bool = False
    needs_compliance: bool = False
    is_rush: bool = False
    notes: str | None = None

    @property
    def docs_requested(self) -> bool:
        return self.needs_docs_how_to or self.needs_docs_test_case_management


__all__ = [
    "SpecializedCategory",
    "SpecializedTier",
    "SupportTier",
    "ProjectScopeInput",
    "CustomerEstimateInputs",
]
