from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator

from .result import CalculationResult, EstimateAssumptionsUsed, EstimateRange
from .scope import CustomerEstimateInputs, ProjectScopeInput

MAX_SENDER_EMAIL_LENGTH = 500
MAX_CONTACT_MESSAGE_LENGTH = 5000


class CalculatorQuotePayload(BaseModel):
    """Everything the owner mail needs about one internal quote.

    Numbers and booleans only; currency and percent display belong to the
    consumer.
    """

    project_name: str | None = None
    scope: ProjectScopeInput
    result: CalculationResult
    base_hourly_rate: float
    contingency_buffer_used: float
    rush_fee_multiplier_used: float
    effective_rate: float
    notes: str | None = None


class ContactMessage(BaseModel):
    """Free-form message from the public contact form."""

    sender_email: EmailStr
    message: str = Field(min_length=1, max_length=MAX_CONTACT_MESSAGE_LENGTH)

    @field_validator("sender_email", mode="before")
    @classmethod
    def _limit_sender_email(cls, value: object) -> object:
        if isinstance(value, str) and len(value) > MAX_SENDER_EMAIL_LENGTH:
            raise ValueError(f"sender_email must be at most {MAX_SENDER_EMAIL_LENGTH} characters")
        return value


class EstimateSubmission(BaseModel):
    user_name: str = Field(min_length=1, max_length=500)
    user_email: EmailStr
    customer_inputs: CustomerEstimateInputs
    estimate: EstimateRange
    assumptions: EstimateAssumptionsUsed

    class Config:
        json_schema_extra = {
            "example": {
                "user_name": "Jordan Lee",
                "user_email": "jordan@example.com",
                "customer_inputs": {
                    "project_name": "Checkout flow",
                    "num_features": "5",
                    "is_e2e": True,
                    "needs_accessibility": True,
                },
                "estimate": {
                    "hours_min": 31.05,
                    "hours_max": 46.575,
                    "price_min": 10000.0,
                    "price_max": 10000.0,
                },
                "assumptions": {
                    "base_hourly_rate_used": 125.0,
                    "contingency_buffer_used": 0.15,
                    "complexity_factor_used": 1.5,
                },
            }
        }


__all__ = ["CalculatorQuotePayload", "ContactMessage", "EstimateSubmission"]
