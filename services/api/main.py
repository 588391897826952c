from __future__ import annotations

import logging
import os
import uuid

from fastapi import Cookie, Depends, FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, EmailStr, Field

from qa_pricing.auth import (
    AUTH_COOKIE_NAME,
    TOKEN_TTL,
    AuthConfigurationError,
    AuthSettings,
    issue_token,
    verify_credentials,
    verify_token,
)
from qa_pricing.calculator import DetailedCalculator, QuickEstimator
from qa_pricing.dictionaries import CALCULATOR_INITIAL_STATE
from qa_pricing.formatting import build_contact_summary, build_estimate_summary, build_quote_summary
from qa_pricing.logging_config import set_trace_id, setup_logging
from qa_pricing.models.forms import CalculatorForm
from qa_pricing.models.quote import ContactMessage
from qa_pricing.models.result import CalculationResult, QuickEstimateResult
from qa_pricing.models.scope import CustomerEstimateInputs
from qa_pricing.pubsub_client import PubSubClient


class LoginRequest(BaseModel):
    username: str
    password: str


class EstimateSubmitRequest(BaseModel):
    user_name: str = Field(min_length=1, max_length=500)
    user_email: EmailStr
    customer_inputs: CustomerEstimateInputs


class SubmissionResponse(BaseModel):
    status: str
    message_id: str | None = None


# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
PROJECT_ID = os.getenv("PROJECT_ID")
PUBSUB_TOPIC_ESTIMATES = os.getenv("PUBSUB_TOPIC_ESTIMATES", "estimate-submitted")
PUBSUB_TOPIC_QUOTES = os.getenv("PUBSUB_TOPIC_QUOTES", "calculator-quote-submitted")
PUBSUB_TOPIC_CONTACT = os.getenv("PUBSUB_TOPIC_CONTACT", "contact-message-submitted")

# Setup logging
setup_logging(environment=ENVIRONMENT, project_id=PROJECT_ID)
logger = logging.getLogger(__name__)

app = FastAPI(title="QA Pricing API", version="0.1.0")

# Secret Manager holds credentials outside dev
if ENVIRONMENT == "dev" or not PROJECT_ID:
    auth_settings = AuthSettings.from_env()
else:
    auth_settings = AuthSettings.from_secret_manager(PROJECT_ID)

# Without a project the mailer hand-off is only logged
pubsub_client = (
    PubSubClient(
        project_id=PROJECT_ID,
        estimate_topic=PUBSUB_TOPIC_ESTIMATES,
        quote_topic=PUBSUB_TOPIC_QUOTES,
        contact_topic=PUBSUB_TOPIC_CONTACT,
    )
    if PROJECT_ID
    else None
)

detailed_calculator = DetailedCalculator()
quick_estimator = QuickEstimator()


@app.middleware("http")
async def assign_trace_id(request: Request, call_next):
    set_trace_id(request.headers.get("X-Cloud-Trace-Context") or str(uuid.uuid4()))
    return await call_next(request)


@app.exception_handler(AuthConfigurationError)
async def auth_configuration_error(request: Request, exc: AuthConfigurationError) -> JSONResponse:
    logger.error("Auth is not configured", extra={"error": str(exc), "path": request.url.path})
    return JSONResponse({"success": False, "message": "Server configuration error."}, status_code=500)


def require_internal_user(auth_token: str | None = Cookie(default=None)) -> None:
    if not verify_token(auth_settings, auth_token):
        raise HTTPException(status_code=401, detail="Not authenticated")


@app.post("/v1/estimates:quick", response_model=QuickEstimateResult)
async def quick_estimate(inputs: CustomerEstimateInputs) -> QuickEstimateResult:
    return quick_estimator.estimate(inputs)


@app.post("/v1/estimates:submit", response_model=SubmissionResponse, status_code=202)
async def submit_estimate(request: EstimateSubmitRequest) -> SubmissionResponse:
    submission = quick_estimator.build_submission(
        request.customer_inputs,
        user_name=request.user_name,
        user_email=request.user_email,
    )
    if pubsub_client is None:
        logger.info(
            "Estimate submitted (no publisher configured)",
            extra={"summary": build_estimate_summary(submission)},
        )
        return SubmissionResponse(status="logged")
    try:
        message_id = pubsub_client.publish_estimate_submitted(submission)
    except Exception as exc:
        logger.error("Failed to hand off estimate", exc_info=True, extra={"error": str(exc)})
        raise HTTPException(status_code=502, detail="Could not send estimate")
    return SubmissionResponse(status="accepted", message_id=message_id)


@app.post("/v1/contact:submit", response_model=SubmissionResponse, status_code=202)
async def submit_contact(contact: ContactMessage) -> SubmissionResponse:
    if pubsub_client is None:
        logger.info(
            "Contact message submitted (no publisher configured)",
            extra={"summary": build_contact_summary(contact)},
        )
        return SubmissionResponse(status="logged")
    try:
        message_id = pubsub_client.publish_contact_message(contact)
    except Exception as exc:
        logger.error("Failed to hand off contact message", exc_info=True, extra={"error": str(exc)})
        raise HTTPException(status_code=502, detail="Could not send message")
    return SubmissionResponse(status="accepted", message_id=message_id)


@app.post("/v1/auth/login")
async def login(credentials: LoginRequest, response: Response) -> dict[str, bool]:
    if not verify_credentials(auth_settings, credentials.username, credentials.password):
        logger.info("Invalid credentials attempted", extra={"username": credentials.username})
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = issue_token(auth_settings, credentials.username)
    response.set_cookie(
        AUTH_COOKIE_NAME,
        token,
        max_age=int(TOKEN_TTL.total_seconds()),
        path="/",
        httponly=True,
        secure=ENVIRONMENT != "dev",
        samesite="lax",
    )
    logger.info("Login successful", extra={"username": credentials.username})
    return {"success": True}


@app.get("/v1/auth/check")
async def check_auth(auth_token: str | None = Cookie(default=None)) -> dict[str, bool]:
    return {"isAuthenticated": verify_token(auth_settings, auth_token)}


@app.post("/v1/auth/logout")
async def logout(response: Response) -> dict[str, bool]:
    response.delete_cookie(AUTH_COOKIE_NAME, path="/", httponly=True, secure=ENVIRONMENT != "dev", samesite="lax")
    return {"success": True}


@app.get("/v1/calculator/defaults", dependencies=[Depends(require_internal_user)])
async def calculator_defaults() -> dict[str, str | bool]:
    return dict(CALCULATOR_INITIAL_STATE)


@app.post(
    "/v1/calculator:calculate",
    response_model=CalculationResult,
    dependencies=[Depends(require_internal_user)],
)
async def calculate(form: CalculatorForm) -> CalculationResult:
    return detailed_calculator.calculate_form(form)


@app.post(
    "/v1/calculator:quote",
    response_model=SubmissionResponse,
    status_code=202,
    dependencies=[Depends(require_internal_user)],
)
async def submit_quote(form: CalculatorForm) -> SubmissionResponse:
    payload = detailed_calculator.quote_form(form)
    if not payload.result.is_complete:
        raise HTTPException(status_code=422, detail="Calculation incomplete: final price must be positive")

    if pubsub_client is None:
        logger.info(
            "Calculator quote submitted (no publisher configured)",
            extra={"summary": build_quote_summary(payload)},
        )
        return SubmissionResponse(status="logged")
    try:
        message_id = pubsub_client.publish_calculator_quote(payload)
    except Exception as exc:
        logger.error("Failed to hand off calculator quote", exc_info=True, extra={"error": str(exc)})
        raise HTTPException(status_code=502, detail="Could not send quote")
    return SubmissionResponse(status="accepted", message_id=message_id)


@app.get("/health")
async def healthcheck() -> JSONResponse:
    return JSONResponse({"status": "ok"})
