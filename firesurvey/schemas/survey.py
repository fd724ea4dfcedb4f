"""
Fire Survey Backend: Survey & Alert Schemas
===========================================

What:  Pydantic models defining the request/response contract of
       POST /submitSurvey and GET|POST /fire-alert.
How:   FastAPI validates request bodies against these models; type mismatches
       surface as RequestValidationError (mapped to 400 in main.py).

Strict types:
    `score` must be a JSON integer: "80", 80.5 and true are rejected instead of
    being coerced, and values outside the signed 64-bit range are rejected.
    Empty strings ARE accepted here; the presence check for
    email/address lives in SurveyService so it applies to every caller.
"""

from pydantic import BaseModel, Field, StrictInt, StrictStr

# SQLite INTEGER is a signed 64-bit value
SCORE_MIN = -(2**63)
SCORE_MAX = 2**63 - 1


class SurveySubmission(BaseModel):
    """Body of POST /submitSurvey."""
    email: StrictStr = Field(description="Respondent email; unique across all records")
    address: StrictStr = Field(description="Free-text address reported by the respondent")
    score: StrictInt = Field(
        ge=SCORE_MIN,
        le=SCORE_MAX,
        description="Survey score as supplied by the client (any 64-bit value)",
    )


class SurveyRecord(BaseModel):
    """A stored survey, including the derived level."""
    id: int
    email: str
    address: str
    score: int
    level: str = Field(description="high / medium / low security level")

    model_config = {"from_attributes": True}


class AlertResponse(BaseModel):
    """
    Returned by /fire-alert: the address of the most recent submission.

    Example:
        {"address": "1 Main St"}
    """
    address: str
