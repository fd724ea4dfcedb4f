"""
Fire Survey Backend: Survey Route Handler
=========================================

What:  Handles POST /submitSurvey (store one survey) and its OPTIONS preflight.
How:   FastAPI parses the JSON body into SurveySubmission; SurveyService does
       the presence check, classification and insert.
Who:   Called by the survey web form.

Request Flow:
    1. Body parsed/validated (bad JSON or wrong types → 400 via main.py handler)
    2. SurveyService.submit_survey(): presence check → level → INSERT
    3. 200 text/plain on success; 400 / 409 / 500 through the global handlers
"""

import logging

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from firesurvey.database import get_db_session
from firesurvey.schemas.common import ErrorResponse
from firesurvey.schemas.survey import SurveySubmission
from firesurvey.services.survey_service import survey_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Survey"])

SUCCESS_MESSAGE = "Survey data saved successfully"


@router.post(
    "/submitSurvey",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Survey stored", "content": {"text/plain": {}}},
        400: {"description": "Invalid JSON or missing email/address", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Submit a fire-safety survey",
    description=(
        "Stores the respondent's email, address and score. The security level is "
        "derived from the score (>75 high, >50 medium, otherwise low). Each email "
        "can be submitted once."
    ),
)
async def submit_survey(
    submission: SurveySubmission,
    db: AsyncSession = Depends(get_db_session),
) -> PlainTextResponse:
    await survey_service.submit_survey(db=db, submission=submission)
    return PlainTextResponse(SUCCESS_MESSAGE)


@router.options("/submitSurvey", include_in_schema=False)
async def submit_survey_options() -> Response:
    """Bare OPTIONS (no CORS preflight headers) succeeds with an empty body."""
    return Response(status_code=200)
