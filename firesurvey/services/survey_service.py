"""
Fire Survey Backend: Survey Service
===================================

What:  Validates a submission, derives its security level, and inserts it.
Who:   Called by POST /submitSurvey.

Insert Flow:
    ┌────────────┐    ┌──────────────┐    ┌──────────────────────────┐
    │ Presence   │───▶│ classify     │───▶│ INSERT + COMMIT          │
    │ check      │    │ score → level│    │ UNIQUE(email) → 409      │
    └────────────┘    └──────────────┘    └──────────────────────────┘

    There is no "SELECT ... WHERE email = ?" beforehand: the UNIQUE
    constraint decides, inside the insert's own transaction, so two
    concurrent submissions for one email cannot both be stored.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from firesurvey.exceptions import DatabaseError, DuplicateEmailError, ValidationError
from firesurvey.models.survey import SurveyResult
from firesurvey.schemas.survey import SurveyRecord, SurveySubmission

logger = logging.getLogger(__name__)

HIGH_SECURITY_LEVEL = "high security level"
MEDIUM_SECURITY_LEVEL = "medium security level"
LOW_SECURITY_LEVEL = "low security level"


def classify_score(score: int) -> str:
    """
    Map a survey score onto one of the three security levels.

        score > 75        → high
        50 < score <= 75  → medium
        score <= 50       → low (includes negative scores)
    """
    if score > 75:
        return HIGH_SECURITY_LEVEL
    if score > 50:
        return MEDIUM_SECURITY_LEVEL
    return LOW_SECURITY_LEVEL


class SurveyService:
    """
    Business logic for survey submissions.

    Stateless: the session comes from the request, so each call runs in the
    request's own transaction.
    """

    async def submit_survey(
        self,
        db: AsyncSession,
        submission: SurveySubmission,
    ) -> SurveyRecord:
        """
        Store a survey submission.

        Args:
            db: Async database session (injected by FastAPI)
            submission: Parsed request body

        Returns:
            SurveyRecord with the generated id and derived level

        Raises:
            ValidationError: email or address is empty (→ 400)
            DuplicateEmailError: email already stored (→ 409)
            DatabaseError: insert or commit failed (→ 500)
        """
        if submission.email == "":
            raise ValidationError(
                message="Fields 'email' and 'address' are required",
                field="email",
            )
        if submission.address == "":
            raise ValidationError(
                message="Fields 'email' and 'address' are required",
                field="address",
            )

        level = classify_score(submission.score)
        record = SurveyResult(
            email=submission.email,
            address=submission.address,
            score=submission.score,
            level=level,
        )

        try:
            db.add(record)
            await db.flush()
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            logger.warning(
                "Rejected duplicate survey for email=%s: %s",
                submission.email,
                str(e.orig),
            )
            raise DuplicateEmailError(email=submission.email)
        except Exception as e:
            await db.rollback()
            logger.error("Database error storing survey: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the survey. Please try again later.",
                context={"error_type": type(e).__name__},
            )

        logger.info(
            "Survey saved: email=%s score=%d level=%s",
            record.email,
            record.score,
            record.level,
        )
        return SurveyRecord.model_validate(record)


survey_service = SurveyService()
