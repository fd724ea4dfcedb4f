"""
Fire Survey Backend: Alert Service
==================================

What:  Looks up the address of the most recently stored survey.
Who:   Called by /fire-alert, which the alarm device polls when it fires.

Query plan:
    SELECT address FROM survey_results ORDER BY id DESC LIMIT 1
    → primary key index, reverse scan, one row
"""

import logging

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from firesurvey.exceptions import DatabaseError, NoSurveyRecordsError
from firesurvey.models.survey import SurveyResult

logger = logging.getLogger(__name__)


class AlertService:
    """Read-only access to the latest reported address."""

    async def latest_address(self, db: AsyncSession) -> str:
        """
        Return the address of the newest survey record.

        Raises:
            NoSurveyRecordsError: the table is empty (→ 500)
            DatabaseError: the query failed (→ 500)
        """
        try:
            result = await db.execute(
                select(SurveyResult.address)
                .order_by(desc(SurveyResult.id))
                .limit(1)
            )
            address = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error reading latest address: %s", str(e))
            raise DatabaseError(
                message="Could not read the alert address from the database.",
                context={"error_type": type(e).__name__},
            )

        if address is None:
            logger.error("Fire alert requested but no survey has been recorded")
            raise NoSurveyRecordsError()

        logger.warning("FIRE ALERT: fire detected at address: %s", address)
        return address


alert_service = AlertService()
