"""
Fire Survey Backend: Fire Alert Route Handler
=============================================

What:  GET|POST /fire-alert returns the most recently reported address.
Who:   Called by the alarm device when a fire is detected (GET or POST).
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from firesurvey.database import get_db_session
from firesurvey.schemas.common import ErrorResponse
from firesurvey.schemas.survey import AlertResponse
from firesurvey.services.alert_service import alert_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Alert"])


@router.api_route(
    "/fire-alert",
    methods=["GET", "POST"],
    response_model=AlertResponse,
    responses={
        200: {"description": "Latest reported address", "model": AlertResponse},
        500: {"description": "No surveys stored or database error", "model": ErrorResponse},
    },
    summary="Get the address for a fire alert",
)
async def fire_alert(
    db: AsyncSession = Depends(get_db_session),
) -> AlertResponse:
    address = await alert_service.latest_address(db=db)
    return AlertResponse(address=address)
