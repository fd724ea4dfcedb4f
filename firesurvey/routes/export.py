"""
Fire Survey Backend: Database Download Route
============================================

What:  GET /downloadAccess streams the survey database file as an attachment.
How:   ExportService resolves and checks the path; Starlette's FileResponse
       streams it in chunks and sets Content-Disposition from `filename`.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import FileResponse

from firesurvey.schemas.common import ErrorResponse
from firesurvey.services.export_service import export_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Export"])


@router.get(
    "/downloadAccess",
    response_class=FileResponse,
    responses={
        200: {"description": "Database file"},
        404: {"description": "Database file not found", "model": ErrorResponse},
    },
    summary="Download the survey database file",
)
async def download_database() -> FileResponse:
    export = await export_service.get_export()
    logger.info("Serving database export %s", export.filename)
    return FileResponse(
        path=str(export.path),
        media_type=export.media_type,
        filename=export.filename,
    )
