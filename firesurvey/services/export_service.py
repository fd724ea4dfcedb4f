"""
Fire Survey Backend: Database Export Service
============================================

What:  Resolves the file offered by GET /downloadAccess and checks it exists.
How:   The path comes from EXPORT_PATH, falling back to the SQLite database
       file itself. Existence is checked with aiofiles so the event loop is
       never blocked on filesystem calls.
Who:   Called by the export route; the route streams the file with FileResponse.
"""

import logging
from pathlib import Path
from typing import NamedTuple, Optional

import aiofiles.os

from firesurvey.config import settings
from firesurvey.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class ExportFile(NamedTuple):
    path: Path
    filename: str
    media_type: str


class ExportService:
    """
    Locates the downloadable database file.

    Args:
        export_path: Override the configured export path (used in tests).
        filename: Override the attachment filename.
        media_type: Override the Content-Type of the download.
    """

    def __init__(
        self,
        export_path: Optional[str] = None,
        filename: Optional[str] = None,
        media_type: Optional[str] = None,
    ):
        self._export_path = export_path
        self._filename = filename
        self._media_type = media_type

    @property
    def path(self) -> Optional[Path]:
        if self._export_path:
            return Path(self._export_path).resolve()
        return settings.export_file

    async def get_export(self) -> ExportFile:
        """
        Return the export file's location and download metadata.

        Raises:
            NotFoundError: no export path is configured, or nothing (or a
                directory) exists at it (→ 404)
        """
        path = self.path
        if path is None or not await aiofiles.os.path.isfile(path):
            logger.warning("Export file not found: %s", path)
            raise NotFoundError(
                resource="database file",
                resource_id=path.name if path is not None else None,
            )

        return ExportFile(
            path=path,
            filename=self._filename or settings.export_filename or path.name,
            media_type=self._media_type or settings.export_media_type,
        )


export_service = ExportService()
