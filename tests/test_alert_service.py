"""
Fire Survey Backend: Alert Service Unit Tests
=============================================

What:  Tests for AlertService.latest_address() with a mocked session.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy.exc import OperationalError

from firesurvey.exceptions import DatabaseError, NoSurveyRecordsError
from firesurvey.services.alert_service import AlertService


class TestLatestAddress:

    def setup_method(self):
        self.service = AlertService()

    @pytest.mark.asyncio
    async def test_returns_address(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = "12 Oak Ave"
        mock_db_session.execute.return_value = mock_result

        address = await self.service.latest_address(mock_db_session)

        assert address == "12 Oak Ave"
        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_query_orders_by_newest_id(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = "12 Oak Ave"
        mock_db_session.execute.return_value = mock_result

        await self.service.latest_address(mock_db_session)

        statement = mock_db_session.execute.call_args.args[0]
        sql = str(statement)
        assert "ORDER BY survey_results.id DESC" in sql
        assert "LIMIT" in sql

    @pytest.mark.asyncio
    async def test_empty_store_raises(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NoSurveyRecordsError):
            await self.service.latest_address(mock_db_session)

    @pytest.mark.asyncio
    async def test_query_failure_raises_database_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("no such table"))
        )

        with pytest.raises(DatabaseError):
            await self.service.latest_address(mock_db_session)
