"""
Fire Survey Backend: Middleware Tests
=====================================

What:  Request ID resolution and the access log.
How:   Pure-function checks plus caplog on the `firesurvey.access` logger
       while requests go through the ASGI client.
"""

import logging

import pytest

from firesurvey.middleware.logging import level_for_status
from firesurvey.middleware.request_id import MAX_REQUEST_ID_LENGTH, resolve_request_id


class TestResolveRequestId:

    def test_client_id_reused(self):
        assert resolve_request_id("alarm-7") == "alarm-7"

    def test_client_id_stripped(self):
        assert resolve_request_id("  abc  ") == "abc"

    @pytest.mark.parametrize(
        "supplied",
        [None, "", "   ", "x" * (MAX_REQUEST_ID_LENGTH + 1), "bad\nid"],
    )
    def test_unusable_id_replaced(self, supplied):
        rid = resolve_request_id(supplied)

        assert len(rid) == 8
        int(rid, 16)


class TestLevelForStatus:

    @pytest.mark.parametrize(
        "status, level",
        [
            (200, logging.INFO),
            (304, logging.INFO),
            (400, logging.WARNING),
            (409, logging.WARNING),
            (500, logging.ERROR),
        ],
    )
    def test_levels(self, status, level):
        assert level_for_status(status) == level


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_request_logged_with_status_and_id(self, test_client, caplog, sample_survey):
        caplog.set_level(logging.INFO, logger="firesurvey.access")

        await test_client.post(
            "/submitSurvey", json=sample_survey, headers={"X-Request-ID": "req-1"}
        )
        await test_client.post(
            "/submitSurvey", json=sample_survey, headers={"X-Request-ID": "req-2"}
        )

        records = [r for r in caplog.records if r.name == "firesurvey.access"]
        assert [(r.levelno, r.status, r.request_id) for r in records] == [
            (logging.INFO, 200, "req-1"),
            (logging.WARNING, 409, "req-2"),
        ]
        assert "POST /submitSurvey 409" in records[1].getMessage()

    @pytest.mark.asyncio
    async def test_liveness_paths_not_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="firesurvey.access")

        await test_client.get("/ping")

        assert not [r for r in caplog.records if r.name == "firesurvey.access"]

    @pytest.mark.asyncio
    async def test_bodies_not_logged(self, test_client, caplog, sample_survey):
        caplog.set_level(logging.INFO, logger="firesurvey.access")

        await test_client.post("/submitSurvey", json=sample_survey)

        access_lines = [r.getMessage() for r in caplog.records if r.name == "firesurvey.access"]
        assert access_lines
        assert all("a@x.com" not in line for line in access_lines)
