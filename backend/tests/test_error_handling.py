"""
Acaia Club Backend — Error Envelope and Health Check Tests
===========================================================

What:  Tests for the error mapper (error_handlers.py), the request id
       header and /health.

What we test:
    ✅ Malformed JSON → 400 without details
    ✅ Unexpected exceptions → 500 with a generic message, nothing leaked
    ✅ Unknown routes keep the failure envelope
    ✅ Every response carries X-Request-ID
    ✅ Client request ids are kept only when safe to log
    ✅ Access log levels and the logged-in user on each line
    ✅ /health reports the database state (200 / 503)
"""

import logging
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.exceptions import RequestValidationError
from httpx import ASGITransport, AsyncClient
from starlette.requests import Request

from acaiaclub.database import Database
from acaiaclub.error_handlers import INTERNAL_ERROR_MESSAGE, status_for, validation_details
from acaiaclub.exceptions import (
    AcaiaClubError,
    ConflictError,
    DatabaseError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from acaiaclub.middleware.logging import describe_user, level_for
from acaiaclub.middleware.request_id import RequestIDLogFilter, request_id_var


class TestStatusMapping:

    def test_known_errors(self):
        assert status_for(NotFoundError("floor plan")) == 404
        assert status_for(ConflictError()) == 409
        assert status_for(ValidationError()) == 400
        assert status_for(ForbiddenError()) == 403
        assert status_for(DatabaseError()) == 500

    def test_subclass_inherits_parent_status(self):
        class StockConflict(ConflictError):
            pass

        assert status_for(StockConflict()) == 409

    def test_unlisted_error_is_500(self):
        assert status_for(AcaiaClubError()) == 500


class TestErrorEnvelope:

    @pytest.mark.asyncio
    async def test_malformed_json_has_no_details(self, test_client):
        response = await test_client.post(
            "/api/floorplans",
            content=b'{"name": "Main Hall",',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Malformed request body: expected valid JSON"
        assert "details" not in body

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_generic_500(self, app):
        async def explode():
            raise RuntimeError("connection string postgres://secret@db")

        app.add_api_route("/api/explode", explode)
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/explode")

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": INTERNAL_ERROR_MESSAGE}
        assert "secret" not in response.text

    @pytest.mark.asyncio
    async def test_database_error_message_is_generic(self, test_client):
        with patch(
            "acaiaclub.routes.floor_plans.floor_plan_service.list",
            new=AsyncMock(side_effect=DatabaseError(context={"sql": "SELECT secret"})),
        ):
            response = await test_client.get("/api/floorplans")

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": INTERNAL_ERROR_MESSAGE}

    @pytest.mark.asyncio
    async def test_unknown_route_keeps_envelope(self, test_client):
        response = await test_client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        response = await test_client.get("/api/floorplans")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_request_id_is_echoed(self, test_client):
        response = await test_client.get("/api/floorplans", headers={"X-Request-ID": "pos-tablet.42"})

        assert response.headers["X-Request-ID"] == "pos-tablet.42"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("sent", ["two words", "x" * 65, "line;break"])
    async def test_unsafe_request_id_is_replaced(self, test_client, sent):
        response = await test_client.get("/api/floorplans", headers={"X-Request-ID": sent})

        returned = response.headers["X-Request-ID"]
        assert returned != sent
        assert len(returned) == 8


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_database_down_is_503(self, test_client):
        with patch.object(Database, "ping", new=AsyncMock(side_effect=OSError("refused"))):
            response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


class TestAccessLog:

    def test_levels(self):
        assert level_for(500, 5.0, "/api/suppliers") == logging.ERROR
        assert level_for(403, 5.0, "/api/suppliers") == logging.WARNING
        assert level_for(200, 1500.0, "/api/suppliers") == logging.WARNING
        assert level_for(200, 5.0, "/health") == logging.DEBUG
        assert level_for(200, 5.0, "/api/suppliers") == logging.INFO

    def test_user_from_session(self):
        request = Request(
            {"type": "http", "session": {"user": {"id": "u-1", "name": "Ana", "role": "COOK"}}}
        )

        assert describe_user(request) == "u-1/COOK"

    def test_anonymous_without_session(self):
        assert describe_user(Request({"type": "http"})) == "anonymous"

    def test_log_filter_stamps_request_id(self):
        record = logging.LogRecord("acaiaclub", logging.INFO, __file__, 1, "hello", None, None)
        token = request_id_var.set("abc12345")
        try:
            RequestIDLogFilter().filter(record)
        finally:
            request_id_var.reset(token)

        assert record.request_id == "abc12345"

    def test_log_filter_outside_request(self):
        record = logging.LogRecord("acaiaclub", logging.INFO, __file__, 1, "hello", None, None)

        RequestIDLogFilter().filter(record)

        assert record.request_id == "-"


class TestValidationDetails:

    def test_body_fields_are_camel_cased(self):
        exc = RequestValidationError(
            [{"loc": ("body", "items", 0, "unit_cost"), "msg": "Field required", "type": "missing"}]
        )

        assert validation_details(exc) == [
            {"field": "items.0.unitCost", "message": "Field required", "type": "missing"}
        ]

    def test_path_parameters_keep_their_names(self):
        exc = RequestValidationError(
            [{"loc": ("path", "floor_plan_id"), "msg": "Input should be a valid UUID", "type": "uuid_parsing"}]
        )

        assert validation_details(exc)[0]["field"] == "floor_plan_id"
