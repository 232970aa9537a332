"""Unit tests for exception handlers."""

import json
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from api.exception_handlers import setup_exception_handlers
from core.exceptions import GroupFullError, GroupNotFoundError, GroupOwnershipError


def _create_test_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


async def _call(app: FastAPI, method: str, path: str, **kwargs):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.request(method, path, **kwargs)


def _find_handler(app: FastAPI, exc_class: type):
    return next(h for cls, h in app.exception_handlers.items() if cls is exc_class)


class TestExceptionHandlers:
    @pytest.mark.asyncio
    async def test_not_found_returns_404(self) -> None:
        app = _create_test_app()

        @app.get("/raise-app")
        async def _() -> None:
            raise GroupNotFoundError("some-id")

        response = await _call(app, "GET", "/raise-app")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "GROUP_NOT_FOUND"
        assert body["message"] == "Group not found"
        assert body["details"]["group_id"] == "some-id"

    @pytest.mark.asyncio
    async def test_ownership_error_returns_403(self) -> None:
        app = _create_test_app()

        @app.delete("/raise-owner")
        async def _() -> None:
            raise GroupOwnershipError("gid", action="delete")

        response = await _call(app, "DELETE", "/raise-owner")

        assert response.status_code == 403
        assert response.json()["message"] == "You are not authorized to delete this group"

    @pytest.mark.asyncio
    async def test_state_error_returns_400(self) -> None:
        app = _create_test_app()

        @app.post("/raise-full")
        async def _() -> None:
            raise GroupFullError("gid", 3)

        response = await _call(app, "POST", "/raise-full")

        assert response.status_code == 400
        assert response.json()["error_code"] == "GROUP_FULL"

    @pytest.mark.asyncio
    async def test_http_exception_returns_standard_format(self) -> None:
        from starlette.exceptions import HTTPException

        app = _create_test_app()

        @app.get("/raise-http")
        async def _() -> None:
            raise HTTPException(status_code=405, detail="Method Not Allowed")

        response = await _call(app, "GET", "/raise-http")

        assert response.status_code == 405
        body = response.json()
        assert body["error_code"] == "HTTP_ERROR"
        assert body["message"] == "Method Not Allowed"

    @pytest.mark.asyncio
    async def test_validation_error_returns_400_with_field_details(self) -> None:
        from pydantic import BaseModel, Field

        app = _create_test_app()

        class Body(BaseModel):
            name: str = Field(..., min_length=5)

        @app.post("/validate")
        async def _(body: Body) -> dict[str, bool]:
            return {"ok": True}

        response = await _call(app, "POST", "/validate", json={"name": "abc"})

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "body.name"

    @pytest.mark.asyncio
    async def test_storage_error_returns_500(self) -> None:
        app = _create_test_app()
        mock_request = MagicMock()
        mock_request.state.request_id = "req-db"

        handler = _find_handler(app, SQLAlchemyError)
        exc = OperationalError("SELECT 1", {}, Exception("connection refused"))

        response = await handler(mock_request, exc)  # type: ignore[misc]

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error_code"] == "DATABASE_ERROR"
        assert body["details"]["request_id"] == "req-db"

    @pytest.mark.asyncio
    async def test_unhandled_exception_returns_500(self) -> None:
        app = _create_test_app()
        mock_request = MagicMock()
        mock_request.state.request_id = "test-req-id"

        handler = _find_handler(app, Exception)

        response = await handler(mock_request, RuntimeError("Something went wrong"))  # type: ignore[misc]

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["details"]["request_id"] == "test-req-id"
