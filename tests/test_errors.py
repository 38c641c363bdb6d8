"""
Tests for the error taxonomy and the JSON error envelope.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from utils.errors import (
    AppError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    register_exception_handlers,
)


def _app_raising(exc: Exception) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    async def boom():
        raise exc

    return app


class TestErrorEnvelope:
    @pytest.mark.parametrize(
        "exc, code, message",
        [
            (ValidationError(), 400, "Validation error"),
            (UnauthorizedError("Invalid email or password"), 401, "Invalid email or password"),
            (ForbiddenError(), 403, "Forbidden"),
            (NotFoundError("Task not found"), 404, "Task not found"),
            (ConflictError(), 409, "Resource already exists"),
        ],
    )
    def test_domain_errors_map_to_status(self, exc, code, message):
        client = TestClient(_app_raising(exc))
        response = client.get("/boom")
        assert response.status_code == code
        assert response.json() == {
            "success": False,
            "error": {"message": message, "statusCode": code},
        }

    def test_unexpected_error_is_500_without_internals(self):
        client = TestClient(_app_raising(RuntimeError("db password leaked")), raise_server_exceptions=False)
        response = client.get("/boom")
        assert response.status_code == 500
        assert response.json()["error"]["message"] == "Internal server error"
        assert "leaked" not in response.text

    def test_all_domain_errors_share_base(self):
        for cls in (ValidationError, UnauthorizedError, ForbiddenError, NotFoundError, ConflictError):
            assert issubclass(cls, AppError)
