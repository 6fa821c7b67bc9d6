"""
Unit tests for pagination error handling.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from services.cursor_pagination.http_errors import (
    ErrorCode,
    PaginationAPIException,
    PaginationParameterError,
    exception_to_response,
    register_pagination_exception_handlers,
    status400_error_response,
)
from services.cursor_pagination.validator import validate_page_params


class TestPaginationParameterError:
    def setup_method(self):
        _, self.errors = validate_page_params({"size": "5", "sort": "name"})

    def test_carries_errors(self):
        exc = PaginationParameterError(self.errors)

        assert exc.status_code == 400
        assert exc.error_code == ErrorCode.VALIDATION_FAILED
        assert exc.message == "Unsupported Sort."
        assert exc.errors == self.errors

    def test_requires_errors(self):
        with pytest.raises(ValueError):
            PaginationParameterError([])

    def test_to_error_response(self):
        response = PaginationParameterError(self.errors).to_error_response()

        assert response.type == "validation_error"
        assert response.details["code"] == "VALIDATION_FAILED"
        assert response.details["errors"][0]["title"] == "Unsupported Sort."


class TestStatus400ErrorResponse:
    def test_body(self):
        _, errors = validate_page_params({"size": "5", "after": ""})

        assert status400_error_response(errors) == {
            "status": "Error",
            "errors": [
                {
                    "title": "Invalid Parameter.",
                    "detail": "page[after] is invalid",
                    "source": {"parameter": "page[after]"},
                }
            ],
        }


class TestExceptionToResponse:
    def test_api_exception(self):
        exc = PaginationAPIException("cursor store unavailable", details={"a": 1})

        response = exception_to_response(exc)

        assert response.type == "internal_error"
        assert response.message == "cursor store unavailable"
        assert response.details == {"a": 1, "code": "INTERNAL_ERROR"}
        assert response.request_id == exc.request_id

    def test_generic_exception_hides_message(self):
        response = exception_to_response(RuntimeError("password=hunter2"))

        assert response.type == "internal_error"
        assert response.message == "Internal server error"
        assert response.details == {
            "code": ErrorCode.INTERNAL_ERROR.value,
            "error_type": "RuntimeError",
        }
        assert len(response.request_id) > 0


class TestRegisteredHandlers:
    def setup_method(self):
        app = FastAPI()
        register_pagination_exception_handlers(app)

        @app.get("/broken-scope")
        async def broken_scope():
            raise RuntimeError("connection lost")

        @app.get("/unavailable")
        async def unavailable():
            raise PaginationAPIException("Try again later", status_code=503)

        self.client = TestClient(app, raise_server_exceptions=False)

    def test_unexpected_error_becomes_500(self):
        response = self.client.get("/broken-scope")

        assert response.status_code == 500
        body = response.json()
        assert body["type"] == "internal_error"
        assert body["details"] == {
            "code": "INTERNAL_ERROR",
            "error_type": "RuntimeError",
        }
        assert "connection lost" not in response.text

    def test_api_exception_keeps_its_status(self):
        response = self.client.get("/unavailable")

        assert response.status_code == 503
        assert response.json()["message"] == "Try again later"
