"""
Tests for custom exception classes and the error envelope handlers
"""

import json

from fastapi import status
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from vibrant.exception_handlers import (
    cms_exception_handler,
    create_error_response,
    get_error_type,
    get_http_error_code,
    http_exception_handler,
    unhandled_exception_handler,
)
from vibrant.exceptions import (
    ArticleNotFoundError,
    CMSError,
    DatabaseError,
    ErrorCode,
    InvalidStatusTransitionError,
    PersistInFlightError,
    PublishNotAllowedError,
    ResourceNotFoundError,
    UnsupportedLocaleError,
    ValidationError,
)


def _request(path="/api/v1/test", method="GET"):
    return Request({"type": "http", "method": method, "path": path, "headers": [], "query_string": b""})


def _body(response):
    return json.loads(response.body)["error"]


class TestCMSError:
    def test_defaults(self):
        exc = CMSError("Test error")

        assert str(exc) == "Test error"
        assert exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert exc.error_code == ErrorCode.UNKNOWN_ERROR
        assert exc.details == {}

    def test_details(self):
        exc = CMSError("Test error", details={"key": "value"})
        assert exc.details == {"key": "value"}


class TestDomainExceptions:
    def test_resource_not_found_message(self):
        assert ResourceNotFoundError("Thing").message == "Thing not found"
        assert ResourceNotFoundError("Thing", 7).message == "Thing with id '7' not found"

    def test_article_not_found(self):
        exc = ArticleNotFoundError("abc")

        assert exc.status_code == 404
        assert exc.error_code == ErrorCode.RESOURCE_ARTICLE_NOT_FOUND
        assert exc.details == {"resource_type": "Article", "resource_id": "abc"}

    def test_validation_field(self):
        exc = ValidationError("Bad", field="sort")

        assert exc.status_code == 400
        assert exc.details == {"field": "sort"}

    def test_unsupported_locale(self):
        exc = UnsupportedLocaleError("de", ["en", "es"])

        assert exc.status_code == 422
        assert exc.details["locale"] == "de"
        assert exc.details["supported"] == ["en", "es"]

    def test_publish_not_allowed(self):
        exc = PublishNotAllowedError(["fr", "pt"])

        assert isinstance(exc, ValidationError)
        assert exc.status_code == 400
        assert exc.details == {"missing_locales": ["fr", "pt"]}

    def test_invalid_transition(self):
        exc = InvalidStatusTransitionError("ARCHIVED", "ARCHIVED")
        assert "ARCHIVED" in exc.message
        assert exc.error_code == ErrorCode.STATUS_TRANSITION_INVALID

    def test_persist_in_flight(self):
        exc = PersistInFlightError("publish")
        assert exc.status_code == 409
        assert exc.details == {"pending_action": "publish"}

    def test_database_error(self):
        assert DatabaseError().details == {}
        assert DatabaseError(operation="update_article").details == {"operation": "update_article"}


class TestErrorEnvelope:
    def test_create_error_response(self):
        response = create_error_response(
            404, "Missing", error_code=ErrorCode.RESOURCE_NOT_FOUND, details={"id": 1}, path="/x"
        )

        assert response.status_code == 404
        assert _body(response) == {
            "status_code": 404,
            "message": "Missing",
            "type": "Not Found",
            "error_code": "RESOURCE_NOT_FOUND",
            "details": {"id": 1},
            "path": "/x",
        }

    def test_error_type_and_code_lookup(self):
        assert get_error_type(418) == "Error"
        assert get_http_error_code(401) == ErrorCode.AUTH_FAILED
        assert get_http_error_code(418) == ErrorCode.UNKNOWN_ERROR

    async def test_cms_handler(self):
        response = await cms_exception_handler(_request(), PublishNotAllowedError(["es"]))

        error = _body(response)
        assert response.status_code == 400
        assert error["error_code"] == "PUBLISH_INCOMPLETE_TRANSLATIONS"
        assert error["details"] == {"missing_locales": ["es"]}
        assert error["path"] == "/api/v1/test"

    async def test_http_handler_keeps_headers(self):
        exc = StarletteHTTPException(401, detail="Not authenticated", headers={"WWW-Authenticate": "Bearer"})

        response = await http_exception_handler(_request(), exc)

        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert _body(response)["message"] == "Not authenticated"

    async def test_unhandled_handler_hides_details(self):
        response = await unhandled_exception_handler(_request(), RuntimeError("secret stack detail"))

        error = _body(response)
        assert response.status_code == 500
        assert "secret" not in error["message"]
        assert error["error_code"] == "INTERNAL_ERROR"
