"""
HTTP errors for cursor pagination.

Rejected page parameters are raised as ``PaginationParameterError`` and
rendered as the 400 body of the cursor pagination profile:

    {"status": "Error", "errors": [<JSON:API error objects>]}

Anything else that escapes a paginated route becomes an ``ErrorResponse``
with a request id. ``register_pagination_exception_handlers(app)`` installs
both renderings on a FastAPI app.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from services.cursor_pagination.logging_config import get_logger
from services.cursor_pagination.schemas import PaginationError

logger = get_logger(__name__)


class ErrorCode(str, Enum):
    VALIDATION_FAILED = "VALIDATION_FAILED"  # 400, page parameters rejected
    INTERNAL_ERROR = "INTERNAL_ERROR"  # 500, unexpected failure while paginating


class ErrorResponse(BaseModel):
    """Error body for failures outside the page parameter checks."""

    type: str
    message: str
    details: Optional[Dict[str, Any]] = None
    timestamp: str
    request_id: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class PaginationAPIException(Exception):
    """
    Base exception for errors a paginated route reports over HTTP.

    Args:
        message: User-facing message
        details: Extra context merged into the response details
        error_type: Category, e.g. "validation_error"
        error_code: Machine-readable code added to the details
        status_code: HTTP status of the response
        request_id: Tracing id; generated when omitted
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_type: str = "internal_error",
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        request_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})
        self.error_type = error_type
        self.error_code = error_code
        self.status_code = status_code
        self.timestamp = _now()
        self.request_id = request_id or str(uuid.uuid4())

    def to_error_response(self) -> ErrorResponse:
        return ErrorResponse(
            type=self.error_type,
            message=self.message,
            details={**self.details, "code": self.error_code.value},
            timestamp=self.timestamp,
            request_id=self.request_id,
        )


class PaginationParameterError(PaginationAPIException):
    """The validator rejected the page parameters of a request."""

    def __init__(self, errors: Sequence[PaginationError]):
        if not errors:
            raise ValueError("PaginationParameterError requires at least one error")
        self.errors: List[PaginationError] = list(errors)
        super().__init__(
            message=self.errors[0].title,
            details={"errors": [error.to_dict() for error in self.errors]},
            error_type="validation_error",
            error_code=ErrorCode.VALIDATION_FAILED,
            status_code=400,
        )


def status400_error_response(errors: Sequence[PaginationError]) -> Dict[str, Any]:
    """400 body for rejected page parameters."""
    return {"status": "Error", "errors": [error.to_dict() for error in errors]}


def exception_to_response(exc: Exception) -> ErrorResponse:
    """
    Render any exception as an ``ErrorResponse``.

    Unexpected exceptions keep only their class name; their message may carry
    query or driver details and is logged instead of returned.
    """
    if isinstance(exc, PaginationAPIException):
        return exc.to_error_response()
    return ErrorResponse(
        type="internal_error",
        message="Internal server error",
        details={
            "code": ErrorCode.INTERNAL_ERROR.value,
            "error_type": type(exc).__name__,
        },
        timestamp=_now(),
        request_id=str(uuid.uuid4()),
    )


def register_pagination_exception_handlers(app: FastAPI) -> None:
    """
    Install the pagination error renderings on a FastAPI app.

    - ``PaginationParameterError``: 400 with the JSON:API error list
    - other ``PaginationAPIException``: ``ErrorResponse`` with its own status
    - any other exception: 500 ``ErrorResponse``
    """

    @app.exception_handler(PaginationParameterError)
    async def pagination_parameter_error_handler(
        request: Request, exc: PaginationParameterError
    ) -> JSONResponse:
        logger.warning(
            "Rejected page parameters",
            path=request.url.path,
            detail=exc.errors[0].detail,
            request_id=exc.request_id,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=status400_error_response(exc.errors),
        )

    @app.exception_handler(PaginationAPIException)
    async def pagination_api_exception_handler(
        request: Request, exc: PaginationAPIException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exception_to_response(exc).model_dump(),
        )

    @app.exception_handler(Exception)
    async def unexpected_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        error_response = exception_to_response(exc)
        logger.exception(
            "Unhandled error in paginated route",
            path=request.url.path,
            request_id=error_response.request_id,
        )
        return JSONResponse(status_code=500, content=error_response.model_dump())
