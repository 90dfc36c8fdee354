"""HTTP error handling following RFC 7807 Problem Details."""

from http import HTTPStatus
from typing import Any, Final

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

DEFAULT_ERROR_TYPE: Final[str] = "about:blank"
RESOURCE_ERROR_TYPE: Final[str] = "urn:ietf:params:rfc:7231:status:404"
SERVER_ERROR_TYPE: Final[str] = "urn:ietf:params:rfc:7231:status:500"

MAX_INSTANCE_LENGTH: Final[int] = 255

ERROR_CODES: Final[dict[int, str]] = {
    status.HTTP_404_NOT_FOUND: "RESOURCE001",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "SERVER001",
}

ERROR_TYPES: Final[dict[str, str]] = {
    "RESOURCE": RESOURCE_ERROR_TYPE,
    "SERVER": SERVER_ERROR_TYPE,
}

JSON_CONTENT_TYPE: Final[str] = "application/problem+json"

CACHE_CONTROL: Final[str] = "no-store, no-cache, must-revalidate"


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "type": RESOURCE_ERROR_TYPE,
                    "title": "Not Found",
                    "status": 404,
                    "detail": "Not Found",
                    "instance": "http://localhost:8000/missing",
                    "code": "RESOURCE001",
                }
            ]
        }
    )

    type: str = Field(default=DEFAULT_ERROR_TYPE)
    title: str
    status: int
    detail: str
    instance: str = Field(max_length=MAX_INSTANCE_LENGTH)
    code: str | None = None


def truncate_url(url: str, max_length: int = MAX_INSTANCE_LENGTH) -> str:
    """Truncate URL to max length while preserving the path.

    Args:
        url: URL to truncate
        max_length: Maximum length allowed

    Returns:
        Truncated URL with path preserved
    """
    if len(url) <= max_length:
        return url

    path = url.split("?")[0]
    if len(path) > max_length:
        return path[:max_length-3] + "..."
    return path


def problem_response(request: Request, status_code: int, detail: str) -> JSONResponse:
    """Build a problem+json response for the given status code."""
    error_type = ERROR_TYPES.get(
        ERROR_CODES.get(status_code, "").split("0")[0],
        DEFAULT_ERROR_TYPE,
    )

    problem = ProblemDetail(
        type=error_type,
        title=HTTPStatus(status_code).phrase,
        status=status_code,
        detail=detail,
        instance=truncate_url(str(request.url)),
        code=ERROR_CODES.get(status_code),
    )

    return JSONResponse(
        status_code=status_code,
        content=problem.model_dump(exclude_none=True),
        headers={
            "Content-Type": JSON_CONTENT_TYPE,
            "Cache-Control": CACHE_CONTROL,
        },
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions by converting to RFC 7807 problem details."""
    response = problem_response(request, exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def app_error_handler(request: Request, exc: "AppError") -> JSONResponse:
    """Handle application errors that escape to the HTTP layer.

    These are programming errors (for example a route depending on the
    resolved client IP without the middleware installed), so they map to 500.
    """
    return problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        exc.message,
    )


class AppError(Exception):
    """Base error class for application errors."""

    def __init__(self, message: str, details: Any = None) -> None:
        """Initialize error with message and optional details.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details


class AddressError(AppError):
    """Error raised when a host:port string cannot be split."""


class RealIPNotResolvedError(AppError):
    """Error raised when the client IP is read before the middleware set it."""
