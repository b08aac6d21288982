"""Exception handlers mapping domain errors to HTTP responses.

This is the only place HTTP status codes are chosen for errors. Every
handled error answers with an `ErrorResponse` body `{status, message}`.
Unhandled errors (including plain `UpstreamError`) fall through to the
request-id middleware, which answers 500.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.constants import ErrorMessages
from ..core.exceptions import EmployeeNotFoundError, RateLimitedError
from ..core.logging import get_logger, get_request_id
from ..schemas.employee import ErrorResponse

logger = get_logger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(status=status_code, message=message).model_dump()
    )


def format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into `field: reason` pairs.

    Examples:
        "name: Field required; age: Input should be less than or equal to 75"
    """
    parts = []
    for error in exc.errors():
        location = [str(part) for part in error.get('loc', ()) if part != 'body']
        field = '.'.join(location) or 'body'
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")
    return '; '.join(parts)


async def employee_not_found_handler(request: Request, exc: EmployeeNotFoundError):
    logger.info(
        "Employee not found",
        extra={'employee_id': exc.employee_id, 'request_id': get_request_id()}
    )
    return error_response(status.HTTP_404_NOT_FOUND, str(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    message = format_validation_errors(exc)
    logger.warning(
        "Request validation failed",
        extra={
            'path': request.url.path,
            'validation_message': message,
            'request_id': get_request_id()
        }
    )
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def rate_limited_handler(request: Request, exc: RateLimitedError):
    logger.warning(
        "Upstream rate limit surfaced to client",
        extra={'path': request.url.path, 'request_id': get_request_id()}
    )
    return error_response(status.HTTP_429_TOO_MANY_REQUESTS, ErrorMessages.RATE_LIMIT_EXCEEDED)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain exception handlers to the application."""
    app.add_exception_handler(EmployeeNotFoundError, employee_not_found_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(RateLimitedError, rate_limited_handler)
