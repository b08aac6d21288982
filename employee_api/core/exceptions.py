"""Custom Exceptions for the Employee Directory API.

Domain errors raised by the service layer and upstream errors raised by the
client. HTTP status mapping happens only in the API exception handlers:

- EmployeeNotFoundError -> 404
- RateLimitedError -> 429
- any other UpstreamError -> 500
"""

from .constants import ErrorMessages


class EmployeeApiError(Exception):
    """Base exception for all employee API errors."""
    pass


class EmployeeNotFoundError(EmployeeApiError):
    """No employee with the requested id exists upstream."""

    def __init__(self, employee_id: str):
        self.employee_id = employee_id
        super().__init__(ErrorMessages.EMPLOYEE_NOT_FOUND.format(employee_id=employee_id))


class UpstreamError(EmployeeApiError):
    """The upstream employee directory failed or was unreachable."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class RateLimitedError(UpstreamError):
    """The upstream employee directory answered 429 Too Many Requests."""
    pass


class UpstreamResponseError(UpstreamError):
    """The upstream body did not match the expected envelope shape."""

    def __init__(self, message: str, detail: str | None = None, status_code: int | None = None):
        self.detail = detail
        super().__init__(message, status_code=status_code)
