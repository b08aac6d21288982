"""Application Constants.

Centralized constants used throughout the application.
This file contains all hardcoded values that should be maintained in one place.
"""

# ============================================================================
# EMPLOYEE CONSTANTS
# ============================================================================

class EmployeeLimits:
    """Validation limits for employee creation."""
    MIN_AGE = 16
    MAX_AGE = 75
    TOP_EARNERS_LIMIT = 10


class UpstreamFields:
    """Field names used by the upstream employee directory."""
    DELETE_NAME = "name"


class UpstreamOperations:
    """Operation labels for upstream logging and metrics."""
    LIST = "list"
    GET = "get"
    CREATE = "create"
    DELETE = "delete"


# ============================================================================
# ERROR MESSAGES
# ============================================================================

class ErrorMessages:
    """Standard error messages."""
    INTERNAL_SERVER_ERROR = "Internal server error"
    EMPLOYEE_NOT_FOUND = "Employee not found with id: {employee_id}"
    RATE_LIMIT_EXCEEDED = "Rate limit exceeded. Too many requests!"
    NAME_REQUIRED = "Employee name is required"
    TITLE_REQUIRED = "Employee title is required"
    UPSTREAM_UNREACHABLE = "Upstream employee directory unreachable: {error}"
    UPSTREAM_STATUS = "Upstream employee directory returned HTTP {status_code}"
    UPSTREAM_MALFORMED = "Upstream employee directory returned an unexpected body"


# ============================================================================
# HTTP HEADERS
# ============================================================================

class HttpHeaders:
    """HTTP header names."""
    REQUEST_ID = "X-Request-ID"
    PROCESS_TIME = "X-Process-Time"
    UPSTREAM_CALLS = "X-Upstream-Calls"


# ============================================================================
# HTTP STATUS CODES
# ============================================================================

class HttpStatusCodes:
    """HTTP status code constants."""
    INTERNAL_SERVER_ERROR = 500
    TOO_MANY_REQUESTS = 429
    NOT_FOUND = 404


# ============================================================================
# API ENDPOINTS
# ============================================================================

class ApiEndpoints:
    """API endpoint paths."""
    DOCS = "/docs"
    REDOC = "/redoc"
    OPENAPI = "/openapi.json"
    HEALTH = "/health"
    ROOT = "/"
    EMPLOYEES = "/employee"


# ============================================================================
# METRICS CONSTANTS
# ============================================================================

class Metrics:
    """Metrics-related constants."""
    ENDPOINT_PATH = "/metrics"
    SERVICE_NAME = "employee-directory-api"
    OUTCOME_SUCCESS = "success"
    OUTCOME_NOT_FOUND = "not_found"
    OUTCOME_RATE_LIMITED = "rate_limited"
    OUTCOME_ERROR = "error"
