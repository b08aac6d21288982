"""API v1 Router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from ...core.constants import ApiEndpoints
from .endpoints import employees

api_router = APIRouter()

# Include employee endpoints
api_router.include_router(
    employees.router,
    prefix=ApiEndpoints.EMPLOYEES,
    tags=["Employees"]
)
