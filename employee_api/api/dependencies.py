"""FastAPI Dependencies for the employee endpoints.

Wires the shared HTTP client, the upstream client and the service together
per request. Tests override `get_http_client` to point at a fake upstream.
"""

import httpx
from fastapi import Depends, Request

from ..clients.employee_client import EmployeeClient
from ..services.employee_service import EmployeeService


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Return the shared HTTP client created in the application lifespan."""
    return request.app.state.http_client


def get_employee_client(
    http_client: httpx.AsyncClient = Depends(get_http_client)
) -> EmployeeClient:
    return EmployeeClient(http_client)


def get_employee_service(
    client: EmployeeClient = Depends(get_employee_client)
) -> EmployeeService:
    return EmployeeService(client)
