"""Upstream Clients.

This module provides the client for the external employee directory service.
"""

from .employee_client import EmployeeClient

__all__ = [
    "EmployeeClient",
]
