"""Utility functions organized by domain.

Prefer importing from specific modules for clarity:
    from employee_api.utils.converters import normalize_path
    from employee_api.utils.generators import generate_request_id
"""

from .converters import fold_name, normalize_path
from .generators import generate_request_id

__all__ = [
    "fold_name",
    "normalize_path",
    "generate_request_id",
]
