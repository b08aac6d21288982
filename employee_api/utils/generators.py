"""ID generation utilities."""

import uuid


def generate_request_id() -> str:
    """Generate a request ID for requests that arrive without X-Request-ID.

    Examples:
        >>> generate_request_id()
        "a1b2c3d4-e5f6-7890-abcd-ef1234567890"
    """
    return str(uuid.uuid4())
