"""Upstream Employee Directory Client.

Thin async client over the upstream employee directory HTTP API. Responses
are validated once, at this boundary, into typed `Employee` records.

Upstream outcomes are mapped as follows:
- 404 on a single-record lookup -> None
- 429 anywhere -> RateLimitedError
- any other non-2xx status, transport failure, or malformed body -> UpstreamError
"""

import json
import time
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from ..core.config import settings
from ..core.constants import (
    ErrorMessages,
    HttpStatusCodes,
    Metrics,
    UpstreamFields,
    UpstreamOperations,
)
from ..core.exceptions import RateLimitedError, UpstreamError, UpstreamResponseError
from ..core.logging import get_logger
from ..core.metrics import record_upstream_call
from ..schemas.employee import (
    DeleteEnvelope,
    Employee,
    EmployeeCreate,
    EmployeeEnvelope,
    EmployeeListEnvelope,
)

logger = get_logger(__name__)

EnvelopeT = TypeVar('EnvelopeT', bound=BaseModel)


class EmployeeClient:
    """Client for the upstream employee directory.

    The underlying `httpx.AsyncClient` is owned by the application lifespan
    and shared between requests; this class holds no other state.
    """

    def __init__(self, http_client: httpx.AsyncClient, base_url: str | None = None):
        """Initialize the client.

        Args:
            http_client: Shared async HTTP client
            base_url: Upstream base URL (defaults to settings.UPSTREAM_BASE_URL)
        """
        self.http_client = http_client
        self.base_url = (base_url or settings.UPSTREAM_BASE_URL).rstrip('/')

    async def list_all(self) -> list[Employee]:
        """Fetch the full employee list.

        Raises:
            RateLimitedError: Upstream answered 429
            UpstreamError: Upstream unreachable, non-success status, or bad body
        """
        response = await self._send(UpstreamOperations.LIST, "GET", self.base_url)
        envelope = self._parse(EmployeeListEnvelope, response, UpstreamOperations.LIST)
        return [record.to_employee() for record in envelope.data]

    async def get_by_id(self, employee_id: str) -> Employee | None:
        """Fetch a single employee, or None when upstream answers 404."""
        response = await self._send(
            UpstreamOperations.GET,
            "GET",
            self._employee_url(employee_id),
            allow_not_found=True
        )
        if response is None:
            return None

        envelope = self._parse(EmployeeEnvelope, response, UpstreamOperations.GET)
        return envelope.data.to_employee()

    async def create(self, request: EmployeeCreate) -> Employee:
        """Create an employee upstream and return the record upstream reports."""
        response = await self._send(
            UpstreamOperations.CREATE,
            "POST",
            self.base_url,
            payload=request.to_upstream_payload()
        )
        envelope = self._parse(EmployeeEnvelope, response, UpstreamOperations.CREATE)

        employee = envelope.data.to_employee()
        logger.info(
            "Employee created upstream",
            extra={'employee_id': employee.id}
        )
        return employee

    async def delete_by_id(self, employee_id: str) -> bool:
        """Delete an employee by id.

        Upstream deletes by name, so the record is resolved first. Returns
        False without calling the delete endpoint when the id does not resolve
        or the record has no name. Client errors (4xx, including 429) during
        the lookup and any failure of the delete call itself are logged and
        reported as False rather than raised. Lookup 5xx and transport
        failures propagate.
        """
        try:
            employee = await self.get_by_id(employee_id)
        except UpstreamError as e:
            if not self._is_client_error(e):
                raise
            logger.warning(
                "Upstream lookup before delete failed, reporting employee as not deleted",
                extra={
                    'employee_id': employee_id,
                    'error_type': type(e).__name__,
                    'status_code': e.status_code
                }
            )
            return False

        if employee is None or employee.name is None:
            logger.info(
                "Employee not deletable - unknown id or missing name",
                extra={'employee_id': employee_id, 'found': employee is not None}
            )
            return False

        try:
            response = await self._send(
                UpstreamOperations.DELETE,
                "DELETE",
                self.base_url,
                payload={UpstreamFields.DELETE_NAME: employee.name}
            )
            deleted = self._parse(DeleteEnvelope, response, UpstreamOperations.DELETE).deleted
        except UpstreamError as e:
            logger.warning(
                "Upstream delete failed, reporting employee as not deleted",
                extra={
                    'employee_id': employee_id,
                    'error': str(e),
                    'error_type': type(e).__name__,
                    'status_code': e.status_code
                }
            )
            return False

        logger.info(
            "Upstream delete completed",
            extra={'employee_id': employee_id, 'deleted': deleted}
        )
        return deleted

    @staticmethod
    def _is_client_error(error: UpstreamError) -> bool:
        if isinstance(error, RateLimitedError):
            return True
        return error.status_code is not None and 400 <= error.status_code < 500

    def _employee_url(self, employee_id: str) -> str:
        return f"{self.base_url}/{quote(employee_id, safe='')}"

    async def _send(
        self,
        operation: str,
        method: str,
        url: str,
        payload: dict[str, Any] | None = None,
        allow_not_found: bool = False
    ) -> httpx.Response | None:
        """Issue one upstream request and map its status.

        Returns None only for a 404 when `allow_not_found` is set.
        """
        start_time = time.time()

        try:
            response = await self.http_client.request(method, url, json=payload)
        except httpx.RequestError as e:
            duration = time.time() - start_time
            record_upstream_call(operation, Metrics.OUTCOME_ERROR, duration)
            logger.error(
                "Upstream request failed",
                extra={
                    'operation': operation,
                    'url': url,
                    'error': str(e),
                    'error_type': type(e).__name__,
                    'duration': duration
                }
            )
            raise UpstreamError(ErrorMessages.UPSTREAM_UNREACHABLE.format(error=str(e))) from e

        duration = time.time() - start_time
        status_code = response.status_code

        if status_code == HttpStatusCodes.NOT_FOUND and allow_not_found:
            record_upstream_call(operation, Metrics.OUTCOME_NOT_FOUND, duration)
            logger.info(
                "Upstream record not found",
                extra={'operation': operation, 'url': url, 'duration': duration}
            )
            return None

        if status_code == HttpStatusCodes.TOO_MANY_REQUESTS:
            record_upstream_call(operation, Metrics.OUTCOME_RATE_LIMITED, duration)
            logger.warning(
                "Upstream rate limit hit",
                extra={'operation': operation, 'url': url, 'duration': duration}
            )
            raise RateLimitedError(
                ErrorMessages.UPSTREAM_STATUS.format(status_code=status_code),
                status_code=status_code
            )

        if not response.is_success:
            record_upstream_call(operation, Metrics.OUTCOME_ERROR, duration)
            logger.error(
                "Upstream returned an error status",
                extra={
                    'operation': operation,
                    'url': url,
                    'status_code': status_code,
                    'duration': duration
                }
            )
            raise UpstreamError(
                ErrorMessages.UPSTREAM_STATUS.format(status_code=status_code),
                status_code=status_code
            )

        record_upstream_call(operation, Metrics.OUTCOME_SUCCESS, duration)
        logger.debug(
            "Upstream request completed",
            extra={
                'operation': operation,
                'status_code': status_code,
                'duration': duration
            }
        )
        return response

    def _parse(self, model: type[EnvelopeT], response: httpx.Response, operation: str) -> EnvelopeT:
        """Validate an upstream body against its envelope model."""
        try:
            return model.model_validate(response.json())
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(
                "Upstream body did not match expected shape",
                extra={
                    'operation': operation,
                    'envelope': model.__name__,
                    'error': str(e)
                }
            )
            raise UpstreamResponseError(
                ErrorMessages.UPSTREAM_MALFORMED,
                detail=str(e),
                status_code=response.status_code
            ) from e
