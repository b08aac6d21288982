"""Pydantic Schemas for API Request/Response Validation.

These schemas handle validation and serialization for the public API and
the typed deserialization of the upstream employee directory envelopes.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.constants import EmployeeLimits, ErrorMessages


class Employee(BaseModel):
    """Employee record as exposed by this API.

    Records are fetched from upstream and never mutated locally.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str | None = None
    salary: int = Field(..., ge=0)
    age: int
    title: str | None = None
    email: str | None = None


class UpstreamEmployee(BaseModel):
    """Employee record in the upstream wire format."""
    model_config = ConfigDict(frozen=True)

    id: str
    employee_name: str | None = None
    employee_salary: int = Field(..., ge=0)
    employee_age: int
    employee_title: str | None = None
    employee_email: str | None = None

    def to_employee(self) -> Employee:
        """Translate the upstream field names to the public contract."""
        return Employee(
            id=self.id,
            name=self.employee_name,
            salary=self.employee_salary,
            age=self.employee_age,
            title=self.employee_title,
            email=self.employee_email,
        )


class EmployeeListEnvelope(BaseModel):
    """Upstream `{data: [...]}` envelope for the list endpoint."""
    data: list[UpstreamEmployee]


class EmployeeEnvelope(BaseModel):
    """Upstream `{data: {...}}` envelope for single-record endpoints."""
    data: UpstreamEmployee


class DeleteEnvelope(BaseModel):
    """Upstream `{data: true|false}` envelope for the delete endpoint."""
    data: Any = None

    @property
    def deleted(self) -> bool:
        """Only a literal boolean true counts as a successful delete."""
        return self.data is True


class EmployeeCreate(BaseModel):
    """Schema for creating a new employee.

    Validated before anything is sent upstream.
    """
    name: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    salary: int = Field(..., gt=0, strict=True)
    age: int = Field(..., ge=EmployeeLimits.MIN_AGE, le=EmployeeLimits.MAX_AGE, strict=True)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError(ErrorMessages.NAME_REQUIRED)
        return v

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError(ErrorMessages.TITLE_REQUIRED)
        return v

    def to_upstream_payload(self) -> dict[str, Any]:
        """Body for the upstream create call."""
        return self.model_dump()


class ErrorResponse(BaseModel):
    """Standard error response schema."""
    status: int
    message: str
