"""Employee Endpoints.

RESTful API endpoints over the upstream employee directory.
Fixed paths are declared before `/{employee_id}` so they are matched first.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from ....core.logging import get_logger
from ....schemas.employee import Employee, EmployeeCreate, ErrorResponse
from ....services.employee_service import EmployeeService
from ...dependencies import get_employee_service

logger = get_logger(__name__)

router = APIRouter()

RATE_LIMITED_RESPONSE = {
    429: {"model": ErrorResponse, "description": "Upstream rate limit exceeded"}
}


@router.get(
    "",
    response_model=list[Employee],
    summary="List all employees",
    responses=RATE_LIMITED_RESPONSE
)
async def get_all_employees(
    service: EmployeeService = Depends(get_employee_service)
):
    """List every employee known to the upstream directory."""
    logger.info("Fetching all employees")
    return await service.get_all_employees()


@router.get(
    "/search/{search_string}",
    response_model=list[Employee],
    summary="Search employees by name",
    responses=RATE_LIMITED_RESPONSE
)
async def get_employees_by_name_search(
    search_string: str,
    service: EmployeeService = Depends(get_employee_service)
):
    """Employees whose name contains the fragment, ignoring case."""
    logger.info("Searching employees by name", extra={'search_string': search_string})
    return await service.search_by_name(search_string)


@router.get(
    "/highestSalary",
    response_model=int,
    summary="Highest salary among all employees",
    responses=RATE_LIMITED_RESPONSE
)
async def get_highest_salary_of_employees(
    service: EmployeeService = Depends(get_employee_service)
):
    """Highest salary, or 0 when there are no employees."""
    logger.info("Fetching highest salary")
    return await service.get_highest_salary()


@router.get(
    "/topTenHighestEarningEmployeeNames",
    response_model=list[str | None],
    summary="Names of the ten highest earners",
    responses=RATE_LIMITED_RESPONSE
)
async def get_top_ten_highest_earning_employee_names(
    service: EmployeeService = Depends(get_employee_service)
):
    logger.info("Fetching top 10 highest earning employee names")
    return await service.get_top_10_earners()


@router.get(
    "/{employee_id}",
    response_model=Employee,
    summary="Get employee details",
    responses={
        404: {"model": ErrorResponse, "description": "Employee not found"},
        **RATE_LIMITED_RESPONSE
    }
)
async def get_employee_by_id(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service)
):
    logger.info("Fetching employee by id", extra={'employee_id': employee_id})
    return await service.get_by_id(employee_id)


@router.post(
    "",
    response_model=Employee,
    status_code=status.HTTP_200_OK,
    summary="Create a new employee",
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        **RATE_LIMITED_RESPONSE
    }
)
async def create_employee(
    employee_input: EmployeeCreate,
    service: EmployeeService = Depends(get_employee_service)
):
    """Create an employee upstream.

    **Required fields:**
    - name: non-blank
    - title: non-blank
    - salary: positive integer
    - age: 16 to 75 inclusive
    """
    logger.info("Creating new employee", extra={'employee_name': employee_input.name})
    return await service.create_employee(employee_input)


@router.delete(
    "/{employee_id}",
    response_class=PlainTextResponse,
    summary="Delete an employee",
    responses={200: {"description": "`true` if upstream deleted the employee, else `false`"}}
)
async def delete_employee_by_id(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service)
):
    """Delete an employee by id.

    Always answers 200; the body is `true` or `false`.
    """
    logger.info("Deleting employee by id", extra={'employee_id': employee_id})
    deleted = await service.delete_by_id(employee_id)
    return PlainTextResponse(str(deleted).lower())
