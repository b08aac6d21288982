from __future__ import annotations

from ..clients.employee_client import EmployeeClient
from ..core.constants import EmployeeLimits
from ..core.exceptions import EmployeeNotFoundError
from ..core.logging import get_logger
from ..schemas.employee import Employee, EmployeeCreate
from ..utils import fold_name

logger = get_logger(__name__)


class EmployeeService:
    """Employee queries and commands over the upstream directory.

    Aggregations (search, highest salary, top earners) are computed from a
    single freshly fetched list per call; nothing is cached between calls.
    """

    def __init__(self, client: EmployeeClient):
        self.client = client


    async def get_all_employees(self) -> list[Employee]:
        return await self.client.list_all()


    async def search_by_name(self, fragment: str) -> list[Employee]:
        """Return employees whose name contains `fragment`, ignoring case.

        Employees without a name never match.
        """
        needle = fold_name(fragment)
        matches = []
        for employee in await self.client.list_all():
            if employee.name is None:
                logger.warning(
                    "Skipping employee without a name during search",
                    extra={'employee_id': employee.id}
                )
                continue
            if needle in fold_name(employee.name):
                matches.append(employee)
        return matches


    async def get_by_id(self, employee_id: str) -> Employee:
        """Get an employee by id.

        Raises:
            EmployeeNotFoundError: If upstream has no such employee
        """
        employee = await self.client.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee


    async def get_highest_salary(self) -> int:
        """Highest salary across all employees, 0 when there are none."""
        employees = await self.client.list_all()
        return max((employee.salary for employee in employees), default=0)


    async def get_top_10_earners(self) -> list[str | None]:
        """Names of the highest earners, best paid first.

        `sorted` is stable, so equal salaries keep upstream order.
        """
        employees = await self.client.list_all()
        ranked = sorted(employees, key=lambda employee: employee.salary, reverse=True)
        return [employee.name for employee in ranked[:EmployeeLimits.TOP_EARNERS_LIMIT]]


    async def create_employee(self, request: EmployeeCreate) -> Employee:
        return await self.client.create(request)


    async def delete_by_id(self, employee_id: str) -> bool:
        return await self.client.delete_by_id(employee_id)
