"""Employee management service."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.shared.listing import list_entities
from app.domains.shared.query_engine import DynamicQueryEngine
from app.domains.shared.result import FailureKind, ListResponse, ServiceResult
from app.domains.staff.repository import EmployeeRepository, RoleRepository
from app.domains.staff.schemas import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeSummary,
    EmployeeUpdate,
)

logger = logging.getLogger(__name__)

EMPLOYEE_NOT_FOUND = "Employee not found."


class EmployeeService:
    """Service for Employee business logic.

    Owns employee CRUD and role assignment; listing goes through the
    dynamic query engine.
    """

    def __init__(
        self,
        session: AsyncSession,
        query_engine: DynamicQueryEngine | None = None,
    ) -> None:
        self.session = session
        self.repository = EmployeeRepository(session)
        self.role_repository = RoleRepository(session)
        self.query_engine = query_engine or DynamicQueryEngine()

    # ==================== Read Operations ====================

    async def list_employees(
        self,
        *,
        start: int = 0,
        size: int = 10,
        global_filter: str | None = None,
        filters: str | None = None,
        sorting: str | None = None,
    ) -> ServiceResult[ListResponse[EmployeeResponse]]:
        """Filtered, sorted, paginated employee listing with roles."""
        return await list_entities(
            self.repository,
            self.query_engine,
            EmployeeResponse.model_validate,
            start=start,
            size=size,
            global_filter=global_filter,
            filters=filters,
            sorting=sorting,
            load_relations=["roles"],
        )

    async def get_employee(self, employee_id: int) -> ServiceResult[EmployeeResponse]:
        """Get one employee with their roles."""
        try:
            employee = await self.repository.get_by_id(employee_id, load_relations=["roles"])
        except SQLAlchemyError as exc:
            logger.exception("Failed to load employee %s", employee_id)
            return ServiceResult.failure(
                str(exc), "An error occurred while loading the employee.", FailureKind.PERSISTENCE
            )

        if employee is None:
            logger.warning("Employee %s not found", employee_id)
            return ServiceResult.failure(EMPLOYEE_NOT_FOUND, kind=FailureKind.NOT_FOUND)
        return ServiceResult.success(EmployeeResponse.model_validate(employee))

    async def list_for_dropdown(self) -> ServiceResult[list[EmployeeSummary]]:
        """Id and name of every employee."""
        try:
            employees = await self.repository.find_all()
        except SQLAlchemyError as exc:
            logger.exception("Failed to load employees")
            return ServiceResult.failure(
                str(exc), "An error occurred while loading employees.", FailureKind.PERSISTENCE
            )

        return ServiceResult.success([EmployeeSummary.model_validate(e) for e in employees])

    # ==================== Write Operations ====================

    async def create_employee(self, data: EmployeeCreate) -> ServiceResult[EmployeeResponse]:
        """Create an employee, attaching whichever of ``role_ids`` exist."""
        try:
            roles = await self.role_repository.get_by_ids(data.role_ids)
            employee = await self.repository.create(
                {
                    "first_name": data.first_name,
                    "last_name": data.last_name,
                    "roles": list(roles),
                }
            )
            await self.repository.commit()
        except SQLAlchemyError as exc:
            await self.repository.rollback()
            logger.exception("Failed to create employee")
            return ServiceResult.failure(
                str(exc), "An error occurred while creating the employee.", FailureKind.PERSISTENCE
            )

        logger.info("Created employee %s", employee.id)
        return ServiceResult.success(
            EmployeeResponse.model_validate(employee), "Employee created successfully."
        )

    async def update_employee(
        self, employee_id: int, data: EmployeeUpdate
    ) -> ServiceResult[EmployeeResponse]:
        try:
            employee = await self.repository.update(employee_id, data)
            if employee is None:
                logger.warning("Cannot update employee %s: not found", employee_id)
                return ServiceResult.failure(EMPLOYEE_NOT_FOUND, kind=FailureKind.NOT_FOUND)
            await self.repository.commit()
        except SQLAlchemyError as exc:
            await self.repository.rollback()
            logger.exception("Failed to update employee %s", employee_id)
            return ServiceResult.failure(
                str(exc), "An error occurred while updating the employee.", FailureKind.PERSISTENCE
            )

        logger.info("Updated employee %s", employee_id)
        return ServiceResult.success(
            EmployeeResponse.model_validate(employee), "Employee updated successfully."
        )

    async def delete_employee(self, employee_id: int) -> ServiceResult[None]:
        """Delete an employee. Fails while shifts still reference them."""
        try:
            deleted = await self.repository.delete(employee_id)
            if not deleted:
                logger.warning("Cannot delete employee %s: not found", employee_id)
                return ServiceResult.failure(
                    EMPLOYEE_NOT_FOUND, "Failed to delete employee", FailureKind.NOT_FOUND
                )
            await self.repository.commit()
        except SQLAlchemyError as exc:
            await self.repository.rollback()
            logger.exception("Failed to delete employee %s", employee_id)
            return ServiceResult.failure(
                str(exc), "An error occurred while deleting the employee.", FailureKind.PERSISTENCE
            )

        logger.info("Deleted employee %s", employee_id)
        return ServiceResult.success(message="Employee deleted successfully.")

    async def add_roles(
        self, employee_id: int, role_ids: list[int]
    ) -> ServiceResult[EmployeeResponse]:
        """Grant roles to an employee.

        Every id must name an existing role; roles already held are kept once.
        """
        wanted = list(dict.fromkeys(role_ids))
        try:
            employee = await self.repository.get_by_id(employee_id, load_relations=["roles"])
            if employee is None:
                logger.warning("Cannot add roles to employee %s: not found", employee_id)
                return ServiceResult.failure(EMPLOYEE_NOT_FOUND, kind=FailureKind.NOT_FOUND)

            roles = await self.role_repository.get_by_ids(wanted)
            if len(roles) != len(wanted):
                logger.warning(
                    "Cannot add roles %s to employee %s: unknown role ids", wanted, employee_id
                )
                return ServiceResult.failure(
                    "One or more roles not found.", kind=FailureKind.NOT_FOUND
                )

            held = {role.id for role in employee.roles}
            for role in roles:
                if role.id not in held:
                    employee.roles.append(role)

            await self.session.flush()
            await self.repository.commit()
        except SQLAlchemyError as exc:
            await self.repository.rollback()
            logger.exception("Failed to add roles to employee %s", employee_id)
            return ServiceResult.failure(
                str(exc),
                "An error occurred while adding roles to the employee.",
                FailureKind.PERSISTENCE,
            )

        logger.info("Employee %s now holds roles %s", employee_id, [r.id for r in employee.roles])
        return ServiceResult.success(
            EmployeeResponse.model_validate(employee), "Roles added successfully."
        )
