"""Repositories for the Staff domain - Data access layer using Generic Repository."""

from datetime import date
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.shared.repository import GenericRepository
from app.domains.staff.models import Employee, Role, Shift, employee_roles
from app.domains.staff.schemas import (
    EmployeeCreate,
    EmployeeUpdate,
    RoleCreate,
    RoleUpdate,
    ShiftCreate,
    ShiftUpdate,
)


class RoleRepository(GenericRepository[Role, RoleCreate, RoleUpdate]):
    """Repository for Role CRUD operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Role, session)

    async def get_by_ids(self, ids: Sequence[int]) -> Sequence[Role]:
        """Fetch the roles whose id is in ``ids``; missing ids are absent from the result."""
        if not ids:
            return []
        return await self.find_many(Role.id.in_(ids))

    async def find_by_employee(self, employee_id: int) -> Sequence[Role]:
        """Roles assigned to an employee."""
        stmt = (
            select(Role)
            .join(employee_roles, employee_roles.c.role_id == Role.id)
            .where(employee_roles.c.employee_id == employee_id)
            .order_by(Role.id)
        )
        result = await self._session.execute(stmt)
        return result.scalars().all()


class EmployeeRepository(GenericRepository[Employee, EmployeeCreate, EmployeeUpdate]):
    """Repository for Employee CRUD operations.

    ``Employee.roles`` is eager loaded with every employee.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Employee, session)

    async def find_all(self) -> Sequence[Employee]:
        """Every employee, ordered by id."""
        return await self.find_many()


class ShiftRepository(GenericRepository[Shift, ShiftCreate, ShiftUpdate]):
    """Repository for Shift CRUD operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Shift, session)

    async def find_for_employee_on_date(
        self,
        employee_id: int,
        start_date: date,
        *,
        exclude_id: int | None = None,
    ) -> Sequence[Shift]:
        """Shifts of one employee starting on a given date.

        Args:
            employee_id: The employee's id
            start_date: Date the shifts start on
            exclude_id: Shift id to leave out, e.g. the one being rescheduled
        """
        conditions = [Shift.employee_id == employee_id, Shift.start_date == start_date]
        if exclude_id is not None:
            conditions.append(Shift.id != exclude_id)
        return await self.find_many(*conditions, order_by=Shift.start_time)

    async def find_starting_between(self, first: date, last: date) -> Sequence[Shift]:
        """Shifts whose start date lies in ``[first, last]``."""
        return await self.find_many(
            Shift.start_date >= first,
            Shift.start_date <= last,
            order_by=[Shift.start_date, Shift.start_time],
        )
