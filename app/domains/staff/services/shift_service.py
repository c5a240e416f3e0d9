"""Shift scheduling service.

Creating or rescheduling a shift locks the employee row, checks the new
time range against the employee's other shifts on the same start date and
only then writes. Back-to-back shifts are allowed.
"""

import logging
from collections import defaultdict
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.shared.listing import list_entities
from app.domains.shared.query_engine import DynamicQueryEngine
from app.domains.shared.result import FailureKind, ListResponse, ServiceResult
from app.domains.staff.overlap import ShiftInterval, overlaps
from app.domains.staff.repository import EmployeeRepository, RoleRepository, ShiftRepository
from app.domains.staff.schemas import (
    EmployeeShiftsResponse,
    ShiftCreate,
    ShiftResponse,
    ShiftTimes,
    ShiftUpdate,
)

logger = logging.getLogger(__name__)

OVERLAP_MESSAGE = "The shift overlaps with an existing shift for this employee."
SHIFT_NOT_FOUND = "Shift not found."
ROLE_NOT_FOUND = "Role not found."


class ShiftService:
    """Service for Shift business logic."""

    def __init__(
        self,
        session: AsyncSession,
        query_engine: DynamicQueryEngine | None = None,
    ) -> None:
        self.session = session
        self.repository = ShiftRepository(session)
        self.employee_repository = EmployeeRepository(session)
        self.role_repository = RoleRepository(session)
        self.query_engine = query_engine or DynamicQueryEngine()

    # ==================== Read Operations ====================

    async def list_shifts(
        self,
        *,
        start: int = 0,
        size: int = 10,
        global_filter: str | None = None,
        filters: str | None = None,
        sorting: str | None = None,
    ) -> ServiceResult[ListResponse[ShiftResponse]]:
        """Filtered, sorted, paginated shift listing.

        Shifts have no text columns, so a global filter matches nothing.
        """
        return await list_entities(
            self.repository,
            self.query_engine,
            ShiftResponse.from_shift,
            start=start,
            size=size,
            global_filter=global_filter,
            filters=filters,
            sorting=sorting,
        )

    async def get_shift(self, shift_id: int) -> ServiceResult[ShiftResponse]:
        try:
            shift = await self.repository.get_by_id(shift_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load shift %s", shift_id)
            return ServiceResult.failure(
                str(exc), "An error occurred while loading the shift.", FailureKind.PERSISTENCE
            )

        if shift is None:
            logger.warning("Shift %s not found", shift_id)
            return ServiceResult.failure(SHIFT_NOT_FOUND, kind=FailureKind.NOT_FOUND)
        return ServiceResult.success(ShiftResponse.from_shift(shift))

    async def shifts_for_week(
        self, start_of_week: date, end_of_week: date
    ) -> ServiceResult[list[EmployeeShiftsResponse]]:
        """Every employee with the shifts starting within ``[start_of_week, end_of_week]``."""
        if end_of_week < start_of_week:
            return ServiceResult.failure(
                "endOfWeek must be on or after startOfWeek.", kind=FailureKind.INVALID
            )

        try:
            employees = await self.employee_repository.find_all()
            shifts = await self.repository.find_starting_between(start_of_week, end_of_week)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load shifts for %s..%s", start_of_week, end_of_week)
            return ServiceResult.failure(
                str(exc),
                "An error occurred while fetching shifts for the week.",
                FailureKind.PERSISTENCE,
            )

        by_employee: dict[int, list[ShiftResponse]] = defaultdict(list)
        for shift in shifts:
            by_employee[shift.employee_id].append(ShiftResponse.from_shift(shift))

        week = [
            EmployeeShiftsResponse(
                id=employee.id,
                first_name=employee.first_name,
                last_name=employee.last_name,
                shifts=by_employee.get(employee.id, []),
            )
            for employee in employees
        ]
        return ServiceResult.success(week)

    # ==================== Write Operations ====================

    async def create_shift(self, data: ShiftCreate) -> ServiceResult[ShiftResponse]:
        """Schedule a new shift unless it overlaps one of the employee's shifts."""
        try:
            rejection = await self._check_overlap(data.employee_id, data)
            if rejection is not None:
                return rejection

            role = await self.role_repository.get_by_id(data.role_id)
            if role is None:
                logger.warning("Cannot schedule shift: role %s not found", data.role_id)
                return ServiceResult.failure(ROLE_NOT_FOUND, kind=FailureKind.NOT_FOUND)

            shift = await self.repository.create(data)
            await self.repository.commit()
        except SQLAlchemyError as exc:
            await self.repository.rollback()
            logger.exception("Failed to create shift for employee %s", data.employee_id)
            return ServiceResult.failure(
                str(exc), "An error occurred while adding the shift.", FailureKind.PERSISTENCE
            )

        logger.info(
            "Created shift %s for employee %s on %s %s-%s",
            shift.id,
            shift.employee_id,
            shift.start_date,
            shift.start_time,
            shift.end_time,
        )
        return ServiceResult.success(
            ShiftResponse.from_shift(shift, role.name), "Shift added successfully."
        )

    async def update_shift(self, shift_id: int, data: ShiftUpdate) -> ServiceResult[ShiftResponse]:
        """Reschedule a shift; its own current slot does not count as a conflict."""
        try:
            shift = await self.repository.get_by_id(shift_id)
            if shift is None:
                logger.warning("Cannot update shift %s: not found", shift_id)
                return ServiceResult.failure(SHIFT_NOT_FOUND, kind=FailureKind.NOT_FOUND)

            rejection = await self._check_overlap(shift.employee_id, data, exclude_id=shift_id)
            if rejection is not None:
                return rejection

            role = await self.role_repository.get_by_id(data.role_id)
            if role is None:
                logger.warning("Cannot schedule shift: role %s not found", data.role_id)
                return ServiceResult.failure(ROLE_NOT_FOUND, kind=FailureKind.NOT_FOUND)

            updated = await self.repository.update(shift_id, data)
            await self.repository.commit()
        except SQLAlchemyError as exc:
            await self.repository.rollback()
            logger.exception("Failed to update shift %s", shift_id)
            return ServiceResult.failure(
                str(exc), "An error occurred while updating the shift.", FailureKind.PERSISTENCE
            )

        logger.info("Updated shift %s", shift_id)
        return ServiceResult.success(
            ShiftResponse.from_shift(updated, role.name), "Shift updated successfully."
        )

    async def delete_shift(self, shift_id: int) -> ServiceResult[None]:
        try:
            deleted = await self.repository.delete(shift_id)
            if not deleted:
                logger.warning("Cannot delete shift %s: not found", shift_id)
                return ServiceResult.failure(
                    SHIFT_NOT_FOUND, "Failed to delete shift", FailureKind.NOT_FOUND
                )
            await self.repository.commit()
        except SQLAlchemyError as exc:
            await self.repository.rollback()
            logger.exception("Failed to delete shift %s", shift_id)
            return ServiceResult.failure(
                str(exc), "An error occurred while deleting the shift.", FailureKind.PERSISTENCE
            )

        logger.info("Deleted shift %s", shift_id)
        return ServiceResult.success(message="Shift deleted successfully.")

    # ==================== Helper Methods ====================

    async def _check_overlap(
        self,
        employee_id: int,
        times: ShiftTimes,
        *,
        exclude_id: int | None = None,
    ) -> ServiceResult[ShiftResponse] | None:
        """Return a failed result if the employee is missing or busy, else None.

        Holds a lock on the employee row so concurrent writers for the same
        employee check and insert one at a time.
        """
        employee = await self.employee_repository.get_for_update(employee_id)
        if employee is None:
            logger.warning("Cannot schedule shift: employee %s not found", employee_id)
            return ServiceResult.failure("Employee not found.", kind=FailureKind.NOT_FOUND)

        candidate = ShiftInterval(employee_id, times.start_date, times.start_time, times.end_time)
        existing = await self.repository.find_for_employee_on_date(
            employee_id, times.start_date, exclude_id=exclude_id
        )
        if overlaps(candidate, (ShiftInterval.from_shift(s) for s in existing)):
            logger.warning(
                "Rejected shift for employee %s on %s %s-%s: overlap",
                employee_id,
                times.start_date,
                times.start_time,
                times.end_time,
            )
            return ServiceResult.failure(OVERLAP_MESSAGE, OVERLAP_MESSAGE, FailureKind.CONFLICT)
        return None
