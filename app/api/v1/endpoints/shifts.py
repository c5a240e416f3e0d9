"""Shift API endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.errors import raise_for_failure
from app.api.v1.params import ListingParams
from app.domains.shared.result import ListResponse, ServiceResult
from app.domains.staff.schemas import (
    EmployeeShiftsResponse,
    ShiftCreate,
    ShiftResponse,
    ShiftUpdate,
)
from app.domains.staff.services import ShiftService
from app.infra.database import get_db

router = APIRouter()


def get_shift_service(
    session: AsyncSession = Depends(get_db),
) -> ShiftService:
    """Dependency for getting ShiftService."""
    return ShiftService(session)


# ==================== Read Endpoints ====================


@router.get(
    "",
    response_model=ListResponse[ShiftResponse],
    summary="List shifts",
)
async def list_shifts(
    params: ListingParams = Depends(),
    service: ShiftService = Depends(get_shift_service),
) -> ListResponse[ShiftResponse]:
    """Get one page of shifts.

    Filter by exact value, e.g. `[{"id": "RoleId", "value": "2"}]` or
    `[{"id": "startDate", "value": "2024-05-01"}]`.
    """
    result = raise_for_failure(await service.list_shifts(**params.as_kwargs()))
    return result.data


@router.get(
    "/week",
    response_model=list[EmployeeShiftsResponse],
    summary="Shifts of every employee for a week",
)
async def list_shifts_for_week(
    start_of_week: date = Query(..., alias="startOfWeek"),
    end_of_week: date = Query(..., alias="endOfWeek"),
    service: ShiftService = Depends(get_shift_service),
) -> list[EmployeeShiftsResponse]:
    """Every employee with the shifts starting between the two dates, inclusive."""
    result = raise_for_failure(await service.shifts_for_week(start_of_week, end_of_week))
    return result.data


@router.get("/{shift_id}", response_model=ShiftResponse, summary="Get a shift by ID")
async def get_shift(
    shift_id: int,
    service: ShiftService = Depends(get_shift_service),
) -> ShiftResponse:
    result = raise_for_failure(await service.get_shift(shift_id))
    return result.data


# ==================== Write Endpoints ====================


@router.post(
    "",
    response_model=ServiceResult[ShiftResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Schedule a shift",
    description="""
    Schedule a shift for an employee.

    Returns 409 if the shift overlaps another shift of the same employee
    starting on the same date. Back-to-back shifts (one ending at 17:00,
    the next starting at 17:00) do not overlap.
    """,
)
async def create_shift(
    data: ShiftCreate,
    service: ShiftService = Depends(get_shift_service),
) -> ServiceResult[ShiftResponse]:
    return raise_for_failure(await service.create_shift(data))


@router.put(
    "/{shift_id}",
    response_model=ServiceResult[ShiftResponse],
    summary="Reschedule a shift",
)
async def update_shift(
    shift_id: int,
    data: ShiftUpdate,
    service: ShiftService = Depends(get_shift_service),
) -> ServiceResult[ShiftResponse]:
    """Change the role, dates and times of a shift; 409 on overlap."""
    return raise_for_failure(await service.update_shift(shift_id, data))


@router.delete(
    "/{shift_id}",
    response_model=ServiceResult[None],
    summary="Delete a shift",
)
async def delete_shift(
    shift_id: int,
    service: ShiftService = Depends(get_shift_service),
) -> ServiceResult[None]:
    return raise_for_failure(await service.delete_shift(shift_id))
