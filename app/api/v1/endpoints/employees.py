"""Employee API endpoints."""

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.errors import raise_for_failure
from app.api.v1.params import ListingParams
from app.domains.shared.result import ListResponse, ServiceResult
from app.domains.staff.schemas import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeSummary,
    EmployeeUpdate,
)
from app.domains.staff.services import EmployeeService
from app.infra.database import get_db

router = APIRouter()


def get_employee_service(
    session: AsyncSession = Depends(get_db),
) -> EmployeeService:
    """Dependency for getting EmployeeService."""
    return EmployeeService(session)


# ==================== Read Endpoints ====================


@router.get(
    "",
    response_model=ListResponse[EmployeeResponse],
    summary="List employees",
    description="""
    Filtered, sorted, paginated employee listing.

    - `globalFilter`: case-sensitive substring matched against first and last name
    - `filters`: `[{"id": "lastName", "value": "Smith"}]`, all must match
    - `sorting`: `[{"id": "firstName", "desc": true}]`
    - `meta.totalRowCount` counts matches before pagination
    """,
)
async def list_employees(
    params: ListingParams = Depends(),
    service: EmployeeService = Depends(get_employee_service),
) -> ListResponse[EmployeeResponse]:
    """Get one page of employees with their roles."""
    result = raise_for_failure(await service.list_employees(**params.as_kwargs()))
    return result.data


@router.get(
    "/dropdown",
    response_model=list[EmployeeSummary],
    summary="Employees for pickers",
)
async def list_employees_for_dropdown(
    service: EmployeeService = Depends(get_employee_service),
) -> list[EmployeeSummary]:
    """Id and name of every employee."""
    result = raise_for_failure(await service.list_for_dropdown())
    return result.data


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    summary="Get an employee by ID",
)
async def get_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeResponse:
    result = raise_for_failure(await service.get_employee(employee_id))
    return result.data


# ==================== Write Endpoints ====================


@router.post(
    "",
    response_model=ServiceResult[EmployeeResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create an employee",
)
async def create_employee(
    data: EmployeeCreate,
    service: EmployeeService = Depends(get_employee_service),
) -> ServiceResult[EmployeeResponse]:
    """Create an employee. Unknown ids in ``role_ids`` are ignored."""
    return raise_for_failure(await service.create_employee(data))


@router.put(
    "/{employee_id}",
    response_model=ServiceResult[EmployeeResponse],
    summary="Update an employee",
)
async def update_employee(
    employee_id: int,
    data: EmployeeUpdate,
    service: EmployeeService = Depends(get_employee_service),
) -> ServiceResult[EmployeeResponse]:
    return raise_for_failure(await service.update_employee(employee_id, data))


@router.delete(
    "/{employee_id}",
    response_model=ServiceResult[None],
    summary="Delete an employee",
)
async def delete_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
) -> ServiceResult[None]:
    """Delete an employee. Fails with 400 while the employee still has shifts."""
    return raise_for_failure(await service.delete_employee(employee_id))


@router.post(
    "/{employee_id}/roles",
    response_model=ServiceResult[EmployeeResponse],
    summary="Add roles to an employee",
)
async def add_roles_to_employee(
    employee_id: int,
    role_ids: list[int] = Body(..., min_length=1),
    service: EmployeeService = Depends(get_employee_service),
) -> ServiceResult[EmployeeResponse]:
    """Grant roles to an employee. Every id must name an existing role."""
    return raise_for_failure(await service.add_roles(employee_id, role_ids))
