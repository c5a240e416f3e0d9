"""Role API endpoints."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.errors import raise_for_failure
from app.api.v1.params import ListingParams
from app.domains.shared.result import ListResponse, ServiceResult
from app.domains.staff.schemas import RoleCreate, RoleResponse, RoleUpdate
from app.domains.staff.services import RoleService
from app.infra.database import get_db

router = APIRouter()


def get_role_service(
    session: AsyncSession = Depends(get_db),
) -> RoleService:
    """Dependency for getting RoleService."""
    return RoleService(session)


@router.get(
    "",
    response_model=ListResponse[RoleResponse],
    summary="List roles",
)
async def list_roles(
    params: ListingParams = Depends(),
    service: RoleService = Depends(get_role_service),
) -> ListResponse[RoleResponse]:
    """Get one page of roles; same query parameters as the employee listing."""
    result = raise_for_failure(await service.list_roles(**params.as_kwargs()))
    return result.data


@router.get("/all", response_model=list[RoleResponse], summary="Get every role")
async def list_all_roles(
    service: RoleService = Depends(get_role_service),
) -> list[RoleResponse]:
    result = raise_for_failure(await service.list_all_roles())
    return result.data


@router.get(
    "/employee",
    response_model=list[RoleResponse],
    summary="Get the roles of an employee",
)
async def list_roles_for_employee(
    employee_id: int = Query(..., alias="employeeId"),
    service: RoleService = Depends(get_role_service),
) -> list[RoleResponse]:
    result = raise_for_failure(await service.roles_for_employee(employee_id))
    return result.data


@router.get("/{role_id}", response_model=RoleResponse, summary="Get a role by ID")
async def get_role(
    role_id: int,
    service: RoleService = Depends(get_role_service),
) -> RoleResponse:
    result = raise_for_failure(await service.get_role(role_id))
    return result.data


@router.post(
    "",
    response_model=ServiceResult[RoleResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a role",
)
async def create_role(
    data: RoleCreate,
    service: RoleService = Depends(get_role_service),
) -> ServiceResult[RoleResponse]:
    return raise_for_failure(await service.create_role(data))


@router.put(
    "/{role_id}",
    response_model=ServiceResult[RoleResponse],
    summary="Rename a role",
)
async def update_role(
    role_id: int,
    data: RoleUpdate,
    service: RoleService = Depends(get_role_service),
) -> ServiceResult[RoleResponse]:
    return raise_for_failure(await service.update_role(role_id, data))


@router.delete(
    "/{role_id}",
    response_model=ServiceResult[None],
    summary="Delete a role",
)
async def delete_role(
    role_id: int,
    service: RoleService = Depends(get_role_service),
) -> ServiceResult[None]:
    """Delete a role. Fails with 400 while shifts are still worked in it."""
    return raise_for_failure(await service.delete_role(role_id))
